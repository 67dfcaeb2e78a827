"""PCM WAV audio handle.

A ``PCMAudio`` couples a decoded header with the seekable byte source it came
from. The source is borrowed, not owned: the caller opens and closes it and
must keep it alive while the handle is in use.

Usage:
    with open("left.wav", "rb") as lf, open("right.wav", "rb") as rf, open("out.wav", "wb") as out:
        left, right = PCMAudio(lf), PCMAudio(rf)
        left.validate()
        right.validate()
        left.merge(right, out)
"""

from __future__ import annotations

import logging
from dataclasses import fields
from typing import Any, Optional, Protocol

import numpy as np

from pcmwav.core.audio import combiner
from pcmwav.core.audio.header import HEADER_SIZE, WavHeader, decode_header
from pcmwav.core.audio.validator import validate_header
from pcmwav.core.cancel_token import CancelToken

logger = logging.getLogger(__name__)

__all__ = ["ByteSource", "ByteSink", "PCMAudio"]

_HEADER_FIELDS = frozenset(f.name for f in fields(WavHeader))

_SAMPLE_DTYPES = {
    8: np.dtype("u1"),
    16: np.dtype("<i2"),
    32: np.dtype("<i4"),
}


class ByteSource(Protocol):
    """Anything that can seek to an offset and read the next N bytes."""

    def read(self, size: int = -1) -> bytes: ...

    def seek(self, offset: int, whence: int = 0) -> int: ...


class ByteSink(Protocol):
    def write(self, data: bytes) -> Any: ...


class PCMAudio:
    """Decoded header plus a borrowed reference to its sample payload."""

    def __init__(self, source: ByteSource):
        """
        Args:
            source: seekable byte source positioned at the start of the header

        Raises:
            DecodeError: the header could not be read
        """
        self.header: WavHeader = decode_header(source)
        self.source = source
        self.valid = False

    def __getattr__(self, name: str) -> Any:
        header = self.__dict__.get("header")
        if header is not None and name in _HEADER_FIELDS:
            return getattr(header, name)
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def __repr__(self) -> str:
        h = self.header
        return (
            f"PCMAudio(channels={h.num_channels}, sample_rate={h.sample_rate}, "
            f"bits_per_sample={h.bits_per_sample}, data_size={h.subchunk2_size}, valid={self.valid})"
        )

    def validate(self) -> bool:
        """Validate the header and mark the handle usable for merge/concat.

        Raises:
            ValidationError: the specific check that failed; ``valid`` stays False
        """
        validate_header(self.header)
        self.valid = True
        logger.debug(f"Validated {self!r}")
        return True

    def merge(
        self,
        other: "PCMAudio",
        output: ByteSink,
        *,
        cancel_token: Optional[CancelToken] = None,
        require_mono: Optional[bool] = None,
    ) -> int:
        """Interleave this (left channel) with ``other`` (right channel) into ``output``."""
        return combiner.merge(
            self,
            other,
            output,
            cancel_token=cancel_token,
            require_mono=require_mono,
        )

    def concat(
        self,
        other: "PCMAudio",
        output: ByteSink,
        *,
        cancel_token: Optional[CancelToken] = None,
        chunk_size: Optional[int] = None,
    ) -> int:
        """Write this payload followed by ``other``'s payload into ``output``."""
        return combiner.concat(
            self,
            other,
            output,
            cancel_token=cancel_token,
            chunk_size=chunk_size,
        )

    def read_frames(self) -> np.ndarray:
        """Load the whole payload as an integer array of shape (frames, channels).

        8-bit samples are unsigned, 16- and 32-bit samples are signed
        little-endian. A trailing partial frame is dropped.
        """
        dtype = _SAMPLE_DTYPES.get(self.header.bits_per_sample)
        if dtype is None:
            raise ValueError(f"Unsupported bits_per_sample={self.header.bits_per_sample}")

        channels = max(1, self.header.num_channels)
        self.source.seek(HEADER_SIZE)
        data = self.source.read()

        frame_bytes = dtype.itemsize * channels
        usable = len(data) - len(data) % frame_bytes
        if usable != len(data):
            logger.warning(f"Ignoring {len(data) - usable} trailing bytes (partial frame)")

        return np.frombuffer(data[:usable], dtype=dtype).reshape(-1, channels)
