"""Sample-domain combination of two PCM WAV streams.

- merge: interleave two streams frame by frame into one stereo stream,
  padding the shorter side with silence.
- concat: write one stream's payload after the other's.

Both write the output header first and then the payload in a single forward
pass. Inputs are rewound to the first payload byte before being read; the
output is never seeked.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING, Optional

from pcmwav.config import settings
from pcmwav.core.audio.errors import (
    NotMonoError,
    NotValidatedError,
)
from pcmwav.core.audio.header import (
    HEADER_SIZE,
    MONO,
    STEREO,
    build_header,
    encode_header,
)
from pcmwav.core.audio.validator import check_compatible
from pcmwav.core.cancel_token import CancelToken

if TYPE_CHECKING:
    from pcmwav.core.audio.handle import ByteSink, ByteSource, PCMAudio

logger = logging.getLogger(__name__)

__all__ = ["merge", "concat"]


def _ensure_validated(left: "PCMAudio", right: "PCMAudio") -> None:
    if not left.valid or not right.valid:
        raise NotValidatedError()


def _check_cancelled(cancel_token: Optional[CancelToken]) -> None:
    if cancel_token is not None:
        cancel_token.raise_if_cancelled()


def _read_frame(source: "ByteSource", sample_size: int) -> bytes:
    """Read one sample; anything shorter than a full sample counts as exhausted."""
    data = source.read(sample_size)
    if not data or len(data) < sample_size:
        if data:
            logger.warning(f"Dropping partial trailing sample ({len(data)}/{sample_size} bytes)")
        return b""
    return data


def merge(
    left: "PCMAudio",
    right: "PCMAudio",
    output: "ByteSink",
    *,
    cancel_token: Optional[CancelToken] = None,
    require_mono: Optional[bool] = None,
) -> int:
    """Interleave ``left`` and ``right`` into a stereo stream written to ``output``.

    Each output frame is one sample of ``left`` followed by one sample of
    ``right``. When one side runs out first its samples are replaced by
    zeros until the other side is exhausted too.

    The declared data size is the sum of both inputs' declared data sizes.

    Args:
        left: validated handle for the first channel
        right: validated handle for the second channel
        output: writable sink, receives header then samples
        cancel_token: polled once per output frame
        require_mono: reject inputs that are not mono; defaults to
            ``settings.merge_require_mono``

    Returns:
        Number of stereo frames written.
    """
    _ensure_validated(left, right)
    check_compatible(left.header, right.header, match_channels=False)

    if require_mono is None:
        require_mono = settings.merge_require_mono
    if require_mono and (left.num_channels != MONO or right.num_channels != MONO):
        raise NotMonoError(left.num_channels, right.num_channels)

    sample_size = left.header.bytes_per_sample
    header = build_header(
        num_channels=STEREO,
        sample_rate=left.sample_rate,
        bits_per_sample=left.bits_per_sample,
        data_size=left.subchunk2_size + right.subchunk2_size,
    )
    output.write(encode_header(header))

    left.source.seek(HEADER_SIZE)
    right.source.seek(HEADER_SIZE)

    silence = bytes(sample_size)
    frames = 0
    left_padded = 0
    right_padded = 0
    left_done = sample_size == 0
    right_done = sample_size == 0

    while True:
        _check_cancelled(cancel_token)

        left_frame = b"" if left_done else _read_frame(left.source, sample_size)
        right_frame = b"" if right_done else _read_frame(right.source, sample_size)
        left_done = left_done or not left_frame
        right_done = right_done or not right_frame

        if left_done and right_done:
            break

        if left_frame:
            output.write(left_frame)
        else:
            output.write(silence)
            left_padded += 1

        if right_frame:
            output.write(right_frame)
        else:
            output.write(silence)
            right_padded += 1

        frames += 1

    if left_padded or right_padded:
        logger.warning(
            f"Streams differ in length, padded {left_padded} left / {right_padded} right samples with silence"
        )
    logger.info(
        f"Merged into {frames} stereo frames "
        f"({header.sample_rate}Hz, {header.bits_per_sample}-bit, data_size={header.subchunk2_size})"
    )
    return frames


def _copy_payload(
    source: "ByteSource",
    output: "ByteSink",
    chunk_size: int,
    cancel_token: Optional[CancelToken],
) -> int:
    copied = 0
    while True:
        _check_cancelled(cancel_token)
        chunk = source.read(chunk_size)
        if not chunk:
            return copied
        output.write(chunk)
        copied += len(chunk)


def concat(
    left: "PCMAudio",
    right: "PCMAudio",
    output: "ByteSink",
    *,
    cancel_token: Optional[CancelToken] = None,
    chunk_size: Optional[int] = None,
) -> int:
    """Write ``left``'s payload followed by ``right``'s payload to ``output``.

    Both inputs must share sample rate, bit depth and channel count. The
    output keeps ``left``'s channel layout, block align and byte rate.

    Returns:
        Number of payload bytes written (header excluded).
    """
    _ensure_validated(left, right)
    check_compatible(left.header, right.header, match_channels=True)

    if chunk_size is None:
        chunk_size = settings.copy_chunk_size
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    header = build_header(
        num_channels=left.num_channels,
        sample_rate=left.sample_rate,
        bits_per_sample=left.bits_per_sample,
        data_size=left.subchunk2_size + right.subchunk2_size,
    )
    header = dataclasses.replace(
        header,
        block_align=left.block_align,
        byte_rate=left.byte_rate,
    )
    output.write(encode_header(header))

    left.source.seek(HEADER_SIZE)
    right.source.seek(HEADER_SIZE)

    written = _copy_payload(left.source, output, chunk_size, cancel_token)
    written += _copy_payload(right.source, output, chunk_size, cancel_token)

    logger.info(
        f"Concatenated {written} payload bytes "
        f"({header.num_channels}ch, {header.sample_rate}Hz, {header.bits_per_sample}-bit)"
    )
    return written
