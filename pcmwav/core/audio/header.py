"""Canonical 44-byte RIFF/WAVE PCM header.

The header is read and written field by field in little-endian order, so the
layout never depends on in-memory struct padding:

    offset  size  field
    0       4     chunk_id        "RIFF"
    4       4     chunk_size      file size - 8
    8       4     format          "WAVE"
    12      4     subchunk1_id    "fmt "
    16      4     subchunk1_size  16 for PCM
    20      2     audio_format    1 for PCM
    22      2     num_channels
    24      4     sample_rate
    28      4     byte_rate       sample_rate * block_align
    32      2     block_align     num_channels * bits_per_sample / 8
    34      2     bits_per_sample
    36      4     subchunk2_id    "data"
    40      4     subchunk2_size  payload size in bytes
"""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass

from pcmwav.core.audio.errors import DecodeError

logger = logging.getLogger(__name__)

__all__ = [
    "HEADER_SIZE",
    "RIFF",
    "WAVE",
    "FMT",
    "DATA",
    "PCM_SUBCHUNK1_SIZE",
    "PCM_AUDIO_FORMAT",
    "MONO",
    "STEREO",
    "WavHeader",
    "decode_header",
    "encode_header",
    "build_header",
]

HEADER_FORMAT = "<4sI4s4sIHHIIHH4sI"
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)

RIFF = b"RIFF"
WAVE = b"WAVE"
FMT = b"fmt "
DATA = b"data"
PCM_SUBCHUNK1_SIZE = 16
PCM_AUDIO_FORMAT = 1
MONO, STEREO = 1, 2

# chunk_size counts everything after its own field: 4 (WAVE) + 24 (fmt) + 8 (data header).
RIFF_OVERHEAD = HEADER_SIZE - 8

UINT32_MASK = 0xFFFFFFFF


@dataclass
class WavHeader:
    """Decoded header fields. Tags are kept as raw 4-byte strings."""

    chunk_id: bytes
    chunk_size: int
    format: bytes
    subchunk1_id: bytes
    subchunk1_size: int
    audio_format: int
    num_channels: int
    sample_rate: int
    byte_rate: int
    block_align: int
    bits_per_sample: int
    subchunk2_id: bytes
    subchunk2_size: int

    @property
    def bytes_per_sample(self) -> int:
        return self.bits_per_sample // 8

    @property
    def frame_count(self) -> int:
        """Number of whole frames the data chunk declares."""
        if self.block_align <= 0:
            return 0
        return self.subchunk2_size // self.block_align

    @property
    def duration_seconds(self) -> float:
        if self.sample_rate <= 0:
            return 0.0
        return float(self.frame_count) / float(self.sample_rate)


def decode_header(source) -> WavHeader:
    """Read exactly 44 bytes from ``source`` and unpack them.

    No semantic checks are made here; tags may hold anything.

    Raises:
        DecodeError: fewer than 44 bytes are available or the read fails.
    """
    try:
        raw = source.read(HEADER_SIZE)
    except OSError as e:
        raise DecodeError(f"could not read and parse the received data: {e}") from e

    if raw is None or len(raw) < HEADER_SIZE:
        got = 0 if raw is None else len(raw)
        raise DecodeError(
            f"could not read and parse the received data: expected {HEADER_SIZE} bytes, got {got}"
        )

    header = WavHeader(*struct.unpack(HEADER_FORMAT, raw))
    logger.debug(f"Decoded header: {header}")
    return header


def encode_header(header: WavHeader) -> bytes:
    """Pack ``header`` into its 44-byte wire form (inverse of ``decode_header``)."""
    return struct.pack(
        HEADER_FORMAT,
        header.chunk_id,
        header.chunk_size,
        header.format,
        header.subchunk1_id,
        header.subchunk1_size,
        header.audio_format,
        header.num_channels,
        header.sample_rate,
        header.byte_rate,
        header.block_align,
        header.bits_per_sample,
        header.subchunk2_id,
        header.subchunk2_size,
    )


def build_header(
    *,
    num_channels: int,
    sample_rate: int,
    bits_per_sample: int,
    data_size: int,
) -> WavHeader:
    """Create a canonical PCM header with every derived field filled in.

    Sizes wrap as unsigned 32-bit values; overflow is not detected.
    """
    block_align = num_channels * (bits_per_sample // 8)
    data_size &= UINT32_MASK
    return WavHeader(
        chunk_id=RIFF,
        chunk_size=(RIFF_OVERHEAD + data_size) & UINT32_MASK,
        format=WAVE,
        subchunk1_id=FMT,
        subchunk1_size=PCM_SUBCHUNK1_SIZE,
        audio_format=PCM_AUDIO_FORMAT,
        num_channels=num_channels,
        sample_rate=sample_rate,
        byte_rate=(sample_rate * block_align) & UINT32_MASK,
        block_align=block_align,
        bits_per_sample=bits_per_sample,
        subchunk2_id=DATA,
        subchunk2_size=data_size,
    )
