from __future__ import annotations

import logging

from pcmwav.core.audio.errors import (
    BitDepthMismatchError,
    ChannelCountMismatchError,
    InvalidDataChunkError,
    InvalidFmtChunkError,
    InvalidRiffHeaderError,
    InvalidWaveFormatError,
    NotPCMError,
    SampleRateMismatchError,
)
from pcmwav.core.audio.header import (
    DATA,
    FMT,
    PCM_AUDIO_FORMAT,
    PCM_SUBCHUNK1_SIZE,
    RIFF,
    WAVE,
    WavHeader,
)

logger = logging.getLogger(__name__)

__all__ = ["validate_header", "check_compatible"]


def validate_header(header: WavHeader) -> None:
    """Check the fixed fields of a PCM header.

    Checks run in header order and the first mismatch is raised:
    RIFF tag, WAVE tag, "fmt " tag, PCM fmt size + audio format, "data" tag.
    """
    if header.chunk_id != RIFF:
        raise InvalidRiffHeaderError()
    if header.format != WAVE:
        raise InvalidWaveFormatError()
    if header.subchunk1_id != FMT:
        raise InvalidFmtChunkError()
    if header.subchunk1_size != PCM_SUBCHUNK1_SIZE or header.audio_format != PCM_AUDIO_FORMAT:
        raise NotPCMError()
    if header.subchunk2_id != DATA:
        raise InvalidDataChunkError()


def check_compatible(
    left: WavHeader,
    right: WavHeader,
    *,
    match_channels: bool = True,
) -> None:
    """Ensure two headers can be combined.

    Args:
        left: header of the first stream
        right: header of the second stream
        match_channels: also require equal channel counts (concat needs it,
            merge does not)

    Raises:
        ValidationError: either header is not valid PCM
        CompatibilityError: sample rate, bit depth or channel count differ
    """
    validate_header(left)
    validate_header(right)

    if left.sample_rate != right.sample_rate:
        raise SampleRateMismatchError(left.sample_rate, right.sample_rate)
    if left.bits_per_sample != right.bits_per_sample:
        raise BitDepthMismatchError(left.bits_per_sample, right.bits_per_sample)
    if match_channels and left.num_channels != right.num_channels:
        raise ChannelCountMismatchError(left.num_channels, right.num_channels)

    logger.debug(
        f"Compatible streams: rate={left.sample_rate}, bits={left.bits_per_sample}, "
        f"channels={left.num_channels}/{right.num_channels}"
    )
