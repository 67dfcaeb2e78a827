"""PCM WAV header codec, validation and stream combination"""
from pcmwav.core.audio.errors import (
    PCMAudioError,
    DecodeError,
    ValidationError,
    InvalidRiffHeaderError,
    InvalidWaveFormatError,
    InvalidFmtChunkError,
    NotPCMError,
    InvalidDataChunkError,
    CompatibilityError,
    SampleRateMismatchError,
    BitDepthMismatchError,
    ChannelCountMismatchError,
    NotMonoError,
    NotValidatedError,
    CombineCancelledError,
)
from pcmwav.core.audio.header import WavHeader, decode_header, encode_header, build_header
from pcmwav.core.audio.validator import validate_header, check_compatible
from pcmwav.core.audio.combiner import merge, concat
from pcmwav.core.audio.handle import ByteSource, ByteSink, PCMAudio
from pcmwav.core.audio.files import open_audio, merge_files, concat_files

__all__ = [
    'PCMAudioError',
    'DecodeError',
    'ValidationError',
    'InvalidRiffHeaderError',
    'InvalidWaveFormatError',
    'InvalidFmtChunkError',
    'NotPCMError',
    'InvalidDataChunkError',
    'CompatibilityError',
    'SampleRateMismatchError',
    'BitDepthMismatchError',
    'ChannelCountMismatchError',
    'NotMonoError',
    'NotValidatedError',
    'CombineCancelledError',
    'WavHeader',
    'decode_header',
    'encode_header',
    'build_header',
    'validate_header',
    'check_compatible',
    'merge',
    'concat',
    'ByteSource',
    'ByteSink',
    'PCMAudio',
    'open_audio',
    'merge_files',
    'concat_files',
]
