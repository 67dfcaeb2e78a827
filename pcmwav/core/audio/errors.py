"""Exceptions raised while decoding, validating and combining PCM WAV audio."""

from __future__ import annotations

__all__ = [
    "PCMAudioError",
    "DecodeError",
    "ValidationError",
    "InvalidRiffHeaderError",
    "InvalidWaveFormatError",
    "InvalidFmtChunkError",
    "NotPCMError",
    "InvalidDataChunkError",
    "CompatibilityError",
    "SampleRateMismatchError",
    "BitDepthMismatchError",
    "ChannelCountMismatchError",
    "NotMonoError",
    "NotValidatedError",
    "CombineCancelledError",
]


class PCMAudioError(Exception):
    """Base class for every error raised by pcmwav."""


class DecodeError(PCMAudioError):
    """The 44-byte header could not be read from the source."""


class ValidationError(PCMAudioError):
    """A decoded header does not describe a canonical PCM WAV file."""


class InvalidRiffHeaderError(ValidationError):
    def __init__(self, message: str = "RIFF header doesn't match"):
        super().__init__(message)


class InvalidWaveFormatError(ValidationError):
    def __init__(self, message: str = "audio format doesn't match"):
        super().__init__(message)


class InvalidFmtChunkError(ValidationError):
    def __init__(self, message: str = "subchunk fmt doesn't match"):
        super().__init__(message)


class NotPCMError(ValidationError):
    def __init__(self, message: str = "provided data is not PCM audio"):
        super().__init__(message)


class InvalidDataChunkError(ValidationError):
    def __init__(self, message: str = "data header doesn't match"):
        super().__init__(message)


class CompatibilityError(PCMAudioError):
    """Two audio streams disagree on a property the operation needs shared."""


class SampleRateMismatchError(CompatibilityError):
    def __init__(self, left: int, right: int):
        super().__init__(f"rate of both audio files must match ({left} != {right})")
        self.left = left
        self.right = right


class BitDepthMismatchError(CompatibilityError):
    def __init__(self, left: int, right: int):
        super().__init__(f"bits per sample of both audio files must match ({left} != {right})")
        self.left = left
        self.right = right


class ChannelCountMismatchError(CompatibilityError):
    def __init__(self, left: int, right: int):
        super().__init__(f"number of channels of both audio files must match ({left} != {right})")
        self.left = left
        self.right = right


class NotMonoError(CompatibilityError):
    def __init__(self, left: int, right: int):
        super().__init__(f"merge requires two mono inputs, got {left} and {right} channels")
        self.left = left
        self.right = right


class NotValidatedError(PCMAudioError):
    def __init__(self, message: str = "validate each audio file first"):
        super().__init__(message)


class CombineCancelledError(PCMAudioError):
    """Merge or concat was stopped through its cancel token."""
