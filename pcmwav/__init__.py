"""pcmwav: parse, validate, merge and concatenate PCM WAV files."""

from pcmwav.core.audio import (
    PCMAudio,
    PCMAudioError,
    concat_files,
    merge_files,
    open_audio,
)
from pcmwav.core.cancel_token import CancelToken

__version__ = "1.0.0"

__all__ = [
    "PCMAudio",
    "PCMAudioError",
    "CancelToken",
    "open_audio",
    "merge_files",
    "concat_files",
]
