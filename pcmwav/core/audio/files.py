"""File-path helpers around ``PCMAudio``.

These own the files they open; the core operations only ever see already
opened byte sources and sinks.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from pcmwav.core.audio.handle import PCMAudio
from pcmwav.core.cancel_token import CancelToken

logger = logging.getLogger(__name__)

__all__ = ["open_audio", "merge_files", "concat_files"]

PathLike = Union[str, Path]


@contextmanager
def open_audio(path: PathLike) -> Iterator[PCMAudio]:
    """Open ``path`` and yield a decoded (not yet validated) handle."""
    with open(path, "rb") as f:
        yield PCMAudio(f)


def merge_files(
    left_path: PathLike,
    right_path: PathLike,
    output_path: PathLike,
    *,
    cancel_token: Optional[CancelToken] = None,
    require_mono: Optional[bool] = None,
) -> int:
    """Merge two WAV files into a stereo WAV file at ``output_path``.

    Returns:
        Number of stereo frames written.
    """
    with open(left_path, "rb") as left_file, open(right_path, "rb") as right_file:
        left = PCMAudio(left_file)
        right = PCMAudio(right_file)
        left.validate()
        right.validate()

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "wb") as out:
            frames = left.merge(right, out, cancel_token=cancel_token, require_mono=require_mono)

    logger.info(f"Wrote merged audio to {output_path}")
    return frames


def concat_files(
    left_path: PathLike,
    right_path: PathLike,
    output_path: PathLike,
    *,
    cancel_token: Optional[CancelToken] = None,
    chunk_size: Optional[int] = None,
) -> int:
    """Concatenate two WAV files into ``output_path``.

    Returns:
        Number of payload bytes written.
    """
    with open(left_path, "rb") as left_file, open(right_path, "rb") as right_file:
        left = PCMAudio(left_file)
        right = PCMAudio(right_file)
        left.validate()
        right.validate()

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "wb") as out:
            written = left.concat(right, out, cancel_token=cancel_token, chunk_size=chunk_size)

    logger.info(f"Wrote concatenated audio to {output_path}")
    return written
