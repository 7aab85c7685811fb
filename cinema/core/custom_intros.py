from __future__ import annotations

import logging
import os
import random
from typing import List, Optional

from cinema.core.models import IntroResult

logger = logging.getLogger(__name__)

VIDEO_EXTENSIONS = frozenset(
    {
        ".mp4", ".mkv", ".avi", ".mov", ".m4v", ".wmv", ".flv", ".webm",
        ".ts", ".mpg", ".mpeg", ".3gp", ".ogv", ".vob", ".mts", ".m2ts",
        ".divx", ".asf", ".iso", ".rmvb", ".dvr-ms", ".wtv", ".mk3d",
    }
)


def is_video_file(path: str) -> bool:
    _, ext = os.path.splitext(path)
    return ext.lower() in VIDEO_EXTENSIONS


def _raise_walk_error(exc: OSError) -> None:
    raise exc


def list_custom_intro_files(path: Optional[str]) -> List[str]:
    """
    Returns every video file below *path*, recursively.

    An unset path means custom intros are not configured. Filesystem errors,
    including a missing directory, are logged and produce an empty list.
    """
    if path is None or not path.strip():
        return []

    files: List[str] = []
    try:
        for root, _dirs, names in os.walk(path, onerror=_raise_walk_error):
            for name in names:
                full_path = os.path.join(root, name)
                if is_video_file(full_path):
                    files.append(full_path)
    except OSError as exc:
        logger.warning("Unable to scan custom intro path %s: %s", path, exc)
        return []
    return files


def pick_custom_intros(path: Optional[str], rng: random.Random) -> List[IntroResult]:
    files = list_custom_intro_files(path)
    rng.shuffle(files)
    return [IntroResult(path=file_path) for file_path in files]
