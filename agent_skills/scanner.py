"""Discovery of skill directories on the file system."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from pathlib import Path

from agent_skills.conf import ALTERNATE_SKILL_FILE_NAME, SKILL_FILE_NAME

logger = logging.getLogger(__name__)

DEFAULT_FILE_NAMES = (SKILL_FILE_NAME, ALTERNATE_SKILL_FILE_NAME)


def pick_skill_file(
    file_names: Sequence[str] | set[str],
    preferred: Sequence[str] = DEFAULT_FILE_NAMES,
) -> str | None:
    """Return the preferred skill file name present in `file_names`.

    Names are compared exactly, so `SKILL.md` wins over `skill.md` even on
    case-insensitive file systems where both resolve to the same file.
    """
    present = set(file_names)
    for name in preferred:
        if name in present:
            return name
    return None


def find_skill_file(
    skill_dir: Path, preferred: Sequence[str] = DEFAULT_FILE_NAMES
) -> Path | None:
    """Find the skill file inside one skill directory."""
    try:
        entries = {entry.name for entry in skill_dir.iterdir() if entry.is_file()}
    except OSError:
        logger.debug("cannot list skill directory: %s", skill_dir)
        return None

    name = pick_skill_file(entries, preferred)
    return skill_dir / name if name is not None else None


def scan_skill_files(
    root: Path, preferred: Sequence[str] = DEFAULT_FILE_NAMES
) -> Iterator[Path]:
    """Yield one skill file per directory under `root`, in sorted order.

    Directories without a skill file are skipped. Subtrees that cannot be
    read, or vanish during the walk, are skipped as well. Symlinked
    directories are followed, each real directory is visited once.
    """
    seen: set[Path] = set()
    for dirpath, dirnames, filenames in root.walk(
        follow_symlinks=True, on_error=_log_walk_error
    ):
        real = dirpath.resolve()
        if real in seen:
            logger.debug("skip already visited directory: %s", dirpath)
            dirnames.clear()
            continue
        seen.add(real)

        dirnames.sort()
        name = pick_skill_file(filenames, preferred)
        if name is not None:
            yield dirpath / name


def _log_walk_error(error: OSError) -> None:
    logger.warning("skip unreadable directory: %s (%s)", error.filename, error)
