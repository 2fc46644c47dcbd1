"""List the files a skill ships beside its SKILL.md.

Resources are only listed. They are never read or executed here.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from agent_skills.models import Skill, SkillResource

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

RESOURCE_DIRECTORIES = {
    "scripts": "script",
    "references": "reference",
    "assets": "asset",
}


def list_resources(skill: Skill | Path) -> list[SkillResource]:
    """List resource files of a skill, sorted by relative path.

    Args:
        skill: A loaded skill, or the path of a skill directory.
    """
    base = skill.path if isinstance(skill, Skill) else skill
    resources: list[SkillResource] = []
    for directory, resource_type in RESOURCE_DIRECTORIES.items():
        root = base / directory
        if not root.is_dir():
            continue

        for dirpath, dirnames, filenames in root.walk(on_error=_log_walk_error):
            dirnames.sort()
            for name in sorted(filenames):
                file = dirpath / name
                resources.append(
                    SkillResource(
                        name=name,
                        relative_path=file.relative_to(base).as_posix(),
                        resource_type=resource_type,
                        absolute_path=file,
                    )
                )

    logger.debug("found %s resources in %s", len(resources), base)
    return resources


def _log_walk_error(error: OSError) -> None:
    logger.warning("skip unreadable resource directory: %s", error.filename)
