from pathlib import Path

import pytest

from agent_skills.loader import SkillLoader
from tests.helper import GIT_COMMIT_SKILL, VALID_SKILL, write_skill


@pytest.fixture
def skills_dir(tmp_path: Path) -> Path:
    """A directory containing the code-review and git-commit skills."""
    root = tmp_path / "skills"
    write_skill(root, "code-review", VALID_SKILL)
    write_skill(root, "git-commit", GIT_COMMIT_SKILL)
    return root


@pytest.fixture
def loader() -> SkillLoader:
    """A loader with default settings."""
    return SkillLoader()
