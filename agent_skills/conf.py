"""Configuration for loading and validating skills."""

import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from agent_skills.errors import ConfigError

logger = logging.getLogger(__name__)

SKILL_FILE_NAME = "SKILL.md"
ALTERNATE_SKILL_FILE_NAME = "skill.md"
FRONTMATTER_DELIMITER = "---"

KNOWN_FIELDS = frozenset(
    {"name", "description", "version", "author", "tags", "allowed-tools"}
)


class ValidationConfig(BaseModel):
    """Limits and field allow-list used by the validator."""

    name_max_length: int = Field(default=64, ge=1)
    description_max_length: int = Field(default=1024, ge=1)
    description_warning_length: int = Field(default=20, ge=0)
    compatibility_max_length: int = Field(default=500, ge=1)
    allowed_fields: frozenset[str] = Field(
        default=KNOWN_FIELDS | {"license", "compatibility", "metadata"}
    )


class LoaderConfig(BaseModel):
    """Settings of the file system loader."""

    skill_file_names: tuple[str, ...] = Field(
        default=(SKILL_FILE_NAME, ALTERNATE_SKILL_FILE_NAME), min_length=1
    )
    max_frontmatter_chars: int = Field(default=65536, ge=1)


class AgentSkillsConfig(BaseModel):
    """Model of the agent_skills configuration file."""

    loader: LoaderConfig = Field(default_factory=LoaderConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)


def load_config(config_path: str | Path) -> AgentSkillsConfig:
    """Load the configuration from a JSON file."""
    path = Path(config_path)
    logger.debug("load config: %s", path)
    try:
        with path.open("r", encoding="utf-8") as f:
            return AgentSkillsConfig.model_validate_json(f.read())
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e
