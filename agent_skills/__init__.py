"""Discover, parse and validate Agent Skills (SKILL.md) directories."""

from agent_skills.conf import (
    AgentSkillsConfig,
    LoaderConfig,
    ValidationConfig,
    load_config,
)
from agent_skills.errors import AgentSkillsError, ConfigError
from agent_skills.loader import SkillLoader
from agent_skills.models import (
    Diagnostic,
    DiagnosticCode,
    DiagnosticSeverity,
    Skill,
    SkillManifest,
    SkillMetadata,
    SkillResource,
    SkillSet,
    ValidationResult,
)
from agent_skills.prompts import (
    ExcludeAllResourcePolicy,
    IncludeAllResourcePolicy,
    PromptRenderOptions,
    ResourcePolicy,
    ResourceTypeFilterPolicy,
    SkillPromptRenderer,
)
from agent_skills.resources import list_resources
from agent_skills.validation import SkillValidator

__all__ = [
    "AgentSkillsConfig",
    "AgentSkillsError",
    "ConfigError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticSeverity",
    "ExcludeAllResourcePolicy",
    "IncludeAllResourcePolicy",
    "LoaderConfig",
    "PromptRenderOptions",
    "ResourcePolicy",
    "ResourceTypeFilterPolicy",
    "Skill",
    "SkillLoader",
    "SkillManifest",
    "SkillMetadata",
    "SkillPromptRenderer",
    "SkillResource",
    "SkillSet",
    "SkillValidator",
    "ValidationConfig",
    "ValidationResult",
    "list_resources",
    "load_config",
]
