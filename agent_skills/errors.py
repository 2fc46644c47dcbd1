"""Exceptions raised by agent_skills.

Problems found in skill files are reported as diagnostics, never raised.
These exceptions cover misuse of the library itself.
"""


class AgentSkillsError(Exception):
    """Base class for agent_skills errors."""


class ConfigError(AgentSkillsError):
    """The configuration file is missing or invalid."""
