"""Expose loaded skills to LangChain agents.

Skills are handed over read-only. `allowed_tools` is shown to the model as
advice and never turned into a permission.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Self

from langchain_core.tools import BaseTool, StructuredTool
from pydantic import BaseModel, Field

from agent_skills.prompts import PromptRenderOptions, SkillPromptRenderer
from agent_skills.resources import list_resources

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from agent_skills.models import Skill, SkillMetadata, SkillSet

logger = logging.getLogger(__name__)

MAX_CONTENT_CHARS = 100000


def skill_function_name(skill: Skill) -> str:
    """Return a function-call friendly name, e.g. `pdf_tools` for `pdf-tools`."""
    return skill.name.replace("-", "_")


def skill_function_description(skill: Skill) -> str:
    """Return the description used when a skill is offered as a function."""
    return f"Activate skill: {skill.manifest.description}"


class SkillPromptBuilder:
    """Build a system prompt listing the available skills."""

    def __init__(self, renderer: SkillPromptRenderer | None = None) -> None:
        """Initialize the builder."""
        self._renderer = renderer or SkillPromptRenderer()
        self._skills: list[SkillMetadata] = []
        self._base_instructions: str | None = None

    def with_base_instructions(self, instructions: str) -> Self:
        """Set instructions placed before the skill list."""
        self._base_instructions = instructions
        return self

    def with_skills(self, metadata: Iterable[SkillMetadata]) -> Self:
        """Add skills by their metadata."""
        self._skills.extend(metadata)
        return self

    def with_skill_set(self, skill_set: SkillSet) -> Self:
        """Add every skill of a skill set."""
        self._skills.extend(s.metadata for s in skill_set.skills)
        return self

    def build(self, options: PromptRenderOptions | None = None) -> str:
        """Build the system prompt."""
        parts = []
        if self._base_instructions and self._base_instructions.strip():
            parts.append(self._base_instructions.strip())
        if self._skills:
            skill_list = self._renderer.render_skill_list(self._skills, options)
            parts.append(skill_list.strip())
        return "\n\n".join(parts)

    def build_skill_details(
        self, skill: Skill, options: PromptRenderOptions | None = None
    ) -> str:
        """Render the full instructions of an activated skill."""
        return self._renderer.render_skill_details(skill, options)


def _build_tool_description(skills: Sequence[Skill]) -> str:
    """Build the dynamic tool description listing available skills."""
    base = (
        "Load a skill to get detailed instructions for a specific task.\n"
        "Skills provide specialized knowledge and step-by-step guidance.\n"
        "Use this when a task matches an available skill's description."
    )
    if not skills:
        return base + "\n\nNo skills are currently available."

    lines = ["<available_skills>"]
    for skill in skills:
        lines.append("  <skill>")
        lines.append(f"    <name>{skill.name}</name>")
        lines.append(f"    <description>{skill.manifest.description}</description>")
        lines.append("  </skill>")
    lines.append("</available_skills>")

    return base + "\nOnly the skills listed here are available:\n" + "\n".join(lines)


class _LoadSkillInput(BaseModel):
    """Input schema for the load_skill tool."""

    skill_name: str = Field(description="Name of the skill to load.")


def create_skill_tool(
    skill_set: SkillSet,
    renderer: SkillPromptRenderer | None = None,
    options: PromptRenderOptions | None = None,
    *,
    name: str = "load_skill",
) -> BaseTool:
    """Create a tool that returns the instructions of a skill by name.

    Args:
        skill_set: Skills the tool may return.
        renderer: Renderer for the returned instructions.
        options: Render options, including the resource policy.
        name: Tool name.
    """
    renderer = renderer or SkillPromptRenderer()

    def read_skill_content(skill_name: str) -> str:
        """Render a skill from the bound skill set."""
        skill = skill_set.get_skill(skill_name)
        if skill is None:
            if skill_set.skills:
                available = ", ".join(s.name for s in skill_set.skills)
                return (
                    f"Error: Skill '{skill_name}' not found. "
                    f"Available skills: {available}"
                )
            return f"Error: Skill '{skill_name}' not found. No skills are installed."

        logger.debug("activate skill: %s", skill.name)
        content = renderer.render_skill_details(
            skill, options, resources=list_resources(skill)
        )
        if len(content) > MAX_CONTENT_CHARS:
            content = content[:MAX_CONTENT_CHARS] + "\n... (truncated)"

        return f"**Base directory**: {skill.path}\n\n{content}"

    return StructuredTool.from_function(
        func=read_skill_content,
        name=name,
        description=_build_tool_description(skill_set.skills),
        args_schema=_LoadSkillInput,
    )
