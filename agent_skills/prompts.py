"""Render skills as Markdown prompts for language models.

Listing a skill shows its metadata only. Its instructions are rendered when
the skill is activated, so a long skill catalog stays cheap to present.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Protocol

from agent_skills.models import Skill, SkillMetadata, SkillResource


class ResourcePolicy(Protocol):
    """Decide which skill resources and metadata a prompt may expose."""

    def should_include_resource(self, resource: SkillResource, skill: Skill) -> bool:
        """Return True to show the resource, False to redact it."""
        ...

    def should_include_allowed_tools(self, skill: Skill) -> bool:
        """Return True to show the skill's allowed-tools list."""
        ...


class IncludeAllResourcePolicy:
    """Expose every resource and the allowed-tools list."""

    def should_include_resource(self, resource: SkillResource, skill: Skill) -> bool:
        """Include every resource."""
        return True

    def should_include_allowed_tools(self, skill: Skill) -> bool:
        """Include allowed-tools."""
        return True


class ExcludeAllResourcePolicy:
    """Expose no resources and hide the allowed-tools list."""

    def should_include_resource(self, resource: SkillResource, skill: Skill) -> bool:
        """Redact every resource."""
        return False

    def should_include_allowed_tools(self, skill: Skill) -> bool:
        """Redact allowed-tools."""
        return False


class ResourceTypeFilterPolicy:
    """Expose resources of the given types only, e.g. `reference`, `asset`."""

    def __init__(self, allowed_types: Iterable[str]) -> None:
        """Initialize the policy.

        Args:
            allowed_types: Resource types to show. Compared ignoring case.
        """
        self._allowed_types = frozenset(t.casefold() for t in allowed_types)

    def should_include_resource(self, resource: SkillResource, skill: Skill) -> bool:
        """Include resources whose type is allowed."""
        if not resource.resource_type:
            return False
        return resource.resource_type.casefold() in self._allowed_types

    def should_include_allowed_tools(self, skill: Skill) -> bool:
        """Include allowed-tools."""
        return True


@dataclass(frozen=True)
class PromptRenderOptions:
    """What to include in rendered prompts.

    resource_policy: None shows every resource.
    """

    resource_policy: ResourcePolicy | None = None
    include_version: bool = True
    include_author: bool = True
    include_tags: bool = True
    include_allowed_tools: bool = True
    include_resources: bool = True


class SkillPromptRenderer:
    """Default renderer producing Markdown."""

    def render_skill_list(
        self,
        metadata: Iterable[SkillMetadata],
        options: PromptRenderOptions | None = None,
    ) -> str:
        """Render the catalog of available skills."""
        options = options or PromptRenderOptions()
        lines = [
            "# Available Skills",
            "",
            "The following skills are available. To use a skill, activate it by name.",
            "",
        ]

        items = list(metadata)
        if not items:
            lines.append("No skills available.")
            return "\n".join(lines) + "\n"

        for meta in items:
            lines += [f"## {meta.name}", ""]
            lines += [f"**Description:** {meta.description}", ""]
            lines += self._details(options, meta.version, meta.author, meta.tags)
            lines += ["---", ""]

        return "\n".join(lines) + "\n"

    def render_skill_details(
        self,
        skill: Skill,
        options: PromptRenderOptions | None = None,
        resources: Sequence[SkillResource] | None = None,
    ) -> str:
        """Render a skill with its instructions.

        Args:
            skill: The skill to render.
            options: Render options.
            resources: Resources to list, usually from `list_resources`.
        """
        options = options or PromptRenderOptions()
        manifest = skill.manifest
        policy = options.resource_policy

        lines = [
            f"# Skill: {manifest.name}",
            "",
            f"**Description:** {manifest.description}",
            "",
        ]
        lines += self._details(
            options, manifest.version, manifest.author, manifest.tags
        )

        show_tools = options.include_allowed_tools and (
            policy is None or policy.should_include_allowed_tools(skill)
        )
        if show_tools and manifest.allowed_tools:
            lines += [f"**Allowed Tools:** {', '.join(manifest.allowed_tools)}", ""]

        lines += ["## Instructions", "", skill.instructions, ""]

        if options.include_resources and resources:
            visible = [
                r
                for r in resources
                if policy is None or policy.should_include_resource(r, skill)
            ]
            if visible:
                lines += ["## Resources", ""]
                for resource in visible:
                    line = f"- `{resource.relative_path}`"
                    if resource.resource_type:
                        line += f" ({resource.resource_type})"
                    lines.append(line)
                lines.append("")

        return "\n".join(lines) + "\n"

    @staticmethod
    def _details(
        options: PromptRenderOptions,
        version: str | None,
        author: str | None,
        tags: Sequence[str],
    ) -> list[str]:
        lines: list[str] = []
        if options.include_version and version and version.strip():
            lines += [f"**Version:** {version}", ""]
        if options.include_author and author and author.strip():
            lines += [f"**Author:** {author}", ""]
        if options.include_tags and tags:
            lines += [f"**Tags:** {', '.join(tags)}", ""]
        return lines
