"""Tests for prompt rendering."""

from pathlib import Path

from agent_skills.models import Skill, SkillManifest, SkillMetadata, SkillResource
from agent_skills.prompts import (
    ExcludeAllResourcePolicy,
    IncludeAllResourcePolicy,
    PromptRenderOptions,
    ResourceTypeFilterPolicy,
    SkillPromptRenderer,
)

SKILL = Skill(
    manifest=SkillManifest(
        name="pdf-tools",
        description="Work with PDF documents",
        version="1.0",
        author="Jane",
        tags=["pdf", "docs"],
        allowed_tools=["read_file", "bash"],
    ),
    instructions="Extract the text first.",
    path=Path("skills/pdf-tools"),
)

RESOURCES = [
    SkillResource(
        name="extract.py", relative_path="scripts/extract.py", resource_type="script"
    ),
    SkillResource(
        name="api.md", relative_path="references/api.md", resource_type="reference"
    ),
]


class TestRenderSkillList:
    """Tests for the skill catalog."""

    def test_empty(self) -> None:
        """Test an empty catalog says so."""
        text = SkillPromptRenderer().render_skill_list([])

        assert text.startswith("# Available Skills\n")
        assert "No skills available." in text

    def test_lists_metadata(self) -> None:
        """Test each skill is listed with its metadata."""
        text = SkillPromptRenderer().render_skill_list([SKILL.metadata])

        assert "## pdf-tools" in text
        assert "**Description:** Work with PDF documents" in text
        assert "**Version:** 1.0" in text
        assert "**Author:** Jane" in text
        assert "**Tags:** pdf, docs" in text
        assert "Extract the text first." not in text

    def test_options_hide_details(self) -> None:
        """Test version, author and tags can be left out."""
        options = PromptRenderOptions(
            include_version=False, include_author=False, include_tags=False
        )

        text = SkillPromptRenderer().render_skill_list([SKILL.metadata], options)

        assert "**Version:**" not in text
        assert "**Author:**" not in text
        assert "**Tags:**" not in text

    def test_blank_version_not_shown(self) -> None:
        """Test a blank version is not rendered."""
        metadata = SkillMetadata(
            name="a", description="b", version=" ", path=Path("skills/a")
        )

        assert "**Version:**" not in SkillPromptRenderer().render_skill_list(
            [metadata]
        )


class TestRenderSkillDetails:
    """Tests for rendering an activated skill."""

    def test_details(self) -> None:
        """Test the instructions and allowed tools are rendered."""
        text = SkillPromptRenderer().render_skill_details(SKILL)

        assert text.startswith("# Skill: pdf-tools\n")
        assert "**Allowed Tools:** read_file, bash" in text
        assert "## Instructions\n\nExtract the text first.\n" in text
        assert "## Resources" not in text

    def test_resources(self) -> None:
        """Test resources are listed with their type."""
        text = SkillPromptRenderer().render_skill_details(
            SKILL, resources=RESOURCES
        )

        assert "## Resources" in text
        assert "- `scripts/extract.py` (script)" in text
        assert "- `references/api.md` (reference)" in text

    def test_include_all_policy(self) -> None:
        """Test the include-all policy shows everything."""
        options = PromptRenderOptions(resource_policy=IncludeAllResourcePolicy())

        text = SkillPromptRenderer().render_skill_details(SKILL, options, RESOURCES)

        assert "**Allowed Tools:**" in text
        assert "scripts/extract.py" in text

    def test_exclude_all_policy(self) -> None:
        """Test the exclude-all policy hides resources and allowed tools."""
        options = PromptRenderOptions(resource_policy=ExcludeAllResourcePolicy())

        text = SkillPromptRenderer().render_skill_details(SKILL, options, RESOURCES)

        assert "**Allowed Tools:**" not in text
        assert "## Resources" not in text
        assert "## Instructions" in text

    def test_type_filter_policy(self) -> None:
        """Test the type filter shows matching resources only."""
        options = PromptRenderOptions(
            resource_policy=ResourceTypeFilterPolicy(["Reference"])
        )

        text = SkillPromptRenderer().render_skill_details(SKILL, options, RESOURCES)

        assert "references/api.md" in text
        assert "scripts/extract.py" not in text
        assert "**Allowed Tools:**" in text

    def test_resources_disabled(self) -> None:
        """Test resources can be left out entirely."""
        options = PromptRenderOptions(include_resources=False)

        text = SkillPromptRenderer().render_skill_details(SKILL, options, RESOURCES)

        assert "## Resources" not in text
