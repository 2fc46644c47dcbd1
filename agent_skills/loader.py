"""Load skills and skill metadata from the file system."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import TypeAlias, TypeVar

from agent_skills.conf import LoaderConfig
from agent_skills.decoder import parse_manifest
from agent_skills.extractor import read_frontmatter, split_document
from agent_skills.models import (
    Diagnostic,
    DiagnosticCode,
    Skill,
    SkillMetadata,
    SkillSet,
)
from agent_skills.scanner import find_skill_file, scan_skill_files
from agent_skills.validation import SkillValidator

logger = logging.getLogger(__name__)

T = TypeVar("T")

LoadResult: TypeAlias = tuple[T | None, list[Diagnostic]]


class SkillLoader:
    """Loader for skill directories containing a SKILL.md file.

    Problems are returned as diagnostics. One broken skill never hides the
    others found in the same scan.
    """

    def __init__(
        self,
        config: LoaderConfig | None = None,
        validator: SkillValidator | None = None,
    ) -> None:
        """Initialize the loader.

        Args:
            config: Loader settings.
            validator: Validator used when a load is asked to validate.
        """
        self._config = config or LoaderConfig()
        self._validator = validator or SkillValidator()

    @property
    def validator(self) -> SkillValidator:
        """Return the validator."""
        return self._validator

    def load_skill_set(
        self, directory: Path | str, *, validate: bool = False
    ) -> SkillSet:
        """Load every skill under `directory`, including instructions."""
        root = Path(directory)
        if not root.is_dir():
            return SkillSet(diagnostics=[_directory_not_found(root)])

        skills: list[Skill] = []
        diagnostics: list[Diagnostic] = []
        seen: set[str] = set()
        for skill_file in scan_skill_files(root, self._config.skill_file_names):
            skill, skill_diagnostics = self._guarded(self._load_skill_file, skill_file)
            diagnostics += skill_diagnostics
            if skill is None:
                continue

            if skill.name in seen:
                logger.warning("duplicate skill name: %s (%s)", skill.name, skill.path)
            seen.add(skill.name)

            skills.append(skill)
            if validate:
                diagnostics += self._validator.validate(skill).diagnostics

        logger.debug("found %s skills under: %s", len(skills), root)
        return SkillSet(skills=skills, diagnostics=diagnostics)

    def load_metadata(
        self, directory: Path | str, *, validate: bool = False
    ) -> tuple[list[SkillMetadata], list[Diagnostic]]:
        """Load listing information for every skill under `directory`.

        Only the frontmatter of each SKILL.md is read.
        """
        root = Path(directory)
        if not root.is_dir():
            return [], [_directory_not_found(root)]

        result: list[SkillMetadata] = []
        diagnostics: list[Diagnostic] = []
        for skill_file in scan_skill_files(root, self._config.skill_file_names):
            metadata, metadata_diagnostics = self._guarded(
                self._load_metadata_file, skill_file
            )
            diagnostics += metadata_diagnostics
            if metadata is None:
                continue

            result.append(metadata)
            if validate:
                diagnostics += self._validator.validate_metadata(metadata).diagnostics

        logger.debug("found %s skill metadata under: %s", len(result), root)
        return result, diagnostics

    def load_skill(self, skill_directory: Path | str) -> LoadResult[Skill]:
        """Load a single skill from its directory."""
        skill_file = self._find(Path(skill_directory))
        if isinstance(skill_file, Diagnostic):
            return None, [skill_file]
        return self._guarded(self._load_skill_file, skill_file)

    def load_skill_metadata(
        self, skill_directory: Path | str
    ) -> LoadResult[SkillMetadata]:
        """Load listing information of a single skill from its directory."""
        skill_file = self._find(Path(skill_directory))
        if isinstance(skill_file, Diagnostic):
            return None, [skill_file]
        return self._guarded(self._load_metadata_file, skill_file)

    def _find(self, skill_directory: Path) -> Path | Diagnostic:
        skill_file = find_skill_file(skill_directory, self._config.skill_file_names)
        if skill_file is None:
            logger.warning("no SKILL.md found in %s", skill_directory)
            return Diagnostic.error(
                DiagnosticCode.SKILL_FILE_NOT_FOUND,
                f"SKILL.md not found in directory: {skill_directory}",
                skill_directory,
            )
        return skill_file

    def _guarded(
        self, load: Callable[[Path], LoadResult[T]], skill_file: Path
    ) -> LoadResult[T]:
        try:
            return load(skill_file)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("failed to read skill file: %s (%s)", skill_file, e)
            return None, [
                Diagnostic.error(
                    DiagnosticCode.IO_FAILURE,
                    f"Failed to read skill file: {e}",
                    skill_file,
                )
            ]
        except Exception as e:  # noqa: BLE001
            logger.exception("failed to load skill: %s", skill_file)
            return None, [
                Diagnostic.error(
                    DiagnosticCode.IO_FAILURE,
                    f"Failed to load skill file: {e}",
                    skill_file,
                )
            ]

    def _load_skill_file(self, skill_file: Path) -> LoadResult[Skill]:
        logger.debug("load skill: %s", skill_file)
        text = skill_file.read_text(encoding="utf-8-sig")

        frontmatter, diagnostics = split_document(text, skill_file)
        if frontmatter is None:
            return None, diagnostics

        manifest, manifest_diagnostics = parse_manifest(frontmatter, skill_file)
        diagnostics += manifest_diagnostics
        if manifest is None:
            return None, diagnostics

        skill = Skill(
            manifest=manifest,
            instructions=frontmatter.body or "",
            path=skill_file.parent,
        )
        return skill, diagnostics

    def _load_metadata_file(self, skill_file: Path) -> LoadResult[SkillMetadata]:
        logger.debug("load skill metadata: %s", skill_file)
        with skill_file.open("r", encoding="utf-8-sig") as f:
            frontmatter, diagnostics = read_frontmatter(
                f, skill_file, self._config.max_frontmatter_chars
            )
        if frontmatter is None:
            return None, diagnostics

        manifest, manifest_diagnostics = parse_manifest(frontmatter, skill_file)
        diagnostics += manifest_diagnostics
        if manifest is None:
            return None, diagnostics

        return SkillMetadata.from_manifest(manifest, skill_file.parent), diagnostics


def _directory_not_found(directory: Path) -> Diagnostic:
    logger.warning("skill dir not found: %s", directory)
    return Diagnostic.error(
        DiagnosticCode.DIRECTORY_NOT_FOUND,
        f"Directory not found: {directory}",
        directory,
    )
