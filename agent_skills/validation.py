"""Validate skills against the Agent Skills format rules.

Ref: https://agentskills.io/specification

Each rule is a plain function returning its own diagnostics. Rules never
raise for rule violations and do not depend on each other; `SkillValidator`
merges their output into one `ValidationResult` per skill.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from typing import TYPE_CHECKING

from agent_skills.conf import ValidationConfig
from agent_skills.models import (
    Diagnostic,
    DiagnosticCode,
    FieldValue,
    Skill,
    SkillManifest,
    SkillMetadata,
    ValidationResult,
)

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

# Runs of letters/digits joined by single hyphens. Holds no mutable state and
# is safe to share between threads.
NAME_STRUCTURE = re.compile(r"^[^\W_]+(?:-[^\W_]+)*$")

# Lowercase letters, letters of caseless scripts, decimal digits.
NAME_CATEGORIES = frozenset({"Ll", "Lo", "Nd"})


def normalize(text: str) -> str:
    """Apply NFKC normalization."""
    return unicodedata.normalize("NFKC", text)


def is_valid_name(name: str) -> bool:
    """Check an already normalized name against the naming pattern."""
    return NAME_STRUCTURE.match(name) is not None and all(
        c == "-" or unicodedata.category(c) in NAME_CATEGORIES for c in name
    )


def _name_problems(name: str) -> list[str]:
    reasons = []
    if any(c.isupper() for c in name):
        reasons.append("contains uppercase letters")
    if name.startswith("-") or name.endswith("-"):
        reasons.append("starts or ends with hyphen")
    if "--" in name:
        reasons.append("contains consecutive hyphens")
    invalid = [
        c
        for c in name
        if c != "-"
        and not c.isupper()
        and unicodedata.category(c) not in NAME_CATEGORIES
    ]
    if invalid:
        shown = ", ".join(repr(c) for c in dict.fromkeys(invalid))
        reasons.append(f"contains invalid characters: {shown}")
    return reasons


def check_name(name: str, path: Path, config: ValidationConfig) -> list[Diagnostic]:
    """Check length and pattern of the skill name after NFKC normalization."""
    normalized = normalize(name)
    if not normalized.strip():
        return [
            Diagnostic.error(
                DiagnosticCode.NAME_MISSING,
                "Required field 'name' is missing or empty",
                path,
            )
        ]

    diagnostics = []
    if len(normalized) > config.name_max_length:
        diagnostics.append(
            Diagnostic.error(
                DiagnosticCode.NAME_LENGTH,
                f"Field 'name' must be 1-{config.name_max_length} characters "
                f"(found: {len(normalized)})",
                path,
            )
        )

    if not is_valid_name(normalized):
        reasons = _name_problems(normalized)
        reason_text = f" ({', '.join(reasons)})" if reasons else ""
        diagnostics.append(
            Diagnostic.error(
                DiagnosticCode.NAME_PATTERN,
                "Field 'name' must contain only lowercase letters, numbers, and "
                "hyphens; cannot start/end with hyphen or have consecutive "
                f"hyphens{reason_text}",
                path,
            )
        )
    return diagnostics


def check_description(
    description: str, path: Path, config: ValidationConfig
) -> list[Diagnostic]:
    """Check the description is present, within limits and descriptive."""
    if not description.strip():
        return [
            Diagnostic.error(
                DiagnosticCode.DESCRIPTION_MISSING,
                "Required field 'description' is missing or empty",
                path,
            )
        ]

    diagnostics = []
    if len(description) > config.description_max_length:
        diagnostics.append(
            Diagnostic.error(
                DiagnosticCode.DESCRIPTION_LENGTH,
                f"Field 'description' must be 1-{config.description_max_length} "
                f"characters (found: {len(description)})",
                path,
            )
        )
    if len(description) < config.description_warning_length:
        diagnostics.append(
            Diagnostic.warning(
                DiagnosticCode.DESCRIPTION_SHORT,
                "Field 'description' is very short; consider adding more detail "
                "about when to use this skill",
                path,
            )
        )
    return diagnostics


def check_version(version: str | None, path: Path) -> list[Diagnostic]:
    """Warn about a version field that is present but blank."""
    if version is None or version.strip():
        return []
    return [
        Diagnostic.warning(
            DiagnosticCode.VERSION_BLANK,
            "Field 'version' is present but empty; consider removing it or "
            "providing a value",
            path,
        )
    ]


def check_compatibility(
    additional_fields: dict[str, FieldValue], path: Path, config: ValidationConfig
) -> list[Diagnostic]:
    """Check the length of the free-text compatibility field."""
    compatibility = additional_fields.get("compatibility")
    if not isinstance(compatibility, str):
        return []
    if len(compatibility) <= config.compatibility_max_length:
        return []
    return [
        Diagnostic.error(
            DiagnosticCode.COMPATIBILITY_LENGTH,
            "Field 'compatibility' must not exceed "
            f"{config.compatibility_max_length} characters "
            f"(found: {len(compatibility)})",
            path,
        )
    ]


def check_unexpected_fields(
    additional_fields: dict[str, FieldValue], path: Path, config: ValidationConfig
) -> list[Diagnostic]:
    """Report every top-level field outside the allow-list in one diagnostic."""
    unexpected = [k for k in additional_fields if k not in config.allowed_fields]
    if not unexpected:
        return []
    return [
        Diagnostic.error(
            DiagnosticCode.UNEXPECTED_FIELDS,
            f"Unexpected fields in frontmatter: {', '.join(unexpected)}. "
            f"Allowed fields are: {', '.join(sorted(config.allowed_fields))}",
            path,
        )
    ]


def check_directory_name(name: str, path: Path) -> list[Diagnostic]:
    """Check the skill directory is named after the skill.

    Both names are NFKC normalized first and then compared exactly.
    """
    directory_name = path.name
    if not directory_name:
        return [
            Diagnostic.warning(
                DiagnosticCode.DIRECTORY_NAME_UNKNOWN,
                "Cannot determine directory name to validate against skill name",
                path,
            )
        ]
    if normalize(directory_name) == normalize(name):
        return []
    return [
        Diagnostic.error(
            DiagnosticCode.DIRECTORY_NAME_MISMATCH,
            f"Directory name '{directory_name}' does not match skill name '{name}'",
            path,
        )
    ]


class SkillValidator:
    """Validate skills and skill metadata."""

    def __init__(self, config: ValidationConfig | None = None) -> None:
        """Initialize the validator.

        Args:
            config: Limits and allowed fields. Defaults follow agentskills.io.
        """
        self._config = config or ValidationConfig()

    @property
    def config(self) -> ValidationConfig:
        """Return the validation config."""
        return self._config

    def validate(self, skill: Skill) -> ValidationResult:
        """Validate a fully loaded skill."""
        return self.validate_manifest(skill.manifest, skill.path)

    def validate_manifest(
        self, manifest: SkillManifest, path: Path
    ) -> ValidationResult:
        """Validate a manifest loaded from the skill directory `path`."""
        diagnostics = [
            *check_name(manifest.name, path, self._config),
            *check_description(manifest.description, path, self._config),
            *check_version(manifest.version, path),
            *check_compatibility(manifest.additional_fields, path, self._config),
            *check_unexpected_fields(manifest.additional_fields, path, self._config),
            *check_directory_name(manifest.name, path),
        ]
        logger.debug("validated %s: %s diagnostics", path, len(diagnostics))
        return ValidationResult(diagnostics=diagnostics)

    def validate_metadata(self, metadata: SkillMetadata) -> ValidationResult:
        """Validate listing information loaded on the metadata-only path."""
        diagnostics = [
            *check_name(metadata.name, metadata.path, self._config),
            *check_description(metadata.description, metadata.path, self._config),
            *check_version(metadata.version, metadata.path),
            *check_directory_name(metadata.name, metadata.path),
        ]
        return ValidationResult(diagnostics=diagnostics)
