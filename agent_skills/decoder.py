"""Decode frontmatter YAML and assemble skill manifests."""

from __future__ import annotations

import datetime
import logging
from typing import TYPE_CHECKING, Any

import yaml

from agent_skills.conf import KNOWN_FIELDS
from agent_skills.extractor import handler
from agent_skills.models import Diagnostic, DiagnosticCode, FieldValue, SkillManifest

if TYPE_CHECKING:
    from pathlib import Path

    from agent_skills.extractor import Frontmatter

logger = logging.getLogger(__name__)


def to_field_value(value: Any) -> FieldValue:
    """Convert a decoded YAML value into a FieldValue.

    Scalars YAML decodes into other Python types (dates, timestamps, binary)
    become strings. Mapping keys become strings.
    """
    match value:
        case None | bool() | int() | float() | str():
            return value
        case dict():
            return {str(k): to_field_value(v) for k, v in value.items()}
        case list() | tuple() | set() | frozenset():
            return [to_field_value(v) for v in value]
        case datetime.date() | datetime.time():
            return value.isoformat()
        case bytes():
            return value.decode("utf-8", errors="replace")
        case _:
            return str(value)


def decode_frontmatter(
    frontmatter: Frontmatter, path: Path
) -> tuple[dict[str, FieldValue] | None, list[Diagnostic]]:
    """Decode the frontmatter block into a mapping of field values."""
    try:
        data = handler.load(frontmatter.block)
    except yaml.MarkedYAMLError as e:
        mark = e.problem_mark or e.context_mark
        problem = e.problem or e.context or str(e)
        logger.debug("invalid YAML in %s: %s", path, problem)
        return None, [
            Diagnostic.error(
                DiagnosticCode.YAML_INVALID,
                f"Failed to parse YAML: {problem}",
                path,
                line=mark.line + frontmatter.first_line if mark else None,
                column=mark.column + 1 if mark else None,
            )
        ]
    except yaml.YAMLError as e:
        logger.debug("invalid YAML in %s: %s", path, e)
        return None, [
            Diagnostic.error(
                DiagnosticCode.YAML_INVALID, f"Failed to parse YAML: {e}", path
            )
        ]

    if data is None:
        return None, [
            Diagnostic.error(
                DiagnosticCode.YAML_INVALID,
                "Failed to parse YAML frontmatter: frontmatter is empty",
                path,
            )
        ]
    if not isinstance(data, dict):
        return None, [
            Diagnostic.error(
                DiagnosticCode.YAML_INVALID,
                "Failed to parse YAML frontmatter: expected a mapping, "
                f"got {type(data).__name__}",
                path,
            )
        ]

    return {str(k): to_field_value(v) for k, v in data.items()}, []


def _required_text(
    data: dict[str, FieldValue], key: str, code: DiagnosticCode, path: Path
) -> tuple[str | None, list[Diagnostic]]:
    value = data.get(key)
    if value is None:
        reason = "is missing"
    elif not isinstance(value, str):
        reason = f"must be a string, got {type(value).__name__}"
    elif not value.strip():
        reason = "is empty"
    else:
        return value, []
    return None, [Diagnostic.error(code, f"Required field '{key}' {reason}", path)]


def _optional_text(value: FieldValue) -> str | None:
    return value if isinstance(value, str) else None


def _string_list(value: FieldValue) -> list[str]:
    """Accept a list or a single scalar, keeping only strings."""
    if isinstance(value, list):
        return [item for item in value if isinstance(item, str)]
    if isinstance(value, str):
        return [value]
    return []


def assemble_manifest(
    data: dict[str, FieldValue], path: Path
) -> tuple[SkillManifest | None, list[Diagnostic]]:
    """Build a manifest from decoded frontmatter.

    Returns no manifest when `name` or `description` is missing, empty or not
    a string, with one diagnostic per offending field.
    """
    name, diagnostics = _required_text(
        data, "name", DiagnosticCode.NAME_INVALID, path
    )
    description, description_diagnostics = _required_text(
        data, "description", DiagnosticCode.DESCRIPTION_INVALID, path
    )
    diagnostics += description_diagnostics
    if name is None or description is None:
        return None, diagnostics

    manifest = SkillManifest(
        name=name,
        description=description,
        version=_optional_text(data.get("version")),
        author=_optional_text(data.get("author")),
        tags=_string_list(data.get("tags")),
        allowed_tools=_string_list(data.get("allowed-tools")),
        additional_fields={k: v for k, v in data.items() if k not in KNOWN_FIELDS},
    )
    return manifest, diagnostics


def parse_manifest(
    frontmatter: Frontmatter, path: Path
) -> tuple[SkillManifest | None, list[Diagnostic]]:
    """Decode a frontmatter block and assemble its manifest."""
    data, diagnostics = decode_frontmatter(frontmatter, path)
    if data is None:
        return None, diagnostics
    manifest, manifest_diagnostics = assemble_manifest(data, path)
    return manifest, diagnostics + manifest_diagnostics
