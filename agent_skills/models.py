"""Skill data models.

Ref: https://agentskills.io/specification
"""

from collections.abc import Iterable
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, JsonValue, field_validator

FieldValue = JsonValue
"""Leaf value of a frontmatter field: str, number, bool, None, list or mapping."""


class DiagnosticSeverity(StrEnum):
    """Severity of a diagnostic."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class DiagnosticCode(StrEnum):
    """Stable diagnostic codes consumers may branch on."""

    DIRECTORY_NOT_FOUND = "LOADER001"
    SKILL_FILE_NOT_FOUND = "LOADER002"
    IO_FAILURE = "LOADER003"
    FRONTMATTER_INVALID = "LOADER004"
    YAML_INVALID = "LOADER005"
    NAME_INVALID = "LOADER006"
    DESCRIPTION_INVALID = "LOADER007"

    NAME_MISSING = "VAL001"
    NAME_LENGTH = "VAL002"
    NAME_PATTERN = "VAL003"
    DESCRIPTION_MISSING = "VAL004"
    DESCRIPTION_LENGTH = "VAL005"
    DESCRIPTION_SHORT = "VAL006"
    VERSION_BLANK = "VAL007"
    COMPATIBILITY_LENGTH = "VAL008"
    DIRECTORY_NAME_UNKNOWN = "VAL009"
    DIRECTORY_NAME_MISMATCH = "VAL010"
    UNEXPECTED_FIELDS = "VAL011"


class Diagnostic(BaseModel):
    """An error, warning or info message about a skill."""

    model_config = ConfigDict(frozen=True)

    severity: DiagnosticSeverity
    message: str
    path: Path | None = None
    line: int | None = None
    column: int | None = None
    code: str | None = None

    @classmethod
    def error(
        cls, code: DiagnosticCode, message: str, path: Path, **kwargs: int | None
    ) -> "Diagnostic":
        """Create an error diagnostic."""
        return cls(
            severity=DiagnosticSeverity.ERROR,
            code=code,
            message=message,
            path=path,
            **kwargs,
        )

    @classmethod
    def warning(cls, code: DiagnosticCode, message: str, path: Path) -> "Diagnostic":
        """Create a warning diagnostic."""
        return cls(
            severity=DiagnosticSeverity.WARNING,
            code=code,
            message=message,
            path=path,
        )

    def __str__(self) -> str:
        location = str(self.path) if self.path is not None else "<unknown>"
        if self.line is not None:
            location += f":{self.line}"
            if self.column is not None:
                location += f":{self.column}"
        code = f" [{self.code}]" if self.code else ""
        return f"{location}: {self.severity}{code}: {self.message}"


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
    """Return True if any diagnostic has error severity."""
    return any(d.severity == DiagnosticSeverity.ERROR for d in diagnostics)


class ValidationResult(BaseModel):
    """Diagnostics produced by validating one skill."""

    model_config = ConfigDict(frozen=True)

    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def is_valid(self) -> bool:
        """True when no diagnostic is an error."""
        return not has_errors(self.diagnostics)

    @property
    def has_warnings(self) -> bool:
        """True when any diagnostic is a warning."""
        return any(d.severity == DiagnosticSeverity.WARNING for d in self.diagnostics)

    @property
    def errors(self) -> list[Diagnostic]:
        """Error diagnostics."""
        return self._with_severity(DiagnosticSeverity.ERROR)

    @property
    def warnings(self) -> list[Diagnostic]:
        """Warning diagnostics."""
        return self._with_severity(DiagnosticSeverity.WARNING)

    @property
    def infos(self) -> list[Diagnostic]:
        """Info diagnostics."""
        return self._with_severity(DiagnosticSeverity.INFO)

    def _with_severity(self, severity: DiagnosticSeverity) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == severity]


class SkillManifest(BaseModel):
    """Parsed YAML frontmatter of a SKILL.md file.

    `allowed_tools` is advisory only. Hosts decide what a skill may run.
    `additional_fields` holds every key that is not a known field, with its
    decoded value untouched.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    version: str | None = None
    author: str | None = None
    tags: tuple[str, ...] = ()
    allowed_tools: tuple[str, ...] = ()
    additional_fields: dict[str, FieldValue] = Field(default_factory=dict)

    @field_validator("name", "description")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class SkillMetadata(BaseModel):
    """Listing information for a skill, loaded without its instructions."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    version: str | None = None
    author: str | None = None
    tags: tuple[str, ...] = ()
    path: Path

    @classmethod
    def from_manifest(cls, manifest: SkillManifest, path: Path) -> "SkillMetadata":
        """Project a manifest onto its listing information."""
        return cls(
            name=manifest.name,
            description=manifest.description,
            version=manifest.version,
            author=manifest.author,
            tags=manifest.tags,
            path=path,
        )


class Skill(BaseModel):
    """Content loaded from SKILL.md."""

    model_config = ConfigDict(frozen=True)

    manifest: SkillManifest
    instructions: str
    path: Path

    @property
    def name(self) -> str:
        """The skill name."""
        return self.manifest.name

    @property
    def metadata(self) -> SkillMetadata:
        """Listing information derived from the manifest and path."""
        return SkillMetadata.from_manifest(self.manifest, self.path)


class SkillResource(BaseModel):
    """A file shipped beside SKILL.md (script, reference or asset)."""

    model_config = ConfigDict(frozen=True)

    name: str
    relative_path: str
    resource_type: str | None = None
    absolute_path: Path | None = None


class SkillSet(BaseModel):
    """Skills discovered under one directory, with the diagnostics of the scan."""

    model_config = ConfigDict(frozen=True)

    skills: tuple[Skill, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def is_valid(self) -> bool:
        """True when no diagnostic is an error."""
        return not has_errors(self.diagnostics)

    def get_skill(self, name: str) -> Skill | None:
        """Get a skill by name, ignoring case."""
        wanted = name.casefold()
        for skill in self.skills:
            if skill.manifest.name.casefold() == wanted:
                return skill
        return None

    def get_skills_by_tag(self, tag: str) -> list[Skill]:
        """Get all skills carrying a tag, ignoring case."""
        wanted = tag.casefold()
        return [
            s
            for s in self.skills
            if any(t.casefold() == wanted for t in s.manifest.tags)
        ]
