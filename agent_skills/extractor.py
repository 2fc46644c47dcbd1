"""Split SKILL.md documents into a YAML frontmatter block and a Markdown body.

Two modes share one grammar, a `---` line, the YAML block, another `---`
line, then the body:

* `split_document` works on the whole text and keeps the body.
* `read_frontmatter` consumes a text stream line by line and stops at the
  closing delimiter, so the body is never read.

Delimiters are whole lines in both modes. A `---` inside a YAML value, such
as `title: a---b`, does not end the block, unlike a plain substring split.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import yaml
from frontmatter.default_handlers import YAMLHandler
from yaml.composer import ComposerError

from agent_skills.conf import FRONTMATTER_DELIMITER
from agent_skills.models import Diagnostic, DiagnosticCode

if TYPE_CHECKING:
    from pathlib import Path
    from typing import TextIO

DEFAULT_MAX_FRONTMATTER_CHARS = 65536


class SkillYAMLLoader(yaml.SafeLoader):
    """Safe loader rejecting aliases.

    An alias expands into a full copy of its anchor, so nested aliases in a
    small block can decode into an unbounded number of values.
    """

    def compose_node(self, parent: Any, index: Any) -> Any:
        if self.check_event(yaml.AliasEvent):
            event = self.peek_event()
            raise ComposerError(
                None,
                None,
                f"found alias *{event.anchor}, aliases are not allowed",
                event.start_mark,
            )
        return super().compose_node(parent, index)


class SkillFileHandler(YAMLHandler):
    """YAML frontmatter handler accepting only exact `---` delimiter lines.

    The stock handler also accepts longer dash runs, which would make the two
    extraction modes disagree about where the frontmatter ends.
    """

    FM_BOUNDARY = re.compile(r"^[ \t]*---[ \t]*$", re.MULTILINE)

    def load(self, fm: str, **kwargs: Any) -> Any:
        """Parse YAML frontmatter with `SkillYAMLLoader` by default."""
        kwargs.setdefault("Loader", SkillYAMLLoader)
        return super().load(fm, **kwargs)


handler = SkillFileHandler()


@dataclass(frozen=True)
class Frontmatter:
    """Raw frontmatter block of a document.

    first_line is the 1-based line of the file on which line 0 of `block`
    sits, used to report YAML errors at file positions.
    """

    block: str
    first_line: int
    body: str | None = None

    @property
    def text(self) -> str:
        """The block without surrounding whitespace."""
        return self.block.strip()


def _malformed(path: Path, detail: str) -> Diagnostic:
    return Diagnostic.error(
        DiagnosticCode.FRONTMATTER_INVALID,
        f"Invalid SKILL.md format: YAML frontmatter not found or malformed ({detail})",
        path,
    )


def split_document(
    text: str, path: Path
) -> tuple[Frontmatter | None, list[Diagnostic]]:
    """Split a whole document into frontmatter and body.

    Only the first two delimiter lines are boundaries. Any later `---` line,
    such as a Markdown horizontal rule, stays in the body verbatim.
    """
    opening = handler.FM_BOUNDARY.search(text)
    if opening is None:
        return None, [_malformed(path, "missing opening '---'")]
    try:
        block, body = handler.split(text)
    except ValueError:
        return None, [_malformed(path, "missing closing '---'")]

    first_line = text.count("\n", 0, opening.start()) + 1
    return Frontmatter(block=block, first_line=first_line, body=body.strip()), []


def read_frontmatter(
    stream: TextIO,
    path: Path,
    max_chars: int = DEFAULT_MAX_FRONTMATTER_CHARS,
) -> tuple[Frontmatter | None, list[Diagnostic]]:
    """Read only the frontmatter block from a text stream.

    Reading stops at the closing delimiter, at end of stream, or once the
    block grows past `max_chars`. The caller owns the stream.
    """
    first = stream.readline(max_chars + 1)
    if first.strip() != FRONTMATTER_DELIMITER:
        return None, [_malformed(path, "first line must be '---'")]

    lines: list[str] = []
    size = 0
    while True:
        # Leave room for the closing delimiter line even when the block is full.
        limit = max_chars - size + len(FRONTMATTER_DELIMITER) + 2
        line = stream.readline(limit)
        if not line:
            return None, [_malformed(path, "missing closing '---'")]
        truncated = len(line) == limit and not line.endswith("\n")
        if not truncated and line.strip() == FRONTMATTER_DELIMITER:
            return Frontmatter(block="".join(lines), first_line=2), []

        size += len(line)
        if size > max_chars:
            return None, [
                _malformed(path, f"frontmatter exceeds {max_chars} characters")
            ]
        lines.append(line)
