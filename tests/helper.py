from pathlib import Path

VALID_SKILL = """\
---
name: code-review
description: Reviews code for best practices and common mistakes
version: "1.2.0"
author: Jane Doe
tags: [review, quality]
allowed-tools: [read_file, grep]
---

## Instructions

Review the code carefully.
"""

GIT_COMMIT_SKILL = """\
---
name: git-commit
description: Helps write clear and conventional commit messages
tags: git
---

Write the commit message.
"""

SKILL_NO_FRONTMATTER = """\
## Instructions

Just some instructions without frontmatter.
"""

SKILL_INVALID_YAML = """\
---
name: [invalid
description: : bad yaml {{
---

Body content.
"""


def write_skill(
    root: Path, directory: str, content: str, file_name: str = "SKILL.md"
) -> Path:
    """Write a skill file into `root/directory` and return the directory."""
    d = root / directory
    d.mkdir(parents=True, exist_ok=True)
    (d / file_name).write_text(content, encoding="utf-8")
    return d


def make_skill(name: str, description: str, body: str = "Body.") -> str:
    """Build a minimal SKILL.md document."""
    return f"---\nname: {name}\ndescription: {description}\n---\n\n{body}\n"
