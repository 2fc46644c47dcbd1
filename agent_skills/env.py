from os import getenv
from pathlib import Path

AGENT_SKILLS_DIR = Path(getenv("AGENT_SKILLS_DIR", str(Path.cwd() / "skills")))
AGENT_SKILLS_CONFIG = getenv("AGENT_SKILLS_CONFIG")
