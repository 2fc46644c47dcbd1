"""agent-skills command line interface."""

from agent_skills.cli.cli import main

__all__ = ["main"]
