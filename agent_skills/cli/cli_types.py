from typing import Literal


class CLIArgs:
    """Arguments of the agent-skills command.

    Attributes carry no class defaults, argparse only fills in defaults for
    attributes the namespace does not have yet.
    """

    command: Literal["list", "validate", "show"]
    directory: str
    skill_name: str
    config_path: str | None
    verbose: bool
