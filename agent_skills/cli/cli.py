"""agent-skills CLI."""

import argparse
import logging
import sys
from collections.abc import Sequence

from agent_skills.cli.cli_types import CLIArgs
from agent_skills.conf import AgentSkillsConfig, load_config
from agent_skills.env import AGENT_SKILLS_CONFIG, AGENT_SKILLS_DIR
from agent_skills.errors import ConfigError
from agent_skills.loader import SkillLoader
from agent_skills.models import Diagnostic, DiagnosticSeverity, has_errors
from agent_skills.prompts import SkillPromptRenderer
from agent_skills.resources import list_resources
from agent_skills.validation import SkillValidator

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_USAGE = 2


def setup_argument_parser() -> argparse.ArgumentParser:
    """Setup the argument parser."""
    parser = argparse.ArgumentParser(
        prog="agent-skills", description="Discover and validate agent skills."
    )
    parser.add_argument(
        "--config",
        type=str,
        default=AGENT_SKILLS_CONFIG,
        help="The path to a JSON configuration file.",
        dest="config_path",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser(
        "list", help="List skills by reading their frontmatter only."
    )
    validate_parser = subparsers.add_parser(
        "validate", help="Load and validate every skill."
    )
    for sub in (list_parser, validate_parser):
        sub.add_argument(
            "directory",
            nargs="?",
            default=str(AGENT_SKILLS_DIR),
            help="The directory containing skill folders.",
        )

    show_parser = subparsers.add_parser("show", help="Render one skill.")
    show_parser.add_argument(
        "directory", help="The directory containing skill folders."
    )
    show_parser.add_argument("skill_name", help="The name of the skill to show.")
    return parser


def _print_diagnostics(diagnostics: Sequence[Diagnostic]) -> None:
    for diagnostic in diagnostics:
        print(diagnostic, file=sys.stderr)


def _summary(skill_count: int, diagnostics: Sequence[Diagnostic]) -> str:
    errors = sum(1 for d in diagnostics if d.severity == DiagnosticSeverity.ERROR)
    warnings = sum(1 for d in diagnostics if d.severity == DiagnosticSeverity.WARNING)
    return f"{skill_count} skill(s), {errors} error(s), {warnings} warning(s)"


def run_list(loader: SkillLoader, args: CLIArgs) -> int:
    """List skill names and descriptions."""
    metadata, diagnostics = loader.load_metadata(args.directory)
    for meta in metadata:
        version = f" ({meta.version})" if meta.version else ""
        print(f"{meta.name}{version}: {meta.description}")
    _print_diagnostics(diagnostics)
    return EXIT_INVALID if has_errors(diagnostics) else EXIT_OK


def run_validate(loader: SkillLoader, args: CLIArgs) -> int:
    """Validate all skills and report diagnostics."""
    skill_set = loader.load_skill_set(args.directory, validate=True)
    _print_diagnostics(skill_set.diagnostics)
    print(_summary(len(skill_set.skills), skill_set.diagnostics))
    return EXIT_OK if skill_set.is_valid else EXIT_INVALID


def run_show(loader: SkillLoader, args: CLIArgs) -> int:
    """Render the details of one skill."""
    skill_set = loader.load_skill_set(args.directory)
    skill = skill_set.get_skill(args.skill_name)
    if skill is None:
        _print_diagnostics(skill_set.diagnostics)
        print(f"Error: Skill '{args.skill_name}' not found.", file=sys.stderr)
        return EXIT_INVALID

    renderer = SkillPromptRenderer()
    details = renderer.render_skill_details(skill, resources=list_resources(skill))
    print(details, end="")
    return EXIT_OK


COMMANDS = {
    "list": run_list,
    "validate": run_validate,
    "show": run_show,
}


def main(argv: Sequence[str] | None = None) -> int:
    """agent-skills CLI entrypoint."""
    args = setup_argument_parser().parse_args(argv, namespace=CLIArgs())
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config_path) if args.config_path else None
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE
    config = config or AgentSkillsConfig()
    logger.debug("run %s on %s", args.command, args.directory)

    loader = SkillLoader(config.loader, SkillValidator(config.validation))
    return COMMANDS[args.command](loader, args)


if __name__ == "__main__":
    sys.exit(main())
