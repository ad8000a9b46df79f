"""Command line interface for initx."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Sequence

from . import __version__
from .applier import TemplateApplier, ensure_empty
from .config import ProjectVariables, template_dir
from .create import create_template
from .defaults import install_defaults
from .errors import InitxError
from .registry import TemplateRegistry

COMMANDS = ("list", "create", "defaults")


def _prompt_name(prompt: str = "Project Name", reader: Callable[[str], str] | None = None) -> str:
    reader = reader or input
    while True:
        value = reader(f"? {prompt}: ").strip()
        if value:
            return value
        print("✖ Name cannot be empty", file=sys.stderr)


def _report(message: str, detail: str = "") -> None:
    print(f"» {message} {detail}".rstrip())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="initx",
        description="Initialize new projects from reusable templates",
        epilog="Commands: list (show installed templates), create (create a new template), "
        "defaults (install the default templates, done on first run)",
    )
    parser.add_argument(
        "target",
        nargs="?",
        metavar="TEMPLATE",
        help="Template to install, or one of: " + ", ".join(COMMANDS),
    )
    parser.add_argument("-n", "--name", help="Skip name prompt")
    parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Whether to init in a dirty directory / override existing template",
    )
    parser.add_argument(
        "--template-dir",
        type=Path,
        help="Directory holding installed templates (defaults to ~/.config/templates)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log output, repeat for debug messages",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _handle_list(args: argparse.Namespace, registry: TemplateRegistry) -> int:
    _report("Template List", f"({registry.root})")
    for template in registry.list_templates():
        aliases = f" ({', '.join(template.aliases)})" if template.aliases else ""
        description = f" - {template.description}" if template.description else ""
        print(f"- {template.name}{aliases}{description}")
    return 0


def _handle_create(args: argparse.Namespace, registry: TemplateRegistry) -> int:
    name = args.name or _prompt_name()
    path = create_template(registry.root, name, force=args.force)
    _report(f"Template '{name}' Created", f"({path})")
    return 0


def _handle_defaults(args: argparse.Namespace, registry: TemplateRegistry) -> int:
    install_defaults(registry.root)
    _report("Templates Created", f"({registry.root})")
    return 0


def _handle_install(args: argparse.Namespace, registry: TemplateRegistry) -> int:
    template = registry.get(args.target)
    destination = Path.cwd()
    if not args.force:
        ensure_empty(destination)
    name = args.name or _prompt_name()
    variables = ProjectVariables.from_name(name, destination)

    result = TemplateApplier().apply(template, variables.context(), destination, force=args.force)
    _report(
        f"Initialized {template.name} project '{variables.name}'",
        f"({len(result.files)} files, {len(result.commands)} commands)",
    )
    return 0


HANDLERS = {
    "list": _handle_list,
    "create": _handle_create,
    "defaults": _handle_defaults,
}


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.target is None:
        parser.error("You need to give me something to do")

    root = args.template_dir or template_dir()
    registry = TemplateRegistry(root, install_defaults=args.target != "defaults")
    handler = HANDLERS.get(args.target, _handle_install)
    try:
        return handler(args, registry)
    except (InitxError, ValueError) as exc:
        print(f"✖ {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
