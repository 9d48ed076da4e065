"""CLI entry point for the buildenv command."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from buildenv.config import (
    BuildEnvConfig,
    config_path,
    load_project_config,
    save_project_config,
)
from buildenv.exceptions import BuildEnvError
from buildenv.manifest import ManifestPlaceholders
from buildenv.secrets import resolve_secrets_detailed

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _add_resolution_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--env-file", help="Path to the .env file (default: <root>/.env)")
    parser.add_argument(
        "--require",
        action="append",
        metavar="NAME",
        help="Required secret name; repeat for several (default: GOOGLE_MAPS_API_KEY)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="buildenv",
        description="Resolve build secrets from the repo .env file or the environment",
    )
    parser.add_argument("--root", type=Path, default=None, help="Repository root (default: cwd)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="Verify that every required secret resolves")
    _add_resolution_args(check)

    inject = sub.add_parser("inject", help="Write resolved secrets as manifest placeholders")
    _add_resolution_args(inject)
    inject.add_argument("--output", help="Placeholders file to write")

    init = sub.add_parser("init", help="Write a default buildenv.toml")
    init.add_argument("--force", action="store_true", help="Overwrite an existing buildenv.toml")
    return parser


def _env_path(args: argparse.Namespace, root: Path, config: BuildEnvConfig) -> Path:
    if args.env_file:
        return Path(args.env_file)
    return config.env_path(root)


def _cmd_check(args: argparse.Namespace, root: Path, config: BuildEnvConfig) -> int:
    names = args.require or config.required
    resolved = resolve_secrets_detailed(names, _env_path(args, root, config))

    table = Table(title="Build secrets")
    table.add_column("Name")
    table.add_column("Source")
    table.add_column("Value")
    for secret in resolved.values():
        table.add_row(escape(secret.name), secret.source.value, escape(secret.masked))
    console.print(table)
    return 0


def _cmd_inject(args: argparse.Namespace, root: Path, config: BuildEnvConfig) -> int:
    names = args.require or config.required
    resolved = resolve_secrets_detailed(names, _env_path(args, root, config))
    placeholders = ManifestPlaceholders.from_secrets(
        {name: secret.value for name, secret in resolved.items()}
    )
    output = Path(args.output) if args.output else config.output_path(root)
    path = placeholders.write(output)
    console.print(f"Wrote {len(placeholders)} placeholder(s) to {escape(str(path))}")
    return 0


def _cmd_init(args: argparse.Namespace, root: Path, config: BuildEnvConfig) -> int:
    path = config_path(root)
    if path.exists() and not args.force:
        raise BuildEnvError(f"{path} already exists (use --force to overwrite)")
    save_project_config(BuildEnvConfig(), root)
    console.print(f"Wrote {escape(str(path))}")
    return 0


COMMANDS = {
    "check": _cmd_check,
    "inject": _cmd_inject,
    "init": _cmd_init,
}


def main(argv: list[str] | None = None) -> int:
    """Run the buildenv CLI and return the exit status."""
    args = build_parser().parse_args(argv)
    _setup_logging(args.verbose)

    root = (args.root or Path.cwd()).resolve()
    config = load_project_config(root)
    logger.debug("Using root %s", root)

    try:
        return COMMANDS[args.command](args, root, config)
    except BuildEnvError as e:
        err_console.print(f"[bold red]Error:[/] {escape(str(e))}")
        return 1
