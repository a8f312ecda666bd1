"""Command-line interface for psguard using Click."""
from __future__ import annotations

import json
import logging
import sys
import time
from pathlib import Path
from typing import Any, Final

import click

from psguard.config import load_config
from psguard.constants import SCRIPT_SUFFIXES, __version__
from psguard.diagnostics import Diagnostic
from psguard.explain import RULE_CATALOG, format_rule_detail, format_rule_table
from psguard.runner import lint_file
from psguard.types import ConfigError, PsGuardConfig

logger = logging.getLogger(__name__)


def format_config_text(*, config: PsGuardConfig) -> str:
    """Format configuration as human-readable text."""
    lines: list[str] = [
        "psguard Configuration",
        "=" * 40,
        "",
        f"Config file: {config.config_path or '(defaults)'}",
        "",
        "Rules:",
    ]

    for name, enabled in sorted(config.rules.enabled.items()):
        status: str = "ENABLED" if enabled else "DISABLED"
        lines.append(f"  {name}: {status}")
        for key, value in sorted(config.rules.options_for(name).items()):
            lines.append(f"    {key} = {value!r}")

    return "\n".join(lines)


def format_config_json(*, config: PsGuardConfig) -> str:
    """Format configuration as JSON."""
    data: dict[str, Any] = {
        "config_path": str(config.config_path) if config.config_path else None,
        "rules": {
            name: {
                "enabled": enabled,
                "options": dict(config.rules.options_for(name)),
            }
            for name, enabled in config.rules.enabled.items()
        },
    }
    return json.dumps(data, indent=2, default=str)


class ConfigType(click.ParamType):
    """Custom Click parameter type for config path."""

    name: str = "path"

    def convert(
        self,
        value: str | Path | None,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> Path | None:
        if value is None:
            return None
        return Path(value)


CONFIG_TYPE: Final[ConfigType] = ConfigType()


@click.group()
@click.version_option(version=__version__, prog_name="psguard")
@click.option(
    "--config",
    "config_path",
    type=CONFIG_TYPE,
    default=None,
    help="Path to pyproject.toml (default: search upward from current directory)",
)
@click.option("--verbose", is_flag=True, help="Show progress")
@click.option("--debug", is_flag=True, help="Show detailed trace")
@click.pass_context
def cli(
    ctx: click.Context,
    *,
    config_path: Path | None,
    verbose: bool,
    debug: bool,
) -> None:
    """psguard - checks PowerShell scripts for mandatory top-level directives."""
    level: int = (
        logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    )
    logging.basicConfig(
        level=level,
        format="%(name)s: %(message)s",
        stream=sys.stderr,
    )

    ctx.ensure_object(dict)
    try:
        cfg: PsGuardConfig = load_config(path=config_path)
        ctx.obj["config"] = cfg
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        if e.path:
            click.echo(f"  in: {e.path}", err=True)
        ctx.exit(1)


@cli.command()
@click.option("--validate", is_flag=True, help="Only validate configuration, don't print")
@click.option("--json", "as_json", is_flag=True, help="Output configuration as JSON")
@click.pass_context
def config(ctx: click.Context, *, validate: bool, as_json: bool) -> None:
    """Show or validate configuration."""
    cfg: PsGuardConfig = ctx.obj["config"]

    if validate:
        click.echo(f"Configuration valid: {cfg.config_path or '(defaults)'}")
        return

    if as_json:
        click.echo(format_config_json(config=cfg))
    else:
        click.echo(format_config_text(config=cfg))


@cli.command()
@click.argument(
    "paths",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.pass_context
def check(ctx: click.Context, paths: tuple[Path, ...]) -> None:
    """Check the given script files and print diagnostics as JSON."""
    cfg: PsGuardConfig = ctx.obj["config"]
    start: float = time.perf_counter()
    logger.info("Found %d files", len(paths))

    diagnostics: list[Diagnostic] = []
    for path in paths:
        if path.suffix.lower() not in SCRIPT_SUFFIXES:
            logger.warning("%s does not look like a PowerShell script", path)
        diagnostics.extend(lint_file(file=path, config=cfg))

    logger.info(
        "Completed in %.2fs, %d diagnostics",
        time.perf_counter() - start, len(diagnostics),
    )
    click.echo(json.dumps([d.to_dict() for d in diagnostics], indent=2))


@cli.command()
@click.argument("rule_name", required=False, default=None)
@click.option("--all", "show_all", is_flag=True, help="List all rules")
@click.pass_context
def explain(ctx: click.Context, rule_name: str | None, *, show_all: bool) -> None:
    """Show rule documentation and examples."""
    cfg: PsGuardConfig = ctx.obj["config"]
    enabled: dict[str, bool] = dict(cfg.rules.enabled)

    if show_all:
        click.echo(format_rule_table(catalog=RULE_CATALOG, enabled=enabled))
        return

    if rule_name is None:
        click.echo("Usage: psguard explain <RULE_NAME> or psguard explain --all")
        ctx.exit(1)
        return

    lookup: dict[str, str] = {name.lower(): name for name in RULE_CATALOG}
    name: str | None = lookup.get(rule_name.lower())
    if name is None:
        click.echo(f"Error: Unknown rule '{rule_name}'.", err=True)
        ctx.exit(1)
        return

    click.echo(format_rule_detail(
        info=RULE_CATALOG[name],
        enabled=enabled.get(name, False),
    ))


def main() -> None:
    """Main entry point for psguard CLI."""
    cli()


if __name__ == "__main__":
    main()
