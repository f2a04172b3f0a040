import json
import logging
from pathlib import Path

import click
import yaml

from . import environment, registry
from .config import RegistryLayout, load_layout
from .errors import MobkitError

logger = logging.getLogger("mobkit")


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug-level logging.")
@click.option(
    "--config", "-c", "config_path", type=click.Path(dir_okay=False), help="Path to a mobkit layout YAML file."
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_path: str | None) -> None:
    """mobkit: platform bookkeeping and environment checks for mobile projects."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,
    )
    ctx.obj = load_layout(config_path)


_root_option = click.option(
    "--root",
    "-r",
    default=".",
    show_default=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Project root directory.",
)


# ---------------------------------------------------------------------------
# Platform manifest commands
# ---------------------------------------------------------------------------


@main.group()
def platforms() -> None:
    """Inspect and edit the installed-platforms manifest."""


@platforms.command("list")
@_root_option
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json", "yaml"]),
    default="text",
    show_default=True,
    help="Output format.",
)
@click.pass_obj
def platforms_list(layout: RegistryLayout, root: Path, output_format: str) -> None:
    """List installed platforms and their versions."""
    try:
        entries = registry.get_platform_versions(root, layout)
    except MobkitError as exc:
        raise click.ClickException(str(exc)) from exc

    rows = [e.model_dump() for e in entries]
    if output_format == "json":
        click.echo(json.dumps(rows, indent=2))
        return
    if output_format == "yaml":
        click.echo(yaml.safe_dump(rows, default_flow_style=False, sort_keys=False), nl=False)
        return
    if not entries:
        click.echo("No platforms installed.")
        return
    for entry in entries:
        click.echo(entry.spec)


@platforms.command("save")
@click.argument("platform")
@click.argument("version")
@_root_option
@click.pass_obj
def platforms_save(layout: RegistryLayout, platform: str, version: str, root: Path) -> None:
    """Record PLATFORM at VERSION (release, local path or git URL)."""
    try:
        registry.save(root, platform, version, layout)
    except MobkitError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Saved {platform}@{version} to {layout.manifest_path(root)}")


@platforms.command("remove")
@click.argument("platform")
@_root_option
@click.pass_obj
def platforms_remove(layout: RegistryLayout, platform: str, root: Path) -> None:
    """Remove PLATFORM from the manifest."""
    try:
        registry.remove(root, platform, layout)
    except MobkitError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Removed {platform} from {layout.manifest_path(root)}")


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------


@main.command("env")
@_root_option
def env(root: Path) -> None:
    """Show the host OS and the native project folders under --root."""
    host = environment.host_platform() or "unknown"
    found = environment.detect_project_platforms(root)
    logger.debug("Environment probe for %s: host=%s projects=%s", root, host, found)
    click.echo(f"Host OS:   {host}")
    click.echo(f"Android:   {'yes' if 'android' in found else 'no'}")
    click.echo(f"iOS:       {'yes' if 'ios' in found else 'no'}")
