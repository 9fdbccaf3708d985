"""Command-line interface for trackmix.

The ``trackmix`` group holds the global options; each subcommand lives in
its own module and fetches the shared MediaTrackService via get_service().
"""

import sys
from pathlib import Path
from typing import NoReturn

import click

from trackmix.cli.exit_codes import ExitCode
from trackmix.config import TomlParseError, get_config
from trackmix.service import MediaTrackService

# Logging is set up once per process even if main() is invoked repeatedly
_logging_ready = False

# ctx.obj keys forwarded to get_config()
_CONFIG_KEYS = ("config_path", "ffprobe_path", "mkvmerge_path", "temp_directory")

_path_type = click.Path(path_type=Path)


def _configure_logging(
    config_path: Path | None,
    level: str | None,
    file: Path | None,
    as_json: bool,
) -> None:
    """Install log handlers using the config file plus any --log-* flags."""
    global _logging_ready
    if _logging_ready:
        return

    from trackmix.config.logging_factory import configure_logging_from_cli

    configure_logging_from_cli(
        config_path=config_path, level=level, file=file, json_output=as_json
    )
    _logging_ready = True


def _fail_config(what: str, error: Exception) -> NoReturn:
    click.echo(f"Error: Invalid {what}: {error}", err=True)
    sys.exit(ExitCode.CONFIG_ERROR)


def get_service(ctx: click.Context) -> MediaTrackService:
    """Return the MediaTrackService for this invocation.

    The service is built from the effective configuration on first use and
    kept in ``ctx.obj``; one placed there beforehand is used unchanged. An
    explicitly given ``--config`` file must parse, otherwise the command
    exits with CONFIG_ERROR.
    """
    obj = ctx.ensure_object(dict)
    if obj.get("service") is None:
        settings = {key: obj.get(key) for key in _CONFIG_KEYS}
        try:
            config = get_config(
                **settings, strict=settings["config_path"] is not None
            )
        except (TomlParseError, ValueError) as e:
            _fail_config("configuration", e)
        obj["service"] = MediaTrackService.from_config(config)
    return obj["service"]


@click.group()
@click.version_option(package_name="trackmix")
@click.option(
    "--config",
    "config_path",
    type=_path_type,
    help="Read this TOML file instead of ~/.trackmix/config.toml.",
)
@click.option(
    "--ffprobe", "ffprobe_path", type=_path_type, help="ffprobe executable to use."
)
@click.option(
    "--mkvmerge",
    "mkvmerge_path",
    type=_path_type,
    help="mkvmerge executable to use.",
)
@click.option(
    "--temp-dir",
    "temp_directory",
    type=_path_type,
    help="Where per-mix working directories are created.",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    help="Log level for this run.",
)
@click.option("--log-file", type=_path_type, help="Write logs to this file.")
@click.option("--log-json", is_flag=True, help="Emit log records as JSON lines.")
@click.pass_context
def main(
    ctx: click.Context,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
    **settings: Path | None,
) -> None:
    """trackmix - Inspect media tracks and remux selections with mkvmerge."""
    ctx.ensure_object(dict).update(settings)

    try:
        _configure_logging(settings["config_path"], log_level, log_file, log_json)
    except ValueError as e:
        _fail_config("logging configuration", e)


def _register_commands() -> None:
    # Subcommand modules import get_service from here
    from trackmix.cli.inspect import inspect_command
    from trackmix.cli.mix import mix_command
    from trackmix.cli.size import size_command
    from trackmix.cli.tools import tools_command

    for command in (inspect_command, mix_command, size_command, tools_command):
        main.add_command(command)


_register_commands()
