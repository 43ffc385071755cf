"""CLI adapter for ``lib_autoconfig`` built on ``lib_cli_exit_tools``.

Purpose
-------
Let operators inspect how settings resolve (which keys exist, what a key
coerces to, and which source supplied it) without writing Python code.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command that wires global traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata for quick diagnostics.
* :func:`cli_list` – prints every key with its raw value as JSON.
* :func:`cli_get` – resolves one key with a chosen coercer.
* :func:`cli_trace` – prints the provenance sentence for one key.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
The CLI lives in the outermost layer. It assembles an
:class:`~lib_autoconfig.core.AutoConfig` from the requested sources and never
reaches into adapter internals. ``lib_cli_exit_tools`` centralises the exit
code strategy so library errors (missing keys, parse failures, unreadable
sources) surface consistently across shells and CI.
"""

from __future__ import annotations

import json
import sys
from contextlib import contextmanager
from importlib import metadata
from pathlib import Path
from typing import Any, Callable, Final, Iterator, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .application.matching import match_key
from .application.resolution import MISSING
from .core import AutoConfig
from .domain.types import BY_NAME, FLAG

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_PASSTHROUGH_SETTINGS = {**CLICK_CONTEXT_SETTINGS, "ignore_unknown_options": True}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

TYPE_CHOICES: Final[tuple[str, ...]] = tuple(BY_NAME)


def _resolve_version() -> str:
    """Return the installed package version, or ``"0.0.0"`` when metadata is unavailable."""

    try:
        return metadata.version("lib_autoconfig")
    except metadata.PackageNotFoundError:
        return "0.0.0"


def _source_options(command: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the options shared by every command that assembles a configuration."""

    decorators = [
        click.option(
            "--config",
            "configs",
            multiple=True,
            type=click.Path(path_type=Path, dir_okay=False),
            help="Configuration file to read (repeatable, later files win)",
        ),
        click.option("--url", "urls", multiple=True, help="Configuration URL to read (repeatable)"),
        click.option(
            "--env/--no-env",
            default=True,
            show_default=True,
            help="Include environment variables",
        ),
        click.option("--env-prefix", default=None, help="Only read environment variables with this prefix"),
        click.argument("arguments", nargs=-1, type=click.UNPROCESSED),
    ]
    for decorator in reversed(decorators):
        command = decorator(command)
    return command


def _build_config(
    configs: Sequence[Path],
    urls: Sequence[str],
    env: bool,
    env_prefix: Optional[str],
    arguments: Sequence[str],
) -> AutoConfig:
    """Assemble sources in precedence order: files, URLs, environment, command line."""

    config = AutoConfig().with_configs(*configs)
    for url in urls:
        config.with_url_config(url)
    if env:
        config.with_environment_variables(env_prefix)
    if arguments:
        config.with_command_line_arguments(list(arguments))
    return config


@click.group(
    help="Convention-agnostic settings resolver",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="lib_autoconfig",
    message="lib_autoconfig version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command configuring traceback handling for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print the installed version and the coercers accepted by ``get --type``."""

    try:
        meta = metadata.metadata("lib_autoconfig")
    except metadata.PackageNotFoundError:
        click.echo("lib_autoconfig (metadata unavailable)")
        return
    rows = [
        ("Version", meta.get("Version", _resolve_version())),
        ("Requires-Python", meta.get("Requires-Python")),
        ("Summary", meta.get("Summary")),
        ("Types", ", ".join(TYPE_CHOICES)),
    ]
    width = max(len(label) for label, _ in rows)
    click.echo(f"{meta.get('Name', 'lib_autoconfig')}:")
    for label, value in rows:
        if value:
            click.echo(f"  {label.ljust(width)} : {value}")


@cli.command("list", context_settings=_PASSTHROUGH_SETTINGS)
@_source_options
@click.option(
    "--indent",
    type=int,
    default=None,
    help="Pretty-print JSON output with the provided indent size",
)
@click.option(
    "--provenance/--no-provenance",
    default=False,
    help="Include the source of each key in the output",
)
def cli_list(
    configs: Sequence[Path],
    urls: Sequence[str],
    env: bool,
    env_prefix: Optional[str],
    arguments: Sequence[str],
    indent: Optional[int],
    provenance: bool,
) -> None:
    """Print every key with its raw value as JSON.

    Trailing ARGUMENTS are read as command-line parameters (``-key value`` or
    ``-flag``); separate them with ``--``.
    """

    config = _build_config(configs, urls, env, env_prefix, arguments)
    listing = config.get_all()
    if not provenance:
        click.echo(json.dumps(listing, indent=indent))
        return
    payload = {}
    for key, value in listing.items():
        entry = config.store.find_by_exact_key(key)
        payload[key] = {"value": value, "source": entry.source.description if entry else None}
    click.echo(json.dumps(payload, indent=indent))


@cli.command("get", context_settings=_PASSTHROUGH_SETTINGS)
@click.option("--key", "key", required=True, help="Key to resolve, in any naming convention")
@click.option(
    "--type",
    "type_name",
    type=click.Choice(TYPE_CHOICES, case_sensitive=False),
    default="string",
    show_default=True,
    help="Coercer applied to the raw value",
)
@click.option("--default", default=None, help="Value printed when the key is missing")
@_source_options
def cli_get(
    key: str,
    type_name: str,
    default: Optional[str],
    configs: Sequence[Path],
    urls: Sequence[str],
    env: bool,
    env_prefix: Optional[str],
    arguments: Sequence[str],
) -> None:
    """Resolve KEY, coerce it, and print its canonical textual form."""

    config = _build_config(configs, urls, env, env_prefix, arguments)
    if default is not None and match_key(config.store, key) is None:
        click.echo(default)
        return
    setting_type = BY_NAME[type_name.lower()]
    if setting_type is FLAG:
        click.echo(FLAG.format(config.get_flag(key)))
        return
    click.echo(setting_type.format(config.get(key, setting_type, MISSING)))


@cli.command("trace", context_settings=_PASSTHROUGH_SETTINGS)
@click.option("--key", "key", required=True, help="Key to trace, in any naming convention")
@_source_options
def cli_trace(
    key: str,
    configs: Sequence[Path],
    urls: Sequence[str],
    env: bool,
    env_prefix: Optional[str],
    arguments: Sequence[str],
) -> None:
    """Print which source supplied KEY."""

    config = _build_config(configs, urls, env, env_prefix, arguments)
    click.echo(config.get_key_source(key))


@contextmanager
def _traceback_settings_preserved(restore: bool) -> Iterator[None]:
    config = lib_cli_exit_tools.config
    saved = (getattr(config, "traceback", False), getattr(config, "traceback_force_color", False))
    try:
        yield
    finally:
        if restore:
            config.traceback, config.traceback_force_color = saved


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Run the CLI and return the process exit code.

    Library errors (missing keys, parse failures, unreadable sources) print as
    a short summary, or as a full traceback under ``--traceback``.
    """

    with _traceback_settings_preserved(restore_traceback):
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name="lib_autoconfig",
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            verbose = lib_cli_exit_tools.config.traceback
            lib_cli_exit_tools.print_exception_message(
                trace_back=verbose,
                length_limit=_TRACEBACK_VERBOSE_LIMIT if verbose else _TRACEBACK_SUMMARY_LIMIT,
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
