"""CLI entry point for docsnippets."""
from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import click

from docsnippets import __version__, bootstrap
from docsnippets.config import RunConfig, load_config
from docsnippets.discovery import expand_paths
from docsnippets.errors import ConfigError, DocSnippetsError
from docsnippets.log import set_verbose
from docsnippets.pipeline import collect_cases, run_snippets_in_files
from docsnippets.reporting import JsonReporter, Reporter, TerminalReporter

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
ROOT_ENV = "CARGO_MANIFEST_DIR"


class ConfigurationFailed(click.ClickException):
    exit_code = 2


class CliState:
    """Holds global CLI state."""

    def __init__(self, verbose: bool) -> None:
        self.verbose = verbose


def _print_version(_: click.Context, __: click.Parameter, value: bool) -> None:
    if not value or click.get_current_context().resilient_parsing:
        return
    click.echo(f"docsnippets {__version__}")
    raise click.exceptions.Exit()


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option("--verbose", is_flag=True, help="Enable verbose logging output.")
@click.option(
    "--version",
    is_flag=True,
    callback=_print_version,
    expose_value=False,
    is_eager=True,
    help="Show the docsnippets version and exit.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Run the Rust code samples embedded in Markdown documents."""

    set_verbose(verbose)
    try:
        bootstrap()
    except ConfigError as exc:
        raise ConfigurationFailed(str(exc)) from exc
    ctx.obj = CliState(verbose=verbose)


def _config_options(func):
    options = [
        click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="YAML config file."),
        click.option("--manifest", type=click.Path(dir_okay=False), help="Cargo.toml used to seed the scratch project."),
        click.option(
            "--scratch-dir",
            type=click.Path(file_okay=False),
            help="Scratch project directory, deleted after the run (must be new, empty or left by a previous run).",
        ),
        click.option("--tool", type=str, help="Registered build tool name (default: cargo)."),
        click.option("--cargo", "executable", type=str, help="Build tool executable (default: cargo)."),
        click.option("--timeout", type=click.FloatRange(min=0, min_open=True), help="Seconds allowed per build tool call."),
        click.option("--cases", "case_filters", type=str, help="Comma-separated snippet name filters (supports globs)."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@cli.command()
@click.argument("paths", nargs=-1, type=click.Path(path_type=Path))
@_config_options
@click.option("--fail-fast", is_flag=True, help="Stop after the first failing snippet.")
@click.option("--list", "list_only", is_flag=True, help="List matched snippets without running.")
@click.option(
    "--report",
    "report_format",
    type=click.Choice(["terminal", "json"]),
    default="terminal",
    show_default=True,
    help="Report format (terminal by default).",
)
@click.option("--report-path", type=str, help="When --report json, write to this path instead of stdout.")
@click.option("--no-color", is_flag=True, help="Disable ANSI colors in terminal output.")
@click.pass_obj
def run(
    state: CliState,
    paths: Tuple[Path, ...],
    config_path: Optional[str],
    manifest: Optional[str],
    scratch_dir: Optional[str],
    tool: Optional[str],
    executable: Optional[str],
    timeout: Optional[float],
    case_filters: Optional[str],
    fail_fast: bool,
    list_only: bool,
    report_format: str,
    report_path: Optional[str],
    no_color: bool,
) -> None:
    """Extract snippets from PATHS (files or directories) and run them."""

    config = _build_config(config_path, manifest, scratch_dir, tool, executable, timeout)
    files = _resolve_documents(paths, config)
    patterns = _split_csv(case_filters)
    if list_only:
        _list_cases(files, patterns)
        return
    reporters: List[Reporter] = []
    if report_format == "json":
        reporters.append(JsonReporter(report_path))
    else:
        reporters.append(TerminalReporter(use_color=not no_color))
    try:
        report = run_snippets_in_files(
            config,
            files,
            reporters=reporters,
            patterns=patterns,
            fail_fast=fail_fast,
        )
    except ConfigError as exc:
        raise ConfigurationFailed(str(exc)) from exc
    except DocSnippetsError as exc:
        raise click.ClickException(str(exc)) from exc
    raise click.exceptions.Exit(0 if report.summary.ok else 1)


@cli.command(name="list")
@click.argument("paths", nargs=-1, type=click.Path(path_type=Path))
@_config_options
@click.pass_obj
def list_command(
    state: CliState,
    paths: Tuple[Path, ...],
    config_path: Optional[str],
    manifest: Optional[str],
    scratch_dir: Optional[str],
    tool: Optional[str],
    executable: Optional[str],
    timeout: Optional[float],
    case_filters: Optional[str],
) -> None:
    """List the snippets found in PATHS without running them."""

    config = _build_config(config_path, manifest, scratch_dir, tool, executable, timeout)
    _list_cases(_resolve_documents(paths, config), _split_csv(case_filters))


def _build_config(
    config_path: Optional[str],
    manifest: Optional[str],
    scratch_dir: Optional[str],
    tool: Optional[str],
    executable: Optional[str],
    timeout: Optional[float],
) -> RunConfig:
    try:
        if config_path:
            config = load_config(config_path)
        else:
            config = RunConfig.for_root(Path(os.environ.get(ROOT_ENV) or os.getcwd()))
    except ConfigError as exc:
        raise ConfigurationFailed(str(exc)) from exc
    return config.with_overrides(
        manifest_path=Path(manifest).resolve() if manifest else None,
        scratch_dir=Path(scratch_dir).resolve() if scratch_dir else None,
        tool=tool,
        executable=executable,
        timeout=timeout,
    )


def _resolve_documents(paths: Sequence[Path], config: RunConfig) -> List[Path]:
    sources = list(paths) or list(config.docs)
    if not sources:
        raise click.UsageError("No documents given: pass PATHS or set 'docs' in the config file.")
    return expand_paths(sources)


def _list_cases(files: Sequence[Path], patterns: Sequence[str]) -> None:
    cases, _ = collect_cases(files, patterns=patterns)
    for case in cases:
        suffix = " (should_panic)" if case.expect_panic and not case.skip else ""
        click.echo(f"{case.name} [{case.mode}]{suffix}")
    click.echo(f"{len(cases)} snippet(s)")


def main(argv: Optional[list[str]] = None) -> int:
    """Program entry point for console_scripts shim."""

    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=argv, prog_name="docsnippets", standalone_mode=True)
    except click.ClickException as err:  # pragma: no cover - click handles display
        err.show()
        return err.exit_code
    except SystemExit as exc:  # click may raise exit code
        return int(exc.code or 0)
    return 0


def _split_csv(value: Optional[str]) -> Tuple[str, ...]:
    if not value:
        return tuple()
    parts = [part.strip() for part in value.split(",") if part.strip()]
    return tuple(parts)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
