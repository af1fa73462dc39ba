"""Command-line interface for Substring Counter.

The `count` command scans a directory tree for a substring and prints a
JSON object mapping every scanned file to its match count.  Per-file
errors go to stderr as ``<path>: <error>`` and never stop the run.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from .. import __version__
from ..config_loader import LOG_LEVELS, STRATEGIES, ConfigError, load_config
from ..coordinator.engine import scan_directory
from ..report.emitter import ReportError, render_json, results_table, write_report

logger = logging.getLogger('substring_counter')

console = Console()


def configure_logging(level: str = 'WARNING') -> None:
    """Send log records to stderr as bare messages."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format='%(message)s',
        stream=sys.stderr,
    )


def _load_settings(config_path: Optional[str]):
    try:
        return load_config(Path(config_path) if config_path else None)
    except ConfigError as exc:
        raise click.BadParameter(str(exc), param_hint='--config') from exc


@click.group()
@click.version_option(__version__, prog_name='substring-counter')
def cli() -> None:
    """Substring Counter CLI."""
    pass


@cli.command()
@click.argument('directory', type=click.Path(exists=True, file_okay=False, dir_okay=True))
@click.argument('substring')
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False), default=None, help='Path to YAML configuration file.')
@click.option('--strategy', type=click.Choice(STRATEGIES), default=None, help='Scheduling strategy (overrides configuration).')
@click.option('--workers', type=click.IntRange(min=1), default=None, help='Number of worker threads (default: CPU count).')
@click.option('--batch-size', type=click.IntRange(min=1), default=None, help='Tasks in flight per batch for the async strategy.')
@click.option('--legacy-boundaries', is_flag=True, default=False, help='Only rewind after chunks that contained a match.')
@click.option('--follow-links', is_flag=True, default=False, help='Follow symbolic links while walking.')
@click.option('--format', 'output_format', type=click.Choice(['json', 'table']), default='json', help='Report format on stdout.')
@click.option('--output', 'output_path', type=click.Path(dir_okay=False, writable=True), default=None, help='Also write the report to a .json or .csv file.')
@click.option('--log-level', type=click.Choice(LOG_LEVELS, case_sensitive=False), default=None, help='Logging level (default: WARNING).')
def count(
    directory: str,
    substring: str,
    config_path: Optional[str],
    strategy: Optional[str],
    workers: Optional[int],
    batch_size: Optional[int],
    legacy_boundaries: bool,
    follow_links: bool,
    output_format: str,
    output_path: Optional[str],
    log_level: Optional[str],
) -> None:
    """Count SUBSTRING in every file under DIRECTORY."""
    if not substring:
        raise click.BadParameter('must not be empty', param_hint='SUBSTRING')
    settings = _load_settings(config_path)
    try:
        settings = settings.with_overrides(
            strategy=strategy,
            workers=workers,
            batch_size=batch_size,
            log_level=log_level,
            strict_boundaries=False if legacy_boundaries else None,
            follow_links=True if follow_links else None,
        )
    except ConfigError as exc:
        raise click.UsageError(str(exc)) from exc
    configure_logging(settings.log_level)

    try:
        results = scan_directory(directory, substring, settings=settings, logger=logger)
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc

    try:
        if output_path:
            write_report(results, Path(output_path))
        if output_format == 'table':
            console.print(results_table(results))
        else:
            # Filenames that are not valid UTF-8 survive only as escapes
            console.print_json(render_json(results, ensure_ascii=True), ensure_ascii=True)
    except ReportError as exc:
        logger.error('%s', exc)
        sys.exit(1)
    except UnicodeEncodeError as exc:
        logger.error('cannot write report: %s', exc)
        sys.exit(1)


@cli.command()
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False), default=None, help='Path to YAML configuration file.')
def show_config(config_path: Optional[str]) -> None:
    """Print the effective configuration."""
    settings = _load_settings(config_path)
    console.print_json(json.dumps(settings.to_dict(), indent=2))


if __name__ == '__main__':  # pragma: no cover
    cli()
