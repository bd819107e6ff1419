"""Command-line interface for filefacts.

Each command inspects explicitly named paths and renders the result with
``rich``.  Commands that check a condition (``hash``, ``locked``, ``touch``)
exit with status 1 when the check fails.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import click
from rich.console import Console
from rich.table import Table

from ..config_loader import DEFAULT_CONFIG_NAME, load_config
from ..digest.engine import HashAlgorithm
from ..errors import ConfigError
from ..locking.probe import LockState
from ..logging_setup import setup_logging
from ..metadata.view import MetadataView
from ..reporting.writer import CSVReportWriter, JSONReportWriter, build_report


console = Console()
logger = logging.getLogger(__name__)

ALGORITHM_CHOICE = click.Choice([a.value for a in HashAlgorithm], case_sensitive=False)
config_option = click.option(
    '--config',
    'config_path',
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help=f'Path to configuration file (defaults to ./{DEFAULT_CONFIG_NAME} if present).',
)
path_argument = click.argument('path', type=click.Path(path_type=Path))


def _load(config_path: Optional[Path], verbose: bool) -> Dict[str, Any]:
    if config_path is None and Path(DEFAULT_CONFIG_NAME).is_file():
        config_path = Path(DEFAULT_CONFIG_NAME)
    try:
        cfg = load_config(config_path)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    setup_logging('DEBUG' if verbose else cfg['logging']['level'], Console(stderr=True))
    return cfg


def _open_view(path: Path, cfg: Dict[str, Any]) -> MetadataView:
    try:
        return MetadataView(path, chunk_size=cfg['digest']['chunk_size'])
    except OSError as exc:
        raise click.ClickException(f'Cannot inspect {path}: {exc}') from exc


@click.group()
@click.option('-v', '--verbose', is_flag=True, help='Enable debug logging.')
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """filefacts: facts about a single file."""
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose


@cli.command()
@path_argument
@click.option('--algo', 'algos', type=ALGORITHM_CHOICE, multiple=True, help='Digest algorithm (repeatable).')
@click.option('--decimals', type=click.IntRange(min=0), default=None, help='Decimal places for the size.')
@config_option
@click.pass_context
def inspect(ctx: click.Context, path: Path, algos: Tuple[str, ...], decimals: Optional[int], config_path: Optional[Path]) -> None:
    """Show every known fact about PATH."""
    cfg = _load(config_path, ctx.obj['verbose'])
    view = _open_view(path, cfg)
    algorithms = algos or cfg['digest']['algorithms']
    report = build_report(view, algorithms, cfg['size']['decimals'] if decimals is None else decimals)

    table = Table(title=str(path), show_header=False)
    table.add_column('Fact')
    table.add_column('Value')
    table.add_row('Size', f'{report.size} ({report.size_bytes} bytes)')
    table.add_row('Created', report.created or 'unavailable')
    table.add_row('Accessed', report.accessed)
    table.add_row('Modified', report.modified)
    table.add_row('Hidden', str(report.hidden))
    table.add_row('Read-only', str(report.read_only))
    table.add_row('Symlink', str(report.symlink))
    table.add_row('Lock', report.lock_state)
    table.add_row('File version', report.file_version or '')
    table.add_row('Product version', report.product_version or '')
    for algo, digest in report.digests.items():
        table.add_row(algo.upper(), digest or '[red]unavailable[/red]')
    console.print(table)


@cli.command('hash')
@path_argument
@click.option('--algo', type=ALGORITHM_CHOICE, default=HashAlgorithm.SHA256.value, show_default=True)
@config_option
@click.pass_context
def hash_command(ctx: click.Context, path: Path, algo: str, config_path: Optional[Path]) -> None:
    """Print the digest of PATH."""
    cfg = _load(config_path, ctx.obj['verbose'])
    result = _open_view(path, cfg).digest(algo)
    if not result.ok:
        console.print(f'[red]{result.failure.value}[/red]: {result.message}')
        ctx.exit(1)
    click.echo(result.hexdigest)


@cli.command()
@path_argument
@click.option('--decimals', type=click.IntRange(min=0), default=None)
@click.option('--raw', is_flag=True, help='Print the size in bytes.')
@config_option
@click.pass_context
def size(ctx: click.Context, path: Path, decimals: Optional[int], raw: bool, config_path: Optional[Path]) -> None:
    """Print the size of PATH."""
    cfg = _load(config_path, ctx.obj['verbose'])
    view = _open_view(path, cfg)
    if raw:
        click.echo(view.size_in_bytes())
    else:
        click.echo(view.size_formatted(cfg['size']['decimals'] if decimals is None else decimals))


@cli.command()
@path_argument
@config_option
@click.pass_context
def locked(ctx: click.Context, path: Path, config_path: Optional[Path]) -> None:
    """Report whether PATH is exclusively locked."""
    cfg = _load(config_path, ctx.obj['verbose'])
    state = _open_view(path, cfg).lock_state()
    click.echo(state.value)
    if state is not LockState.UNLOCKED:
        ctx.exit(1)


@cli.command()
@path_argument
@click.option('--created', type=click.DateTime(), default=None)
@click.option('--accessed', type=click.DateTime(), default=None)
@click.option('--modified', type=click.DateTime(), default=None)
@config_option
@click.pass_context
def touch(ctx: click.Context, path: Path, created, accessed, modified, config_path: Optional[Path]) -> None:
    """Set the timestamps of PATH (local time)."""
    cfg = _load(config_path, ctx.obj['verbose'])
    view = _open_view(path, cfg)
    if not view.set_times(created=created, accessed=accessed, modified=modified):
        console.print(f'[red]Timestamps not applied to {path}[/red]')
        ctx.exit(1)
    console.print(f'Timestamps updated for {path}')


@cli.command()
@click.argument('paths', nargs=-1, required=True, type=click.Path(path_type=Path))
@click.option('--csv', 'csv_path', type=click.Path(dir_okay=False, path_type=Path), default=None, help='Write reports as CSV.')
@click.option('--json', 'json_path', type=click.Path(dir_okay=False, path_type=Path), default=None, help='Write reports as JSON.')
@click.option('--algo', 'algos', type=ALGORITHM_CHOICE, multiple=True, help='Digest algorithm (repeatable).')
@config_option
@click.pass_context
def report(
    ctx: click.Context,
    paths: Tuple[Path, ...],
    csv_path: Optional[Path],
    json_path: Optional[Path],
    algos: Tuple[str, ...],
    config_path: Optional[Path],
) -> None:
    """Write a report for each of PATHS."""
    cfg = _load(config_path, ctx.obj['verbose'])
    algorithms = list(algos or cfg['digest']['algorithms'])
    csv_writer = CSVReportWriter(csv_path, algorithms) if csv_path else None
    json_writer = JSONReportWriter(json_path) if json_path else None
    failed = 0
    try:
        for path in paths:
            try:
                view = MetadataView(path, chunk_size=cfg['digest']['chunk_size'])
            except OSError as exc:
                logger.warning('Skipping %s: %s', path, exc)
                failed += 1
                continue
            entry = build_report(view, algorithms, cfg['size']['decimals'])
            if csv_writer:
                csv_writer.write_report(entry)
            if json_writer:
                json_writer.add_report(entry)
            if not (csv_writer or json_writer):
                console.print_json(json.dumps(asdict(entry)))
    finally:
        if csv_writer:
            csv_writer.close()
        if json_writer:
            json_writer.flush()
    if failed:
        ctx.exit(1)


@cli.command()
@config_option
@click.pass_context
def show_config(ctx: click.Context, config_path: Optional[Path]) -> None:
    """Print the current configuration."""
    cfg = _load(config_path, ctx.obj['verbose'])
    console.print_json(json.dumps(cfg, indent=2))


if __name__ == '__main__':  # pragma: no cover
    cli()
