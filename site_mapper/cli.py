# === FILE: site_mapper/cli.py ===
"""
Command-line entry point for SiteMapper.

Usage:
  site-mapper URL [options]

Options:
  --max-depth INT      Maximum link depth from the seed (default: 2)
  --json PATH          Save the site map as JSON
  --xml PATH           Save the site map as XML
  --config PATH        YAML/JSON config file; flags override its values
  --workers INT        Size of the fetch worker pool (default: 10)
  --timeout SEC        Per-request timeout
  --crawl-timeout SEC  Stop the whole crawl after SEC seconds, keep partial results
  --sort-children      Order children by URL for reproducible output
  --log-level LEVEL    Logging level (DEBUG, INFO, ...)
  --log-file PATH      Also write logs to this file
  --version, -v        Show the SiteMapper version

Example:
  site-mapper https://example.com --max-depth 3 --json sitemap.json
"""
import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from site_mapper import __version__
from site_mapper.config import load_config
from site_mapper.crawler.crawler import SeedFetchError
from site_mapper.engine import start_crawl
from site_mapper.logger import init_logging
from site_mapper.report.json_report import render_json
from site_mapper.report.text_report import render_tree
from site_mapper.report.xml_report import render_xml
from site_mapper.sitemap import SiteTreeError, build_site_tree

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _format_validation_error(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteMapper, version %(version)s')
@click.argument('url')
@click.option(
    '--max-depth', '--max_depth', 'max_depth',
    type=click.IntRange(min=0),
    default=None,
    help='Maximum link depth from the seed  [default: 2]'
)
@click.option(
    '--json', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Export the site map as a JSON file'
)
@click.option(
    '--xml', 'xml_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Export the site map as an XML file'
)
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='YAML/JSON config file'
)
@click.option('--workers', '-w', type=click.IntRange(min=1), default=None, help='Worker pool size  [default: 10]')
@click.option('--timeout', type=float, default=None, help='Per-request timeout in seconds')
@click.option('--crawl-timeout', 'crawl_timeout', type=float, default=None, help='Budget for the whole crawl in seconds')
@click.option('--sort-children', is_flag=True, default=False, help='Order children by URL')
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file (stderr only if not given)'
)
def cli(url, max_depth, json_output, xml_output, config_path, workers, timeout,
        crawl_timeout, sort_children, log_level, log_file):
    """Crawl URL and print a site map of same-host pages."""
    init_logging(level=log_level, log_file=str(log_file) if log_file else None)
    try:
        cfg = load_config(
            config_path,
            base_url=url,
            max_depth=max_depth,
            workers=workers,
            timeout=timeout,
            crawl_timeout=crawl_timeout,
            sort_children=sort_children or None,
        )
    except ValidationError as e:
        print_error(f'Invalid configuration: {_format_validation_error(e)}')
    except (OSError, ValueError, TypeError) as e:
        print_error(f'Error loading configuration: {e}')

    dropped = []
    try:
        store = asyncio.run(start_crawl(cfg, on_drop=dropped.append))
    except SeedFetchError as e:
        print_error(f'Crawl failed: {e}')

    try:
        tree = build_site_tree(store, sort_children=cfg.sort_children)
    except SiteTreeError as e:
        print_error(f'Cannot build site map: {e}')

    click.echo(render_tree(tree))
    if dropped:
        click.echo(f'{len(dropped)} link(s) could not be fetched and are missing from the map', err=True)

    if json_output:
        try:
            click.echo(f'JSON site map: {render_json(tree, json_output)}')
        except OSError as e:
            print_error(f'Error saving JSON: {e}')

    if xml_output:
        try:
            click.echo(f'XML site map: {render_xml(tree, xml_output)}')
        except OSError as e:
            print_error(f'Error saving XML: {e}')


if __name__ == "__main__":
    cli()
