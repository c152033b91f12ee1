"""sitegraph CLI - inspect and compile sites from the command line."""

import logging
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager

import click
import yaml
from rich.table import Table
from rich.text import Text

from .console import console
from .errors import SiteError
from .logging_setup import init_json_logging
from .site import Site
from .ui import display_site_error

logger = logging.getLogger(__name__)


@contextmanager
def _reporting_site_errors(verbose: bool) -> Iterator[None]:
    """Render SiteErrors as a panel and exit with status 1."""
    try:
        yield
    except SiteError as e:
        display_site_error(console, e, verbose=verbose)
        sys.exit(1)


def _open_site(ctx: click.Context) -> Site:
    return Site(ctx.obj["site_dir"])


@click.group()
@click.version_option(package_name="sitegraph")
@click.option(
    "--site-dir",
    "-C",
    type=click.Path(file_okay=False),
    default=".",
    show_default=True,
    help="Site directory containing sitegraph.yaml or config.yaml",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output (tracebacks, debug logging)")
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Write JSONL logs to this file")
@click.pass_context
def cli(ctx, site_dir, verbose, log_file):
    """sitegraph - load, validate and compile static sites."""
    ctx.ensure_object(dict)
    ctx.obj["site_dir"] = site_dir
    ctx.obj["verbose"] = verbose

    if log_file or "SITEGRAPH_LOG_PATH" in os.environ:
        init_json_logging(log_file, "DEBUG" if verbose else None)


@cli.command()
@click.pass_context
def check(ctx):
    """Load the site and verify its data."""
    with _reporting_site_errors(ctx.obj["verbose"]):
        site = _open_site(ctx)
        site.load()

    console.print("[green]✓ Site loaded[/green]")
    console.print(f"  items:         {len(site.items)}")
    console.print(f"  layouts:       {len(site.layouts)}")
    console.print(f"  code snippets: {len(site.code_snippets)}")


@cli.command(name="show-data")
@click.pass_context
def show_data(ctx):
    """Show the item hierarchy and layouts."""
    with _reporting_site_errors(ctx.obj["verbose"]):
        site = _open_site(ctx)
        items = site.items
        layouts = site.layouts

    table = Table(title=f"Items ({len(items)})", show_header=True, header_style="bold cyan")
    table.add_column("Identifier", style="green")
    table.add_column("Parent", style="yellow")
    table.add_column("Children", justify="right")
    table.add_column("Title")

    for item in items:
        parent = item.parent
        table.add_row(
            Text(item.identifier),
            Text(parent.identifier if parent is not None else ""),
            str(len(item.children)),
            Text(str(item["title"] or "")),
        )

    console.print(table)

    table = Table(title=f"Layouts ({len(layouts)})", show_header=True, header_style="bold cyan")
    table.add_column("Identifier", style="green")
    for layout in layouts:
        table.add_row(Text(layout.identifier))

    console.print(table)


@cli.command(name="show-config")
@click.pass_context
def show_config(ctx):
    """Show the resolved configuration as YAML."""
    with _reporting_site_errors(ctx.obj["verbose"]):
        site = _open_site(ctx)

    text = yaml.safe_dump(site.config.to_dict(), default_flow_style=False, sort_keys=False)
    console.print(text, markup=False, highlight=False)


@cli.command(name="compile")
@click.pass_context
def compile_cmd(ctx):
    """Compile the site."""
    with _reporting_site_errors(ctx.obj["verbose"]):
        site = _open_site(ctx)
        count = site.compile()

    console.print(f"[green]✓ Compiled {count} items[/green]")


if __name__ == "__main__":
    cli()
