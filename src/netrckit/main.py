"""
netrckit CLI - Lossless netrc editor

Main entry point for the netrckit command-line tool.
"""

import logging
import sys
from pathlib import Path

import click
from rich import box
from rich.console import Console
from rich.table import Table

from .core.document import FIELDS, Document
from .core.errors import NetrcError
from .core.files import NETRC_ENV, default_path, parse_file, save_file


console = Console()


def mask(value: str) -> str:
    """Hide a secret, keeping a hint of its length."""
    if not value:
        return ""
    if len(value) <= 4:
        return "****"
    return value[:2] + "*" * (len(value) - 2)


def load(path) -> Document:
    """Parse the netrc file or exit with the error."""
    try:
        return parse_file(path)
    except FileNotFoundError:
        console.print(f"[red]Error: {path} does not exist[/red]")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Error: cannot read {path}: {e.strerror}[/red]")
        sys.exit(1)
    except NetrcError as e:
        console.print(f"[red]Error: {e}[/red]")
        if e.bad_default_order:
            console.print("[dim]Move the 'default' entry to the end of the file.[/dim]")
        sys.exit(1)


def record_table(records, show_passwords: bool = False, title: str = "Machines") -> Table:
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("Machine", style="cyan", no_wrap=True)
    table.add_column("Login", style="green")
    table.add_column("Password", style="yellow")
    table.add_column("Account", style="magenta")

    for record in records:
        name = "[bold](default)[/bold]" if record.is_default() else record.name
        password = record.password if show_passwords else mask(record.password)
        table.add_row(name, record.login, password, record.account)

    return table


@click.group()
@click.option('--file', 'path', envvar=NETRC_ENV, type=click.Path(dir_okay=False),
              help='netrc file (default: $NETRC or ~/.netrc)')
@click.option('--verbose', '-v', is_flag=True, help='Show debug logging')
@click.pass_context
def cli(ctx, path, verbose):
    """
    netrckit - Edit .netrc files without losing comments or layout
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    ctx.obj = path or str(default_path())


@cli.command()
@click.option('--show-passwords', is_flag=True, help='Print passwords in clear text')
@click.pass_obj
def show(path, show_passwords):
    """Show all machine entries."""
    document = load(path)

    if not len(document):
        console.print(f"[yellow]No machines in {path}[/yellow]")
        return

    console.print(record_table(document, show_passwords))


@cli.command()
@click.argument('name')
@click.option('--show-passwords', is_flag=True, help='Print passwords in clear text')
@click.pass_obj
def get(path, name, show_passwords):
    """Show the entry used for machine NAME."""
    record = load(path).find_record(name)

    if record is None:
        console.print(f"[red]No entry for {name} and no default entry[/red]")
        sys.exit(1)

    if record.is_default():
        console.print(f"[dim]No entry for {name}; using the default entry.[/dim]")
    console.print(record_table([record], show_passwords, title=name))


@cli.command()
@click.argument('name')
@click.option('--login', default="", help='Login name')
@click.option('--password', default="", help='Password')
@click.option('--account', default="", help='Account')
@click.pass_obj
def add(path, name, login, password, account):
    """Add an entry for machine NAME."""
    # Start a new file if there is none yet
    document = load(path) if Path(path).exists() else Document()

    existing = document.find_record(name)
    if existing is not None and existing.name == name:
        console.print(f"[red]Error: {name} already has an entry[/red]")
        console.print(f"[dim]Use 'netrckit set {name} FIELD VALUE' to change it.[/dim]")
        sys.exit(1)

    try:
        document.create_record(name, login, password, account)
    except NetrcError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    save_file(document, path)
    console.print(f"[green]✓ Added {name or 'default entry'}[/green]")


@cli.command(name="set")
@click.argument('name')
@click.argument('field', type=click.Choice(FIELDS))
@click.argument('value')
@click.pass_obj
def set_field(path, name, field, value):
    """Set FIELD of machine NAME to VALUE."""
    document = load(path)

    record = document.find_record(name)
    if record is None or record.name != name:
        console.print(f"[red]Error: no entry for {name}[/red]")
        console.print(f"[dim]Run 'netrckit add {name}' first.[/dim]")
        sys.exit(1)

    record.update_field(field, value)
    save_file(document, path)
    console.print(f"[green]✓ Updated {field} for {name or 'default entry'}[/green]")


@cli.command()
@click.argument('name')
@click.pass_obj
def remove(path, name):
    """Remove the entry for machine NAME."""
    document = load(path)

    if document.remove_record(name) is None:
        console.print(f"[yellow]No entry for {name}[/yellow]")
        return

    save_file(document, path)
    console.print(f"[green]✓ Removed {name or 'default entry'}[/green]")


@cli.command()
@click.pass_obj
def macros(path):
    """List macro definitions."""
    document = load(path)
    definitions = document.macros

    if not definitions:
        console.print("[dim]No macros defined[/dim]")
        return

    for macro_name, body in definitions.items():
        console.print(f"[bold cyan]{macro_name}[/bold cyan]")
        for line in body.splitlines():
            console.print(f"  {line}", markup=False, highlight=False)


@cli.command()
@click.pass_obj
def check(path):
    """Check that the netrc file parses."""
    document = load(path)
    console.print(
        f"[green]✓ {path} OK[/green] [dim]({len(document)} machines, "
        f"{len(document.macros)} macros)[/dim]"
    )


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == '__main__':
    main()
