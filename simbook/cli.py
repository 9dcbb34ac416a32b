"""simbook CLI - manage contacts on a (simulated) SIM card.

Provides commands to provision a card, list and edit its contacts, show the
discovered name length limit and bulk-copy contacts from CSV.
"""

from __future__ import annotations

import argparse
import csv
import logging
import sys
from pathlib import Path
from typing import NoReturn

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from contracts.phonebook import Contact
from simbook import __version__
from simbook.config import CONFIG_PATH, SimbookConfig, get_config, load_config, save_config
from simbook.errors import SimbookError
from simbook.phonebook import SimPhonebook
from simbook.store import DEFAULT_NUMBER_LIMIT, SQLiteSimStore
from simbook.utils.latency_tracker import get_tracker

console = Console()
logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, level: str = "INFO") -> None:
    """Configure logging based on verbosity level.

    Args:
        verbose: If True, force DEBUG level.
        level: Configured level name used when not verbose.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


def _resolve_config(args: argparse.Namespace) -> SimbookConfig:
    """Load configuration and apply command-line path overrides."""
    config = load_config(args.config) if args.config else get_config()
    update: dict[str, object] = {}
    if args.db:
        update["store"] = config.store.model_copy(update={"db_path": args.db})
    if args.cache:
        update["cache"] = config.cache.model_copy(update={"path": args.cache})
    return config.model_copy(update=update) if update else config


def _positive_int(value: str) -> int:
    """argparse type for limits that must be at least 1."""
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def _open_phonebook(args: argparse.Namespace) -> SimPhonebook:
    return SimPhonebook.from_config(args.config_obj)


def _limit_label(limit: int) -> str:
    return str(limit) if limit > 0 else "unknown (names kept as-is)"


def cmd_provision(args: argparse.Namespace) -> int:
    """Create a blank simulated SIM card.

    Args:
        args: Parsed arguments.

    Returns:
        Exit code.
    """
    store_config = args.config_obj.store
    store = SQLiteSimStore.provision(
        store_config.db_path,
        args.serial,
        name_limit=args.name_limit,
        capacity=args.capacity,
        number_limit=args.number_limit,
        uri=store_config.resolved_uri(),
    )
    store.close()
    console.print(
        f"[green]Provisioned SIM {args.serial} at {store_config.db_path}[/green] "
        f"(name limit {args.name_limit}, {args.capacity} slots)"
    )
    if args.save_config:
        path = args.config or CONFIG_PATH
        if not save_config(args.config_obj, path):
            console.print(f"[yellow]Could not write config to {path}[/yellow]")
            return 1
        console.print(f"[dim]Saved paths to {path}[/dim]")
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    """List contacts stored on the card."""
    phonebook = _open_phonebook(args)
    try:
        contacts = phonebook.contacts()
    finally:
        phonebook.close()

    if not contacts:
        console.print("[dim]No contacts on SIM.[/dim]")
        return 0

    table = Table(title=f"SIM contacts ({len(contacts)})")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Number")
    for contact in contacts:
        table.add_row(contact.id or "", contact.name, contact.number)
    console.print(table)
    return 0


def cmd_capacity(args: argparse.Namespace) -> int:
    """Show the card identity and its maximum contact name length."""
    phonebook = _open_phonebook(args)
    phonebook.close()

    table = Table(title="SIM capacity")
    table.add_column("Metric", style="bold")
    table.add_column("Value")
    table.add_row("Identity", phonebook.store_identity or "")
    table.add_row("Max name length", _limit_label(phonebook.max_name_length))
    console.print(table)
    return 0


def cmd_add(args: argparse.Namespace) -> int:
    """Normalize a contact and store it on the card."""
    phonebook = _open_phonebook(args)
    try:
        contact = phonebook.normalize(Contact(id=None, name=args.name, number=args.number))
        created = phonebook.create(contact)
    finally:
        phonebook.close()

    if not created:
        console.print(f"[red]SIM rejected {contact.name!r} ({contact.number}).[/red]")
        return 1
    console.print(f"[green]Added {contact.name!r} ({contact.number}).[/green]")
    return 0


def cmd_delete(args: argparse.Namespace) -> int:
    """Delete contacts exactly matching a name and number."""
    phonebook = _open_phonebook(args)
    try:
        removed = phonebook.delete(Contact(id=None, name=args.name, number=args.number))
    finally:
        phonebook.close()

    if not removed:
        console.print(f"[yellow]No contact matching {args.name!r} ({args.number}).[/yellow]")
        return 1
    console.print(f"[green]Deleted {args.name!r} ({args.number}).[/green]")
    return 0


def _read_csv_contacts(path: Path) -> list[Contact]:
    """Read ``name,number`` rows from a CSV file with a header line.

    Raises:
        ValueError: If the header lacks a name or number column.
    """
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        missing = {"name", "number"} - set(reader.fieldnames or [])
        if missing:
            raise ValueError(f"CSV is missing column(s): {', '.join(sorted(missing))}")
        return [
            Contact(id=None, name=row["name"] or "", number=row["number"] or "")
            for row in reader
        ]


def cmd_copy(args: argparse.Namespace) -> int:
    """Copy contacts from a CSV file onto the card."""
    try:
        contacts = _read_csv_contacts(args.file)
    except (OSError, ValueError) as e:
        console.print(f"[red]Cannot read {args.file}: {e}[/red]")
        return 1

    phonebook = _open_phonebook(args)
    try:
        report = phonebook.copy_contacts(contacts)
    finally:
        phonebook.close()

    console.print(
        Panel(
            f"Created: {len(report.created)}\n"
            f"Skipped (already on SIM): {len(report.skipped)}\n"
            f"Failed: {len(report.failed)}\n"
            f"Name limit: {_limit_label(phonebook.max_name_length)}",
            title="Copy to SIM",
        )
    )
    for contact in report.failed:
        console.print(f"[red]  rejected: {contact.name!r} ({contact.number})[/red]")
    return 1 if report.failed else 0


def cmd_version(args: argparse.Namespace) -> int:
    """Show version information."""
    console.print(f"simbook {__version__}")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands.

    Returns:
        Configured ArgumentParser.
    """
    parser = argparse.ArgumentParser(
        prog="simbook",
        description="simbook - SIM card phonebook with name limit discovery",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  simbook provision --serial 8944100000000000001 --name-limit 14
  simbook capacity               Show the card's maximum name length
  simbook add "Jane Doe" 555-0100
  simbook copy contacts.csv      Copy name,number rows onto the card
        """,
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    parser.add_argument("--config", type=Path, help="Config file (default: ~/.simbook/config.json)")
    parser.add_argument("--db", type=Path, help="SIM card database (overrides config)")
    parser.add_argument("--cache", type=Path, help="Capacity cache file (overrides config)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    provision_parser = subparsers.add_parser("provision", help="Create a simulated SIM card")
    provision_parser.add_argument("--serial", required=True, help="Card serial number (ICCID)")
    provision_parser.add_argument(
        "--name-limit",
        dest="name_limit",
        type=_positive_int,
        default=14,
        help="Longest name the card accepts (default: 14)",
    )
    provision_parser.add_argument(
        "--number-limit",
        dest="number_limit",
        type=_positive_int,
        default=DEFAULT_NUMBER_LIMIT,
        help=f"Longest number the card accepts (default: {DEFAULT_NUMBER_LIMIT})",
    )
    provision_parser.add_argument(
        "--capacity", type=_positive_int, default=250, help="Number of slots (default: 250)"
    )
    provision_parser.add_argument(
        "--save-config",
        dest="save_config",
        action="store_true",
        help="Remember the card and cache paths in the config file",
    )
    provision_parser.set_defaults(func=cmd_provision)

    list_parser = subparsers.add_parser("list", help="List contacts on the SIM")
    list_parser.set_defaults(func=cmd_list)

    capacity_parser = subparsers.add_parser(
        "capacity", help="Show the maximum name length, probing the SIM if unknown"
    )
    capacity_parser.set_defaults(func=cmd_capacity)

    add_parser = subparsers.add_parser("add", help="Normalize and add a contact")
    add_parser.add_argument("name", help="Contact name")
    add_parser.add_argument("number", help="Phone number (dashes are stripped)")
    add_parser.set_defaults(func=cmd_add)

    delete_parser = subparsers.add_parser("delete", help="Delete an exactly matching contact")
    delete_parser.add_argument("name", help="Contact name as stored")
    delete_parser.add_argument("number", help="Phone number as stored")
    delete_parser.set_defaults(func=cmd_delete)

    copy_parser = subparsers.add_parser("copy", help="Copy contacts from a CSV file")
    copy_parser.add_argument("file", type=Path, help="CSV file with name,number columns")
    copy_parser.set_defaults(func=cmd_copy)

    version_parser = subparsers.add_parser("version", help="Show version information")
    version_parser.set_defaults(func=cmd_version)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments. Uses sys.argv if None.

    Returns:
        Exit code.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.version:
        return cmd_version(args)

    if args.command is None:
        parser.print_help()
        return 0

    args.config_obj = _resolve_config(args)
    setup_logging(args.verbose, args.config_obj.logging.level)

    try:
        result: int = args.func(args)
    except SimbookError as e:
        console.print(f"[red]Error: {e.message}[/red] [dim]({e.code.value})[/dim]")
        logger.debug("Command failed: %r", e)
        return 1

    if args.verbose:
        logger.debug("Latency summary: %s", get_tracker().summary())
    return result


def run() -> NoReturn:
    """Entry point that handles interrupts and exit."""
    try:
        exit_code = main()
    except KeyboardInterrupt:
        console.print("\n[dim]Interrupted.[/dim]")
        exit_code = 130
    except Exception as e:
        console.print(f"[red]Unexpected error: {e}[/red]")
        logger.exception("Unexpected error")
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    run()
