#!/usr/bin/env python3
"""
Master Data Audit Utility

List reference tables, report orphaned regions/appellations and check
whether a row can be deleted, straight against the Supabase project.
Needs SUPABASE_URL and SUPABASE_KEY (env or .env); use a key that can
read every table.
"""

import sys
import argparse
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table
from supabase import create_client

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cellarbook.admin import AdminEntity, MasterDataAdmin
from cellarbook.config import get_required_setting
from cellarbook.constants import AppRole
from cellarbook.error_handling import CellarError
from cellarbook.master_data import MasterDataCache
from cellarbook.social import UserRoles

load_dotenv()
console = Console()


def connect():
    return create_client(get_required_setting("SUPABASE_URL"), get_required_setting("SUPABASE_KEY"))


def list_table(sb, entity: AdminEntity, sort_by: str):
    """Print one reference table as a rich table."""
    admin = MasterDataAdmin(sb, UserRoles(frozenset({AppRole.ADMIN})))
    rows = admin.list(entity, sort_by)

    console.print(f"\n[bold]🍷 {entity.value.title()}[/bold]")
    console.print(f"Total rows: {len(rows)}\n")
    if not rows:
        return

    table = Table(show_header=True, header_style="bold magenta")
    columns = [c for c in rows[0].keys() if c not in ("created_at", "updated_at")]
    for column in columns:
        table.add_column(column)
    for row in rows:
        table.add_row(*("" if row.get(c) is None else str(row.get(c)) for c in columns))
    console.print(table)


def report_orphans(sb) -> int:
    cache = MasterDataCache.load(sb)
    if not cache.loaded:
        console.print(f"[red]✗ {cache.load_error}[/red]")
        return 1

    console.print(f"\n[bold]Master data[/bold]: {len(cache.countries)} countries, "
                  f"{len(cache.regions)} regions, {len(cache.appellations)} appellations, "
                  f"{len(cache.grape_varieties)} grapes\n")

    orphans = cache.find_orphans()
    found = 0
    for kind, names in orphans.items():
        if names:
            found += len(names)
            console.print(f"[yellow]⚠ {len(names)} orphaned {kind}:[/yellow]")
            for name in names:
                console.print(f"  - {name}")
    if not found:
        console.print("[green]✓ No orphaned rows[/green]")
    return 1 if found else 0


def check_delete(sb, entity: AdminEntity, row_id: str) -> int:
    admin = MasterDataAdmin(sb, UserRoles(frozenset({AppRole.ADMIN})))
    reason = admin.check_delete(entity, row_id)
    if reason:
        console.print(f"[red]✗ {reason}[/red]")
        return 1
    console.print(f"[green]✓ {entity.value} {row_id} can be deleted[/green]")
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Cellarbook Master Data Audit",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --orphans                       Report regions/appellations with a missing parent
  %(prog)s --list regions                  List a reference table
  %(prog)s --list grapes --sort type       List sorted by another column
  %(prog)s --check-delete countries ID     Explain whether a row can be deleted
        """
    )

    parser.add_argument(
        '--orphans', '-o',
        action='store_true',
        help='Report orphaned master data rows'
    )

    parser.add_argument(
        '--list', '-l',
        choices=[e.value for e in AdminEntity],
        metavar='TABLE',
        help='List a reference table'
    )

    parser.add_argument(
        '--sort', '-s',
        default='name',
        help='Column to sort --list by (default: name)'
    )

    parser.add_argument(
        '--check-delete', '-c',
        nargs=2,
        metavar=('TABLE', 'ID'),
        help='Check delete dependencies for one row'
    )

    args = parser.parse_args()
    if not (args.orphans or args.list or args.check_delete):
        parser.print_help()
        return 0

    sb = connect()
    status = 0
    try:
        if args.list:
            list_table(sb, AdminEntity(args.list), args.sort)
        if args.orphans:
            status |= report_orphans(sb)
        if args.check_delete:
            status |= check_delete(sb, AdminEntity(args.check_delete[0]), args.check_delete[1])
    except CellarError as e:
        console.print(f"[red]✗ {e}[/red]")
        return 1
    return status


if __name__ == "__main__":
    sys.exit(main())
