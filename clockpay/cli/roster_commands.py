"""Roster CLI commands."""

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from clockpay.sdk import Roster, load_profile, ProfileNotFoundError, ProfileValidationError


@click.group("roster")
def roster():
    """Inspect the employee roster in profile.yaml."""
    pass


@roster.command("show")
@click.option("--profile", "profile_path", type=click.Path(dir_okay=False), default=None,
              help="Use this profile.yaml instead of the configured one.")
def roster_show(profile_path):
    """List employees with rate, deduction and vacation days."""
    try:
        profile = load_profile(Path(profile_path) if profile_path else None)
    except (ProfileNotFoundError, ProfileValidationError) as e:
        raise click.ClickException(str(e))

    employees = Roster.from_profile(profile)
    if not len(employees):
        click.echo("Roster is empty. Add employees under 'roster:' in profile.yaml.")
        return

    table = Table(title="Roster")
    table.add_column("Employee")
    table.add_column("Hourly rate", justify="right")
    table.add_column("Deduction", justify="right")
    table.add_column("Vacation days", justify="right")

    for employee in sorted(employees, key=lambda e: e.name):
        table.add_row(
            employee.name,
            f"${employee.hourly_rate:,.2f}",
            f"${employee.mandatory_deduction:,.2f}",
            str(employee.vacation_days),
        )

    Console().print(table)
