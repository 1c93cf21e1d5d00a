"""clockpay CLI - Payroll from time-clock attendance exports."""

import json
from pathlib import Path

import click
from rich.console import Console

from clockpay import __version__
from clockpay.sdk import (
    InvalidServiceAmountError,
    NoInputFilesError,
    ProfileNotFoundError,
    ProfileValidationError,
    Roster,
    UnknownEmployeeError,
    discover_period_files,
    holiday_calendar,
    load_profile,
    run_payroll,
)

from .config_commands import config as config_group
from .roster_commands import roster as roster_group
from .renderers.report_renderer import render_run


@click.group()
@click.version_option(version=__version__, prog_name="clockpay")
def cli():
    """clockpay - Payroll from time-clock attendance exports.

    Reads pipe-delimited attendance reports, rebuilds each employee's
    work sessions, and computes pay, breaks, service and deductions.

    Configuration is loaded from (in order):

    \b
    1. --profile option (where supported)
    2. settings.json 'profile' key (set via 'clockpay config set-profile')
    3. $CLOCKPAY_CONFIG_PATH/profile.yaml or ~/.config/clockpay/profile.yaml

    Run 'clockpay config init' to create a starter profile.
    """
    pass


cli.add_command(config_group)
cli.add_command(roster_group)


@cli.command("run")
@click.argument("service_amount", type=float)
@click.option("--dir", "directory", type=click.Path(exists=True, file_okay=False), default=".",
              help="Directory holding the attendance exports (default: current directory).")
@click.option("--pattern", default=None,
              help="Glob for attendance exports (default: profile input_pattern, else Report*.csv).")
@click.option("--profile", "profile_path", type=click.Path(dir_okay=False), default=None,
              help="Use this profile.yaml instead of the configured one.")
@click.option("--holiday", "extra_holidays", multiple=True, type=click.DateTime(formats=["%Y-%m-%d"]),
              help="Extra holiday date (YYYY-MM-DD). Repeatable.")
@click.option("--strict", is_flag=True, help="Fail if any employee in the exports is not on the roster.")
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table",
              help="Output format (default: table)")
def run(service_amount, directory, pattern, profile_path, extra_holidays, strict, output_format):
    """Compute payroll for every attendance export in a directory.

    SERVICE_AMOUNT is the pooled service charge, shared among employees
    in proportion to minutes worked.

    \b
    Examples:
      clockpay run 150000
      clockpay run 150000 --dir exports/ --pattern "Report*.csv"
      clockpay run 150000 --holiday 2025-08-15 --format json
    """
    try:
        profile = load_profile(Path(profile_path) if profile_path else None)
    except (ProfileNotFoundError, ProfileValidationError) as e:
        raise click.ClickException(str(e))

    glob_pattern = pattern or profile.input_pattern
    paths = discover_period_files(directory, glob_pattern)

    holidays = set(profile.holidays)
    holidays.update(d.date() for d in extra_holidays)

    try:
        result = run_payroll(
            paths,
            Roster.from_profile(profile),
            service_amount,
            is_holiday=holiday_calendar(holidays),
            strict=strict,
        )
    except InvalidServiceAmountError as e:
        raise click.BadParameter(str(e), param_hint="SERVICE_AMOUNT")
    except NoInputFilesError:
        raise click.ClickException(f"No files matching '{glob_pattern}' in {Path(directory).resolve()}")
    except UnknownEmployeeError as e:
        raise click.ClickException(str(e))

    if output_format == "json":
        click.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        render_run(Console(width=140), result)

    if result.file_errors and not result.files:
        raise click.ClickException("None of the attendance files could be read.")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
