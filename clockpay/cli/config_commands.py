"""Config CLI commands for clockpay.

Manages settings.json and the profile.yaml holding roster and holidays.
"""

from pathlib import Path

import click

from clockpay.sdk import (
    get_config_dir,
    get_profile_path,
    get_settings_path,
    load_profile,
    load_settings,
    set_setting,
    ProfileNotFoundError,
    ProfileValidationError,
)
from clockpay.sdk.config import PROFILE_TEMPLATE, save_profile


@click.group()
def config():
    """Manage configuration (settings.json and profile.yaml)."""
    pass


@config.command("init")
@click.option("--force", is_flag=True, help="Overwrite an existing profile.")
def config_init(force):
    """Create a starter profile.yaml with an example roster."""
    profile_path = get_profile_path()

    if profile_path.exists() and not force:
        raise click.ClickException(
            f"Profile already exists: {profile_path}\n"
            f"Use --force to overwrite."
        )

    save_profile(PROFILE_TEMPLATE, profile_path)
    click.echo(f"Created profile: {profile_path}")
    click.echo("Edit the roster and holidays, then run: clockpay run <service-amount>")


@config.command("show")
def config_show():
    """Show config paths and whether the profile is valid."""
    settings_path = get_settings_path()
    profile_path = get_profile_path()

    click.echo(f"Config directory: {get_config_dir()}")
    click.echo(f"Settings file:    {settings_path} ({'exists' if settings_path.exists() else 'missing'})")
    click.echo(f"Profile:          {profile_path} ({'exists' if profile_path.exists() else 'missing'})")

    settings = load_settings()
    if settings:
        click.echo()
        click.echo("Settings:")
        for key, value in settings.items():
            click.echo(f"  {key}: {value}")

    try:
        profile = load_profile()
    except ProfileNotFoundError:
        click.echo()
        click.echo("No profile yet. Create one with: clockpay config init")
        return
    except ProfileValidationError as e:
        raise click.ClickException(str(e))

    click.echo()
    click.echo(f"Input pattern: {profile.input_pattern}")
    click.echo(f"Employees:     {len(profile.roster)}")
    holidays = ", ".join(d.isoformat() for d in sorted(profile.holidays)) or "(none)"
    click.echo(f"Holidays:      {holidays}")


@config.command("set-profile")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def config_set_profile(path):
    """Point clockpay at a profile.yaml outside the config directory."""
    profile_path = Path(path).expanduser().resolve()

    try:
        load_profile(profile_path)
    except ProfileValidationError as e:
        raise click.ClickException(str(e))

    set_setting("profile", str(profile_path))
    click.echo(f"Set profile: {profile_path}")
    click.echo(f"Saved to: {get_settings_path()}")
