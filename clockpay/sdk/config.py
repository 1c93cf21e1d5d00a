"""Configuration management for clockpay.

Configuration is split into two files:

1. settings.json - Machine-specific settings
   - profile: path to profile.yaml (optional, if not colocated)

2. profile.yaml - Payroll reference data
   - roster: employee name -> hourly_rate, mandatory_deduction, vacation_days
   - holidays: list of YYYY-MM-DD dates paid at the holiday rate
   - input_pattern: glob for attendance exports (default Report*.csv)

Config directory resolution:
1. CLOCKPAY_CONFIG_PATH environment variable (if set)
2. ~/.config/clockpay/ (XDG_CONFIG_HOME fallback)

Profile resolution:
1. Explicit path passed by the caller (e.g. `clockpay run --profile`)
2. settings.json "profile" key (if set via CLI)
3. profile.yaml in the config directory
"""

import json
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from .schemas import PayrollProfile


APP_NAME = "clockpay"
SETTINGS_FILENAME = "settings.json"
PROFILE_FILENAME = "profile.yaml"

PROFILE_TEMPLATE = {
    "input_pattern": "Report*.csv",
    "holidays": ["2025-07-25"],
    "roster": {
        "Dani": {"hourly_rate": 1800, "mandatory_deduction": 10000, "vacation_days": 0},
        "Vero": {"hourly_rate": 1300, "mandatory_deduction": 0, "vacation_days": 0},
    },
}


class ProfileNotFoundError(Exception):
    """Raised when no profile is found."""
    pass


class ProfileValidationError(Exception):
    """Raised when profile.yaml does not match the expected schema."""

    def __init__(self, path: Path, detail: str):
        self.path = path
        super().__init__(f"Invalid profile {path}:\n{detail}")


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. CLOCKPAY_CONFIG_PATH environment variable
    2. ~/.config/clockpay/ (XDG_CONFIG_HOME)
    """
    env_path = os.environ.get("CLOCKPAY_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load machine-specific settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    with open(settings_file, "r") as f:
        return json.load(f)


def save_settings(settings: dict) -> Path:
    """Save machine-specific settings to settings.json.

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    return load_settings().get(key, default)


def set_setting(key: str, value: Any) -> Path:
    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def get_profile_path(override: Optional[Path] = None, require_exists: bool = False) -> Path:
    """Get the path to the profile.yaml file.

    Args:
        override: Explicit profile path; wins over everything else
        require_exists: If True, raises ProfileNotFoundError if not found

    Returns:
        Path to profile.yaml (may not exist unless require_exists)

    Raises:
        ProfileNotFoundError: If require_exists=True and no profile found
    """
    if override is not None:
        profile_path = Path(override)
        if require_exists and not profile_path.exists():
            raise ProfileNotFoundError(f"Profile not found: {profile_path}")
        return profile_path

    custom_profile = get_setting("profile")
    if custom_profile:
        profile_path = Path(custom_profile)
        if require_exists and not profile_path.exists():
            raise ProfileNotFoundError(
                f"Profile not found at configured path: {profile_path}\n\n"
                f"Update with: clockpay config set-profile /path/to/profile.yaml"
            )
        return profile_path

    profile_path = get_config_dir() / PROFILE_FILENAME
    if require_exists and not profile_path.exists():
        raise ProfileNotFoundError(
            f"No profile found. Checked:\n"
            f"  1. settings.json 'profile' key (not set)\n"
            f"  2. {profile_path} (not found)\n\n"
            f"Create a profile with: clockpay config init\n"
            f"Or set a custom path: clockpay config set-profile /path/to/profile.yaml"
        )

    return profile_path


def load_profile(override: Optional[Path] = None) -> PayrollProfile:
    """Load and validate profile.yaml.

    Raises:
        ProfileNotFoundError: If no profile exists
        ProfileValidationError: If the YAML is malformed or fails validation
    """
    profile_path = get_profile_path(override, require_exists=True)

    try:
        with open(profile_path, "r") as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ProfileValidationError(profile_path, str(e))

    if not isinstance(raw, dict):
        raise ProfileValidationError(profile_path, "top level must be a mapping")

    try:
        return PayrollProfile.model_validate(raw)
    except ValidationError as e:
        raise ProfileValidationError(profile_path, str(e))


def save_profile(profile: dict, path: Optional[Path] = None) -> Path:
    """Write a profile dict to profile.yaml.

    Returns:
        Path to the saved profile file
    """
    if path is None:
        path = get_profile_path()

    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        yaml.dump(profile, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    return path
