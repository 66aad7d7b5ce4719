# Project: weather-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
config.py — Load and validate the TOML configuration file.

We use tomllib (Python 3.11+ stdlib) so no extra install is needed.
The config path defaults to "config.toml" in the current working directory,
but can be overridden for testing.
"""

import tomllib
from pathlib import Path


DEFAULT_CONFIG_PATH = Path("config.toml")

REQUIRED_KEYS = {
    "location": ("latitude", "longitude", "name"),
    "forecast": ("days",),
    "ai":       ("enabled", "url", "max_length"),
    "alerts":   ("store_path",),
    "log":      ("path",),
}


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> dict:
    """Load and validate a TOML configuration file.

    Args:
        path: Path to the TOML config file.

    Returns:
        Nested dict of configuration values.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ValueError: If required keys or sections are missing, or a value is
            out of range.
    """
    if not path.exists():
        raise FileNotFoundError(
            f"Config file not found: {path}\n"
            "Copy config.toml.example to config.toml and fill in your location."
        )

    with open(path, "rb") as f:
        config = tomllib.load(f)

    _validate(config)
    return config


def _validate(config: dict) -> None:
    """Validate that all required config sections and keys are present.

    Expected config schema::

        [location]
        latitude  = <float>   # decimal degrees, e.g. 40.7128
        longitude = <float>   # decimal degrees, e.g. -74.0060
        name      = <str>     # display name, e.g. "New York, NY"

        [forecast]
        days = <int>          # 1-16; the trend and event views use 7

        [ai]
        enabled    = <bool>   # true to ask the text service for commentary
        url        = <str>    # base URL of the text-completion service
        max_length = <int>    # tokens per reply

        [alerts]
        store_path = <str>    # JSON file holding acknowledged alert IDs

        [log]
        path = <str>          # relative or absolute path to the log file

    Args:
        config: Parsed TOML config dict.

    Raises:
        ValueError: If any required section or key is absent, or
            [forecast].days is outside 1-16.
    """
    for section, keys in REQUIRED_KEYS.items():
        if section not in config:
            raise ValueError(f"Missing required config section: [{section}]")
        for key in keys:
            if key not in config[section]:
                raise ValueError(f"Missing required config key: [{section}].{key}")

    days = config["forecast"]["days"]
    if not isinstance(days, int) or not 1 <= days <= 16:
        raise ValueError(f"[forecast].days must be an integer between 1 and 16, got {days!r}")
