"""
contrafuzz configuration — report output settings.

Config file: ~/.contrafuzz/config.json
Resolution order: explicit override → env var → config file → default
"""

import json
import os
from pathlib import Path

from pydantic import BaseModel

CONFIG_DIR = Path.home() / ".contrafuzz"
CONFIG_FILE = CONFIG_DIR / "config.json"

DEFAULT_REPORT_DIR = "contrafuzz-report"

ENV_VARS = {
    "output_dir": "CONTRAFUZZ_REPORT_DIR",
    "timestamp_reports": "CONTRAFUZZ_TIMESTAMP_REPORTS",
    "print_execution_statistics": "CONTRAFUZZ_EXECUTION_STATISTICS",
}

_TRUTHY = {"1", "true", "yes", "on"}


class ReportingConfig(BaseModel):
    """Where and how the report is written."""
    output_dir: str = DEFAULT_REPORT_DIR
    timestamp_reports: bool = False
    print_execution_statistics: bool = False


def load_config() -> dict:
    """Load config from ~/.contrafuzz/config.json."""
    if CONFIG_FILE.exists():
        try:
            return json.loads(CONFIG_FILE.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError):
            return {}
    return {}


def save_config(**settings) -> None:
    """Save reporting settings to the config file."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    config = load_config()
    config.update(ReportingConfig(**{**config, **settings}).model_dump())
    CONFIG_FILE.write_text(json.dumps(config, indent=2), encoding="utf-8")


def _from_env(key: str):
    raw = os.environ.get(ENV_VARS[key])
    if raw is None:
        return None
    if key == "output_dir":
        return raw
    return raw.strip().lower() in _TRUTHY


def get_reporting_config(**overrides) -> ReportingConfig:
    """
    Resolve reporting settings.

    Resolution order:
    1. Explicit keyword overrides that are not None (CLI flags)
    2. Environment variables
    3. ~/.contrafuzz/config.json
    4. ReportingConfig defaults
    """
    file_config = load_config()
    resolved = {}
    for key in ReportingConfig.model_fields:
        if overrides.get(key) is not None:
            resolved[key] = overrides[key]
            continue
        env_value = _from_env(key)
        if env_value is not None:
            resolved[key] = env_value
        elif key in file_config:
            resolved[key] = file_config[key]
    return ReportingConfig(**resolved)
