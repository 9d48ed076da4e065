"""Project configuration for buildenv.

Reads and writes TOML config at ``buildenv.toml`` in the repository root.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

import tomli_w

from buildenv.secrets import DEFAULT_SECRET

CONFIG_FILENAME = "buildenv.toml"
DEFAULT_ENV_FILE = ".env"
DEFAULT_OUTPUT = "build/buildenv/placeholders.properties"


def _default_required() -> list[str]:
    return [DEFAULT_SECRET]


@dataclass
class BuildEnvConfig:
    env_file: str = DEFAULT_ENV_FILE
    required: list[str] = field(default_factory=_default_required)
    output: str = DEFAULT_OUTPUT

    def env_path(self, root: Path) -> Path:
        return root / self.env_file

    def output_path(self, root: Path) -> Path:
        return root / self.output


def config_path(root: Path) -> Path:
    return root / CONFIG_FILENAME


def _str_or(value: object, default: str) -> str:
    return value if isinstance(value, str) and value.strip() else default


def load_project_config(root: Path) -> BuildEnvConfig:
    """Load config from buildenv.toml, returning defaults if missing or corrupt."""
    path = config_path(root)
    if not path.exists():
        return BuildEnvConfig()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        return BuildEnvConfig()

    required = data.get("required")
    if (
        not isinstance(required, list)
        or not required
        or not all(isinstance(n, str) and n.strip() for n in required)
    ):
        required = _default_required()

    return BuildEnvConfig(
        env_file=_str_or(data.get("env_file"), DEFAULT_ENV_FILE),
        required=required,
        output=_str_or(data.get("output"), DEFAULT_OUTPUT),
    )


def save_project_config(config: BuildEnvConfig, root: Path) -> Path:
    """Write config to buildenv.toml in ``root``."""
    path = config_path(root)
    data = {
        "env_file": config.env_file,
        "required": list(config.required),
        "output": config.output,
    }
    with open(path, "wb") as f:
        tomli_w.dump(data, f)
    return path
