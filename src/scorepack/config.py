"""
Compiler settings for scorepack.

Settings come from an optional YAML file and are then overridden by
environment variables (a .env file is loaded first if present).

Example (configs/compiler.yaml):

compiler:
  address: "localhost:55000"
  working_dir: "/var/lib/scorepack"
  timeout_s: 300
  ping_timeout_s: 10
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from scorepack.compiler.client import DEFAULT_PING_TIMEOUT_S, DEFAULT_TIMEOUT_S

ENV_ADDRESS = "SCOREPACK_COMPILER_ADDRESS"
ENV_WORKDIR = "SCOREPACK_WORKDIR"
ENV_TIMEOUT = "SCOREPACK_TIMEOUT_S"
ENV_PING_TIMEOUT = "SCOREPACK_PING_TIMEOUT_S"


@dataclass
class CompilerSettings:
    """Where the compiler service lives and where models are stored."""

    address: str = "localhost:55000"
    working_dir: Path = Path(".")
    timeout_s: float = DEFAULT_TIMEOUT_S
    ping_timeout_s: float = DEFAULT_PING_TIMEOUT_S


def _as_float(value: Any, key: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"'{key}' must be a number, got {value!r}") from e


def _load_yaml_section(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config must be a YAML mapping, got {type(data).__name__}")
    section = data.get("compiler", {}) or {}
    if not isinstance(section, dict):
        raise ValueError("'compiler' section must be a mapping")
    return section


def load_settings(
    path: str | Path | None = None,
    env_file: str | Path | None = None,
) -> CompilerSettings:
    """Load compiler settings from YAML and environment.

    Args:
        path: Optional YAML config file; must exist when given
        env_file: Optional .env file (defaults to .env in the current directory)

    Returns:
        CompilerSettings with environment overrides applied

    Raises:
        FileNotFoundError: Config path given but missing
        ValueError: Config is malformed
    """
    load_dotenv(env_file or Path.cwd() / ".env")

    section = _load_yaml_section(Path(path)) if path is not None else {}
    settings = CompilerSettings()

    if "address" in section:
        settings.address = str(section["address"])
    if "working_dir" in section:
        settings.working_dir = Path(section["working_dir"])
    if "timeout_s" in section:
        settings.timeout_s = _as_float(section["timeout_s"], "timeout_s")
    if "ping_timeout_s" in section:
        settings.ping_timeout_s = _as_float(section["ping_timeout_s"], "ping_timeout_s")

    if os.getenv(ENV_ADDRESS):
        settings.address = os.environ[ENV_ADDRESS]
    if os.getenv(ENV_WORKDIR):
        settings.working_dir = Path(os.environ[ENV_WORKDIR])
    if os.getenv(ENV_TIMEOUT):
        settings.timeout_s = _as_float(os.environ[ENV_TIMEOUT], ENV_TIMEOUT)
    if os.getenv(ENV_PING_TIMEOUT):
        settings.ping_timeout_s = _as_float(os.environ[ENV_PING_TIMEOUT], ENV_PING_TIMEOUT)

    return settings
