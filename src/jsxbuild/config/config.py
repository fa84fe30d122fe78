# src/jsxbuild/config/config.py

import os
import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional, Tuple

import yaml

from jsxbuild.errors import ConfigurationError

DEFAULT_CONFIG_FILE = "jsxbuild.yaml"


@dataclass(frozen=True)
class BuildSettings:
    input_path: Path
    backup_suffix: str = ".original"
    build_dir: Optional[Path] = None
    compiler_timeout: int = 120
    install_timeout: int = 600
    node_min_major: int = 16
    runtime_globals: Tuple[str, ...] = ("React", "ReactDOM")
    poll_interval_ms: int = 10

    @property
    def backup_path(self) -> Path:
        return self.input_path.with_name(self.input_path.name + self.backup_suffix)

    @property
    def toolchain_root(self) -> Path:
        if self.build_dir is not None:
            return self.build_dir
        return self.input_path.resolve().parent / ".build"

    def with_overrides(self, **overrides) -> "BuildSettings":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def load_config(path: Optional[str] = None) -> dict:
    """
    Load configuration from a YAML file on top of environment variables.

    Environment variables give the defaults; keys present in the YAML file
    win over them.
    """
    defaults = {
        'INPUT_PATH': os.getenv('JSXBUILD_INPUT', 'web/index.html'),
        'BACKUP_SUFFIX': os.getenv('JSXBUILD_BACKUP_SUFFIX', '.original'),
        'BUILD_DIR': os.getenv('JSXBUILD_BUILD_DIR'),
        'COMPILER_TIMEOUT': os.getenv('JSXBUILD_COMPILER_TIMEOUT', '120'),
        'INSTALL_TIMEOUT': os.getenv('JSXBUILD_INSTALL_TIMEOUT', '600'),
        'NODE_MIN_MAJOR': os.getenv('JSXBUILD_NODE_MIN_MAJOR', '16'),
        'RUNTIME_GLOBALS': os.getenv('JSXBUILD_RUNTIME_GLOBALS', 'React,ReactDOM'),
        'POLL_INTERVAL_MS': os.getenv('JSXBUILD_POLL_INTERVAL_MS', '10'),
    }

    if path is None:
        path = DEFAULT_CONFIG_FILE
    elif not os.path.exists(path):
        raise ConfigurationError(f"Config file not found: {path}")

    if os.path.exists(path):
        with open(path, 'r', encoding='utf-8') as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"{path} must contain a mapping of settings")
        # YAML keys may be written in lower case
        return {**defaults, **{str(k).upper(): v for k, v in data.items()}}

    return defaults


def _positive_int(config: dict, key: str) -> int:
    value = config[key]
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{key} must be an integer, got {value!r}") from None
    if number <= 0:
        raise ConfigurationError(f"{key} must be positive, got {number}")
    return number


def _runtime_globals(value) -> Tuple[str, ...]:
    if isinstance(value, str):
        value = value.split(',')
    names = tuple(str(name).strip() for name in (value or []) if str(name).strip())
    if not names:
        raise ConfigurationError("RUNTIME_GLOBALS must name at least one global")
    for name in names:
        if not re.fullmatch(r"[A-Za-z_$][\w$]*", name):
            raise ConfigurationError(f"RUNTIME_GLOBALS entry is not a valid identifier: {name!r}")
    return names


def load_settings(path: Optional[str] = None) -> BuildSettings:
    config = load_config(path)
    build_dir = config.get('BUILD_DIR')
    backup_suffix = str(config['BACKUP_SUFFIX'] or '')
    if not backup_suffix:
        raise ConfigurationError("BACKUP_SUFFIX must not be empty")
    return BuildSettings(
        input_path=Path(config['INPUT_PATH']),
        backup_suffix=backup_suffix,
        build_dir=Path(build_dir) if build_dir else None,
        compiler_timeout=_positive_int(config, 'COMPILER_TIMEOUT'),
        install_timeout=_positive_int(config, 'INSTALL_TIMEOUT'),
        node_min_major=_positive_int(config, 'NODE_MIN_MAJOR'),
        runtime_globals=_runtime_globals(config['RUNTIME_GLOBALS']),
        poll_interval_ms=_positive_int(config, 'POLL_INTERVAL_MS'),
    )
