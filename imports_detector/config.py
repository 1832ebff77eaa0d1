"""Runtime configuration for imports-detector - centralized configuration management."""

import copy
import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from imports_detector.utils.logging import logger

CONFIG_FILE_NAME = ".imports-detector.json"

DEFAULT_EXTENSIONS = [".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs"]

DEFAULT_INCLUDE_PATTERNS = ["**/*.{js,jsx,ts,tsx,mjs}"]

DEFAULT_EXCLUDE_PATTERNS = [
    "**/node_modules/**",
    "**/dist/**",
    "**/build/**",
    "**/.git/**",
    "**/coverage/**",
]

DEFAULTS = {
    "scan": {
        "batch_size": 20,
        "extensions": list(DEFAULT_EXTENSIONS),
        "include": list(DEFAULT_INCLUDE_PATTERNS),
        "exclude": list(DEFAULT_EXCLUDE_PATTERNS),
    },
    "report": {
        "top_n": 10,
    },
}


def load_runtime_config(root: str = ".") -> dict[str, Any]:
    """
    Load runtime configuration from .imports-detector.json and environment variables.

    Config priority (highest to lowest):
    1. Environment variables (IMPORTS_DETECTOR_<SECTION>_<KEY>)
    2. <root>/.imports-detector.json
    3. Built-in defaults

    Args:
        root: Directory to look for the config file

    Returns:
        Configuration dictionary with merged values
    """
    cfg = copy.deepcopy(DEFAULTS)

    path = Path(root) / CONFIG_FILE_NAME
    try:
        if path.is_file():
            with open(path, encoding="utf-8") as f:
                user = json.load(f)

            if isinstance(user, dict):
                for section in cfg:
                    if section in user and isinstance(user[section], dict):
                        for key, value in user[section].items():
                            if key in cfg[section] and isinstance(value, type(cfg[section][key])):
                                cfg[section][key] = value
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not load config file from {path}: {e}")
        logger.warning("Continuing with default configuration")

    for section in cfg:
        for key in cfg[section]:
            env_var = f"IMPORTS_DETECTOR_{section.upper()}_{key.upper()}"
            if env_var in os.environ:
                value = os.environ[env_var]
                try:
                    default_value = cfg[section][key]
                    if isinstance(default_value, int):
                        cfg[section][key] = int(value)
                    elif isinstance(default_value, list):
                        cfg[section][key] = [v.strip() for v in value.split(",") if v.strip()]
                    else:
                        cfg[section][key] = value
                except (ValueError, AttributeError) as e:
                    logger.warning(
                        f"Invalid value for environment variable {env_var}: '{value}' - {e}"
                    )
                    logger.warning(f"Using default value: {cfg[section][key]}")

    if cfg["scan"]["batch_size"] < 1:
        logger.warning(f"batch_size must be positive, got {cfg['scan']['batch_size']}")
        cfg["scan"]["batch_size"] = DEFAULTS["scan"]["batch_size"]

    return cfg


@dataclass
class DetectorOptions:
    """Per-invocation options for the analyzer."""

    detect_static: bool = True
    detect_dynamic: bool = True
    detect_lazy: bool = True
    detect_require: bool = True
    verbose: bool = False
    module_path: str | None = None
    base_url: str | None = None
    tsconfig_path: str | None = None
    include_extensions: list[str] | None = None
    exclude_patterns: list[str] | None = None
    batch_size: int | None = None
    extensions: list[str] | None = None

    def style_flags(self) -> dict[str, bool]:
        return {
            "static": self.detect_static,
            "dynamic": self.detect_dynamic,
            "lazy": self.detect_lazy,
            "require": self.detect_require,
        }

    def include_patterns(self) -> list[str] | None:
        """Glob patterns derived from ``include_extensions``, if any."""
        if not self.include_extensions:
            return None
        patterns = []
        for ext in self.include_extensions:
            ext = ext.strip()
            if not ext:
                continue
            if not ext.startswith("."):
                ext = "." + ext
            patterns.append(f"**/*{ext}")
        return patterns or None
