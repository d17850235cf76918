"""YAML/dict config loader for fuzzy-censor.

Supports loading from a YAML file or a plain dict (for embedding
in a larger application config).

Example YAML:

    fuzzy_censor:
      censorship:
        max_visible_prefix: 4
        min_visible_prefix: 2
        spaced: false
      phone:
        suffix_digits: 7
        pattern: '\\(?\\d{3}\\)?-? *\\d{3}-? *-?\\d{3}'
      fold_diacritics: false
      similarity_threshold: 0.8
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Any

import yaml

from .toolkit import Toolkit, ToolkitConfig
from .types import CensorshipPolicy, PhoneMatchPolicy, VALID_PHONE_PATTERN

logger = logging.getLogger(__name__)


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"{name} must be a mapping, got {type(section).__name__}")
    return section


def load_config(data: dict[str, Any] | None) -> dict[str, Any]:
    """Normalize a config dict (from YAML or inline)."""
    data = data or {}
    if not isinstance(data, dict):
        raise ValueError(f"config must be a mapping, got {type(data).__name__}")
    # Support nested under "fuzzy_censor" key or flat
    if "fuzzy_censor" in data:
        data = data["fuzzy_censor"] or {}
    if not isinstance(data, dict):
        raise ValueError(f"config must be a mapping, got {type(data).__name__}")

    censorship = _section(data, "censorship")
    phone = _section(data, "phone")

    try:
        threshold = float(data.get("similarity_threshold", 0.8))
    except (TypeError, ValueError) as e:
        raise ValueError(f"similarity_threshold must be a number: {e}") from e

    return {
        "max_visible_prefix": censorship.get("max_visible_prefix", 4),
        "min_visible_prefix": censorship.get("min_visible_prefix", 2),
        "spaced": bool(censorship.get("spaced", False)),
        "suffix_digits": phone.get("suffix_digits", 7),
        "phone_pattern": phone.get("pattern", VALID_PHONE_PATTERN),
        "fold_diacritics": bool(data.get("fold_diacritics", False)),
        "similarity_threshold": threshold,
    }


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load config from a YAML file."""
    path = Path(path).expanduser()
    logger.debug("loading config from %s", path)
    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"invalid YAML in {path}: {e}") from e
    return load_config(data)


def build_config(config: dict[str, Any]) -> ToolkitConfig:
    """Turn a normalized config dict into a ToolkitConfig."""
    cfg = load_config(config) if "suffix_digits" not in config else config
    return ToolkitConfig(
        censorship=CensorshipPolicy(
            max_visible_prefix=cfg["max_visible_prefix"],
            min_visible_prefix=cfg["min_visible_prefix"],
        ),
        phone=PhoneMatchPolicy(
            suffix_digits=cfg["suffix_digits"],
            pattern=cfg["phone_pattern"],
        ),
        spaced=cfg["spaced"],
        fold_diacritics=cfg["fold_diacritics"],
        similarity_threshold=cfg["similarity_threshold"],
    )


def create_toolkit(config: dict[str, Any] | None = None) -> Toolkit:
    """Create a fully configured Toolkit from a config dict."""
    return Toolkit(build_config(config or {}))
