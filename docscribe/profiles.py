"""YAML-based extraction profiles.

A profile file holds a ``default`` mapping and an optional ``domains``
mapping keyed by host name::

    default:
      min_markdown_length: 150
    domains:
      devcenter.bitrise.io:
        content_selectors: [".article-body"]
        boilerplate_selectors: [".version-picker"]
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import yaml
from pydantic import ValidationError

from docscribe.items import ExtractionProfile


class ProfileError(ValueError):
    """Raised when a profile file cannot be read or fails validation.

    Attributes:
        path -- the profile file that failed
    """

    def __init__(self, message: str, path: str | Path = "") -> None:
        super().__init__(message)
        self.path = str(path)


def _domain_settings(domains: Any, url: str) -> dict[str, Any]:
    """Return the settings of the longest domain key matching *url*."""
    netloc = urlparse(url).netloc.lower()
    best_key = ""
    best_cfg: dict[str, Any] = {}
    if not netloc or not isinstance(domains, dict):
        return best_cfg
    for key, cfg in domains.items():
        if not isinstance(key, str) or not isinstance(cfg, dict):
            continue
        key_lower = key.lower()
        if (netloc == key_lower or netloc.endswith("." + key_lower)) and (
            len(key_lower) > len(best_key)
        ):
            best_key = key_lower
            best_cfg = cfg
    return best_cfg


def load_profile(path: str | Path, url: str = "") -> ExtractionProfile:
    """Load the YAML profile at *path* and return the settings for *url*."""
    try:
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ProfileError(f"Cannot read profile {path}: {exc}", path=path) from exc

    if not isinstance(data, dict):
        raise ProfileError(f"Profile {path} must be a mapping", path=path)

    default = data.get("default") or {}
    merged: dict[str, Any] = {}
    if isinstance(default, dict):
        merged.update(default)
    merged.update(_domain_settings(data.get("domains"), url))

    try:
        return ExtractionProfile(**merged)
    except ValidationError as exc:
        raise ProfileError(f"Invalid profile {path}: {exc}", path=path) from exc
