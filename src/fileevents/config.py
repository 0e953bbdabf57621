"""Configuration loading utilities for the file event scanner."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml  # type: ignore

from .criteria import QueryCriteria

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when the configuration file is missing or invalid."""


@dataclass
class ScanConfig:
    """Options describing which tree to enumerate and how."""

    root_path: Optional[Path] = None
    extension: Optional[str] = None
    strict: bool = False
    follow_symlinks: bool = False


@dataclass
class AppConfig:
    """Top-level configuration structure."""

    scan: ScanConfig
    query: Optional[QueryCriteria] = None


def load_config(path: Path) -> AppConfig:
    """Load and validate the YAML configuration file."""

    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")
    if not path.is_file():
        raise ConfigError(f"Configuration path is not a file: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read configuration file {path}: {exc}") from exc

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse YAML configuration: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be a mapping")

    scan_cfg = _parse_scan_config(data.get("scan"), config_path=path)
    query_cfg = _parse_query_config(data.get("query"))
    logger.debug("Loaded configuration from %s: %s", path, scan_cfg)

    return AppConfig(scan=scan_cfg, query=query_cfg)


def _parse_scan_config(raw: Any, *, config_path: Path) -> ScanConfig:
    if raw is None:
        return ScanConfig()
    if not isinstance(raw, dict):
        raise ConfigError("'scan' section must be a mapping")

    root_path: Optional[Path] = None
    root_path_raw = raw.get("root_path")
    if root_path_raw is not None:
        if not isinstance(root_path_raw, str) or not root_path_raw:
            raise ConfigError("scan.root_path must be a non-empty string")
        root_path = Path(root_path_raw)
        if not root_path.is_absolute():
            root_path = (config_path.parent / root_path).resolve()

    extension = raw.get("extension")
    if extension is not None and (not isinstance(extension, str) or not extension):
        raise ConfigError("scan.extension must be a non-empty string")

    return ScanConfig(
        root_path=root_path,
        extension=extension,
        strict=_parse_bool(raw.get("strict", False), "scan.strict"),
        follow_symlinks=_parse_bool(raw.get("follow_symlinks", False), "scan.follow_symlinks"),
    )


def _parse_query_config(raw: Any) -> Optional[QueryCriteria]:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ConfigError("'query' section must be a mapping")
    try:
        return QueryCriteria.from_mapping(raw)
    except ValueError as exc:
        raise ConfigError(f"Invalid query section: {exc}") from exc


def _parse_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"{field_name} must be a boolean")
    return value
