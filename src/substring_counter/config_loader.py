"""Configuration loading for Substring Counter.

Settings come from an optional YAML file.  Missing keys fall back to the
defaults below and the scheduling strategy can be overridden through the
``SUBSTRING_COUNTER_STRATEGY`` environment variable.
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .matching.scanner import BUFFER_SIZE

STRATEGY_ENV = 'SUBSTRING_COUNTER_STRATEGY'
STRATEGIES = ('pool', 'async', 'serial')
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR')


class ConfigError(ValueError):
    """Raised when a configuration file or value is invalid."""


@dataclass(frozen=True)
class ScanSettings:
    strategy: str = 'pool'
    workers: Optional[int] = None
    batch_size: int = 500
    buffer_size: int = BUFFER_SIZE
    strict_boundaries: bool = True
    follow_links: bool = False
    log_level: str = 'WARNING'

    def __post_init__(self) -> None:
        if self.strategy not in STRATEGIES:
            raise ConfigError(f"strategy must be one of {', '.join(STRATEGIES)}, got {self.strategy!r}")
        if self.workers is not None and (not isinstance(self.workers, int) or isinstance(self.workers, bool) or self.workers < 1):
            raise ConfigError(f'workers must be a positive integer or null, got {self.workers!r}')
        for name in ('batch_size', 'buffer_size'):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise ConfigError(f'{name} must be a positive integer, got {value!r}')
        for name in ('strict_boundaries', 'follow_links'):
            if not isinstance(getattr(self, name), bool):
                raise ConfigError(f'{name} must be true or false')
        if not isinstance(self.log_level, str) or self.log_level.upper() not in LOG_LEVELS:
            raise ConfigError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}")

    def with_overrides(self, **overrides: Any) -> 'ScanSettings':
        """Return a copy with every non-``None`` override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _read_yaml(path: Path) -> Any:
    with path.open('r', encoding='utf-8') as f:
        return yaml.safe_load(f)


def load_config(path: Optional[Path] = None) -> ScanSettings:
    """Load settings from ``path`` (or defaults when ``None``).

    Raises:
        ConfigError: The file is not a YAML mapping, holds unknown keys or
            invalid values.
    """
    data: Dict[str, Any] = {}
    if path is not None:
        try:
            raw = _read_yaml(path)
        except yaml.YAMLError as exc:
            raise ConfigError(f'{path}: invalid YAML: {exc}') from exc
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigError(f'{path}: expected a mapping at the top level')
        known = {f.name for f in fields(ScanSettings)}
        unknown = sorted(set(raw) - known)
        if unknown:
            raise ConfigError(f"{path}: unknown settings: {', '.join(map(str, unknown))}")
        data.update(raw)

    strategy_override = os.environ.get(STRATEGY_ENV, '').strip().lower()
    if strategy_override:
        data['strategy'] = strategy_override
    return ScanSettings(**data)
