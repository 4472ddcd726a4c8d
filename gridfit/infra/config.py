"""Grid configuration and env loading."""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import TypeVar

ENV_PREFIX = "GRIDFIT_"

T = TypeVar("T", int, float)


@dataclass(frozen=True, slots=True)
class GridConfig:
    """Construction parameters for a grid engine."""

    width: int = 3
    height: int = 3
    cell_size: float = 100.0
    spacing: float = 5.0
    min_size: int = 1
    max_width: int = 10
    max_height: int = 10

    def __post_init__(self) -> None:
        if self.min_size < 1:
            raise ValueError("min_size must be at least 1.")
        if self.cell_size <= 0:
            raise ValueError("cell_size must be positive.")
        if self.spacing < 0:
            raise ValueError("spacing must not be negative.")
        if self.max_width < self.min_size or self.max_height < self.min_size:
            raise ValueError(f"Maximum grid size must be at least {self.min_size}.")
        if not self.accepts_size(self.width, self.height):
            raise ValueError(
                f"Initial size {self.width}x{self.height} is outside "
                f"[{self.min_size}..{self.max_width}]x[{self.min_size}..{self.max_height}]."
            )

    def accepts_size(self, width: int, height: int) -> bool:
        """Return whether a grid size is within configured limits."""
        return self.min_size <= width <= self.max_width and self.min_size <= height <= self.max_height


def read_env_file(path: str | Path) -> dict[str, str]:
    """Return ``GRIDFIT_*`` settings from a KEY=VALUE file; missing files yield nothing."""
    env_path = Path(path)
    if not env_path.exists():
        return {}
    settings: dict[str, str] = {}
    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        key, sep, value = raw_line.strip().partition("=")
        key = key.strip()
        if not sep or not key.startswith(ENV_PREFIX):
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]
        settings[key] = value
    return settings


def _number(settings: Mapping[str, str], field_name: str, default: T, parse: Callable[[str], T]) -> T:
    raw = settings.get(f"{ENV_PREFIX}{field_name.upper()}")
    if raw is None:
        return default
    try:
        return parse(raw)
    except ValueError:
        return default


def load_grid_config(defaults: GridConfig | None = None, env_file: str | Path | None = None) -> GridConfig:
    """Build grid configuration from an optional env file overlaid by ``GRIDFIT_*`` env vars.

    Process environment wins over the file; unparsable values keep the default.
    """
    base = defaults if defaults is not None else GridConfig()
    settings = read_env_file(env_file) if env_file is not None else {}
    settings.update((key, value) for key, value in os.environ.items() if key.startswith(ENV_PREFIX))
    overrides: dict[str, int | float] = {}
    for item in fields(GridConfig):
        current = getattr(base, item.name)
        parse = float if item.type in ("float", float) else int
        overrides[item.name] = _number(settings, item.name, current, parse)
    return replace(base, **overrides)
