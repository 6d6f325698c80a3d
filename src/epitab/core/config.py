"""Tabulation defaults from a YAML file and environment variables.

Precedence (highest to lowest):
  1. Environment variables  (``EPITAB_MULTIPLIER``, ``EPITAB_DIGITS``,
     ``EPITAB_EXPLICIT_MISSING``)
  2. The YAML file passed to ``load_config``
  3. Built-in defaults

Example file::

    tabulation:
      multiplier: 100
      digits: 1
      explicit_missing: false
      coltotals: true
    binning:
      max_levels: 12
      bins: 4
"""

from __future__ import annotations

import functools
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from epitab.core.binning import numeric_to_factor

logger = logging.getLogger(__name__)

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}

_TABULATION_KEYS = (
    "multiplier", "digits", "proptotal", "coltotals", "rowtotals", "explicit_missing",
)


@dataclass
class TabulationConfig:
    """Default options for ``descriptive``.

    ``explicit_missing`` defaults to True: missing counter values are shown
    as their own "Missing" row unless a caller or config opts out.
    """
    multiplier: float = 100
    digits: int | None = 1
    proptotal: bool = False
    coltotals: bool = False
    rowtotals: bool = False
    explicit_missing: bool = True
    numeric_max_levels: int = 10
    numeric_bins: int = 5

    def binner(self):
        """Numeric-to-factor converter bound to the binning options."""
        return functools.partial(
            numeric_to_factor,
            max_levels=self.numeric_max_levels,
            bins=self.numeric_bins,
        )

    def as_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``descriptive``."""
        kwargs = {key: getattr(self, key) for key in _TABULATION_KEYS}
        kwargs["binner"] = self.binner()
        return kwargs


def _parse_bool(raw: str) -> bool | None:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    return None


def _coerce(key: str, value: Any) -> Any:
    """Validate a ``tabulation:`` value from the config file."""
    if key in ("proptotal", "coltotals", "rowtotals", "explicit_missing"):
        parsed = value if isinstance(value, bool) else _parse_bool(str(value))
        if parsed is not None:
            return parsed
    elif key == "digits":
        if value is None:
            return None
        if isinstance(value, str) and value.strip().isdigit():
            value = int(value)
        if isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 10:
            return value
    elif key == "multiplier":
        if not isinstance(value, bool):
            try:
                mult = float(value)
            except (TypeError, ValueError):
                mult = 0.0
            if mult > 0:
                return mult
    raise ValueError(f"Invalid value for tabulation.{key}: {value!r}")


def _positive_int(key: str, value: Any) -> int:
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value)
    if isinstance(value, int) and not isinstance(value, bool) and value > 0:
        return value
    raise ValueError(f"Invalid value for binning.{key}: {value!r}")


def _apply_env(config: TabulationConfig) -> None:
    env_mult = os.environ.get("EPITAB_MULTIPLIER", "").strip()
    if env_mult:
        try:
            mult = float(env_mult)
        except ValueError:
            logger.warning("Ignoring invalid EPITAB_MULTIPLIER=%r", env_mult)
        else:
            if mult > 0:
                config.multiplier = mult

    env_dec = os.environ.get("EPITAB_DIGITS", "").strip()
    if env_dec.isdigit() and 0 <= int(env_dec) <= 10:
        config.digits = int(env_dec)
    elif env_dec:
        logger.warning("Ignoring invalid EPITAB_DIGITS=%r", env_dec)

    env_missing = os.environ.get("EPITAB_EXPLICIT_MISSING", "")
    if env_missing.strip():
        parsed = _parse_bool(env_missing)
        if parsed is None:
            logger.warning("Ignoring invalid EPITAB_EXPLICIT_MISSING=%r", env_missing)
        else:
            config.explicit_missing = parsed


def load_config(path: str | Path | None = None) -> TabulationConfig:
    """Load tabulation defaults.

    If no path is given, the built-in defaults are used. Environment
    variables are applied on top in both cases. File values of the wrong
    type raise ``ValueError``; invalid environment values are ignored.
    """
    config = TabulationConfig()

    if path is not None:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f)

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ValueError("Config file must be a YAML mapping")

        tabulation = raw.get("tabulation", {}) or {}
        if isinstance(tabulation, dict):
            for key in _TABULATION_KEYS:
                if key in tabulation:
                    setattr(config, key, _coerce(key, tabulation[key]))

        binning = raw.get("binning", {}) or {}
        if isinstance(binning, dict):
            config.numeric_max_levels = _positive_int(
                "max_levels", binning.get("max_levels", config.numeric_max_levels),
            )
            config.numeric_bins = _positive_int("bins", binning.get("bins", config.numeric_bins))

        logger.debug("Loaded tabulation config from %s", path)

    _apply_env(config)
    return config
