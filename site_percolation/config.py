"""
Configuration loader for the site percolation engine.

Loads JSON config files, validates fields, and generates node weights
reproducibly using a numpy random Generator with an explicit seed.
"""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any

import numpy as np
from numpy.random import Generator, default_rng


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------

ConfigDict = dict[str, Any]


# ---------------------------------------------------------------------------
# Schema constants
# ---------------------------------------------------------------------------

LATTICE_TYPES = {"square", "custom"}
DEFAULT_STEP: float = 0.01


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------


def load_config(path: str | Path) -> ConfigDict:
    """Load and validate a JSON configuration file.

    Parameters
    ----------
    path : str or Path
        Path to the JSON configuration file.

    Returns
    -------
    ConfigDict
        Validated configuration dictionary.

    Raises
    ------
    ValueError
        If required fields are missing or values are invalid.
    FileNotFoundError
        If the config file does not exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with path.open("r") as fh:
        cfg: ConfigDict = json.load(fh)

    _validate_config(cfg)
    return cfg


def _validate_config(cfg: ConfigDict) -> None:
    """Validate top-level config fields.

    Raises
    ------
    ValueError
        On any validation failure.
    """
    required_top = {"lattice", "seed"}
    missing = required_top - cfg.keys()
    if missing:
        raise ValueError(f"Config missing required fields: {missing}")

    lattice_cfg = cfg["lattice"]
    if "type" not in lattice_cfg:
        raise ValueError("lattice.type is required")
    if lattice_cfg["type"] not in LATTICE_TYPES:
        raise ValueError(
            f"lattice.type must be one of {LATTICE_TYPES}, got {lattice_cfg['type']!r}"
        )

    _LATTICE_REQUIRED_PARAMS: dict[str, list[str]] = {
        "square": ["side"],
        "custom": ["n", "edges"],
    }
    ltype = lattice_cfg["type"]
    missing_params = [
        p for p in _LATTICE_REQUIRED_PARAMS[ltype] if p not in lattice_cfg
    ]
    if missing_params:
        raise ValueError(
            f"lattice config for type {ltype!r} is missing required "
            f"parameter(s): {missing_params}"
        )

    if ltype == "square" and int(lattice_cfg["side"]) < 1:
        raise ValueError(f"lattice.side must be >= 1, got {lattice_cfg['side']!r}")
    if ltype == "custom" and int(lattice_cfg["n"]) < 1:
        raise ValueError(f"lattice.n must be >= 1, got {lattice_cfg['n']!r}")

    step = cfg.get("step", DEFAULT_STEP)
    if (
        isinstance(step, bool)
        or not isinstance(step, (int, float))
        or not math.isfinite(step)
        or not (0 < step <= 1)
    ):
        raise ValueError(f"step must be a number in (0, 1], got {step!r}")

    if not isinstance(cfg.get("write_snapshots", False), bool):
        raise ValueError("write_snapshots must be a boolean")


# ---------------------------------------------------------------------------
# Weight generation
# ---------------------------------------------------------------------------


def generate_weights(n: int, rng: Generator) -> np.ndarray:
    """Draw one activation weight per node, uniform in [0, 1).

    Parameters
    ----------
    n : int
        Number of nodes.
    rng : Generator
        Seeded numpy random Generator for reproducibility.

    Returns
    -------
    np.ndarray, shape (n,), dtype float64
    """
    return rng.random(n)


def build_rng(cfg: ConfigDict) -> Generator:
    """Build a seeded numpy Generator from a config dict."""
    return default_rng(int(cfg["seed"]))
