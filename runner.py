"""Repository-level CLI entrypoint for the site percolation engine.

This wrapper preserves the documented invocation style:

    python runner.py <config.json> [--output-dir results/]

It delegates execution to :mod:`site_percolation.runner`.
"""

from __future__ import annotations

import sys
from pathlib import Path

from site_percolation.runner import main


def _rewrite_config_path_arg(argv: list[str]) -> list[str]:
    """Rewrite config argument to ``site_percolation/<name>`` when needed.

    Example configs live under ``site_percolation/`` but are usually named
    from the repository root, e.g. ``config_square_lattice.json``.
    """
    if len(argv) < 2:
        return argv

    candidate = Path(argv[1])
    if candidate.exists():
        return argv

    alt = Path("site_percolation") / candidate
    if alt.exists():
        out = list(argv)
        out[1] = str(alt)
        return out

    return argv


if __name__ == "__main__":
    main(_rewrite_config_path_arg(sys.argv)[1:])
