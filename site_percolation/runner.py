"""
Runner script for the site percolation engine.

Loads a JSON config, builds the lattice and node weights, sweeps the
activation threshold from 0 to 1 and writes the results.

Usage
-----
    python runner.py config.json [--output-dir results/]

Outputs (all in the output directory):

    percolation_results.csv    one row per sweep step: p, Ncc, Smax, Nmax
    summary.json               sweep summary including p_c
    config_snapshot.json       config plus its SHA-256 hash
    experiment_metadata.json   paths, hash and timestamp

With ``"write_snapshots": true`` the per-step CSV sink also writes
percolation_report.csv and cluster_of_each_node.csv.
"""

from __future__ import annotations

import argparse
import csv
import hashlib
import json
import time
from pathlib import Path

import numpy as np

from .config import DEFAULT_STEP, load_config, build_rng, generate_weights
from .engine import SitePercolation, SweepResult
from .lattice import edges_from_config
from .metrics import sweep_summary
from .sink import CsvSink


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Site percolation engine: sweep p from 0 to 1 and locate p_c."
    )
    parser.add_argument("config", help="Path to JSON configuration file.")
    parser.add_argument(
        "--output-dir",
        default="results",
        help="Directory for output files (default: results/).",
    )
    return parser.parse_args(argv)


# ---------------------------------------------------------------------------
# Filesystem helpers
# ---------------------------------------------------------------------------


def _ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def _write_csv(path: Path, fieldnames: list[str], rows: list[dict]) -> None:
    with path.open("w", newline="") as fh:
        writer = csv.DictWriter(fh, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)


def _config_hash(cfg: dict) -> str:
    """Compute a SHA-256 hash of the JSON-serialised config for reproducibility."""
    serialised = json.dumps(cfg, sort_keys=True).encode("utf-8")
    return hashlib.sha256(serialised).hexdigest()


def _save_config_snapshot(output_dir: Path, cfg: dict) -> None:
    snapshot = {
        "config": cfg,
        "sha256": _config_hash(cfg),
    }
    (output_dir / "config_snapshot.json").write_text(json.dumps(snapshot, indent=2))


# ---------------------------------------------------------------------------
# Experiment
# ---------------------------------------------------------------------------


def _build_experiment(cfg: dict) -> tuple[int, np.ndarray, np.ndarray]:
    """Build the lattice edges and node weights from config.

    Returns
    -------
    n_nodes, edges, weights
    """
    n_nodes, edges = edges_from_config(cfg["lattice"])
    weights = generate_weights(n_nodes, build_rng(cfg))
    return n_nodes, edges, weights


def run_experiment(cfg: dict, output_dir: Path) -> SweepResult:
    """Run one sweep described by ``cfg`` and write all outputs to ``output_dir``."""
    n_nodes, edges, weights = _build_experiment(cfg)
    step = float(cfg.get("step", DEFAULT_STEP))
    print(f"[Sweep] n={n_nodes} nodes | edges={edges.shape[0]} | step={step}")

    engine = SitePercolation(n_nodes)
    t0 = time.perf_counter()
    if cfg.get("write_snapshots", False):
        with CsvSink(output_dir, n_nodes) as sink:
            result = engine.run(edges, weights, step, sink=sink)
    else:
        result = engine.run(edges, weights, step)
    elapsed = time.perf_counter() - t0

    _write_csv(
        output_dir / "percolation_results.csv",
        ["p", "Ncc", "Smax", "Nmax"],
        [
            {
                "p": r.p,
                "Ncc": r.component_count,
                "Smax": r.largest_cluster_size,
                "Nmax": r.largest_cluster_fraction,
            }
            for r in result.records
        ],
    )

    summary = sweep_summary(result)
    summary["elapsed_seconds"] = round(elapsed, 4)
    summary["sink_errors"] = list(result.sink_errors)
    (output_dir / "summary.json").write_text(json.dumps(summary, indent=2))

    _print_summary(summary)
    return result


def _print_summary(summary: dict) -> None:
    sep = "-" * 58
    print(sep)
    print("  Site Percolation Engine")
    print(sep)
    print(f"  Nodes                 : {summary['n_nodes']}")
    print(f"  Sweep steps           : {summary['n_steps']} (step={summary['step']})")
    print(f"  Elapsed               : {summary['elapsed_seconds']:.2f}s")
    print()
    if summary["p_c"] is not None:
        print(f"  Percolation detected at p = {summary['p_c']:.6g}")
    else:
        print("  No percolation within the sweep")
    if summary["p_half"] is not None:
        print(f"  Largest cluster >= N/2 at p = {summary['p_half']:.6g}")
    print(f"  Final components      : {summary['final_component_count']}")
    print(
        f"  Final largest cluster : {summary['final_largest_cluster_size']}"
        f" ({summary['final_largest_fraction']:.4f} of N)"
    )
    for msg in summary["sink_errors"]:
        print(f"  WARNING: {msg}")
    print(sep)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    output_dir = Path(args.output_dir)
    _ensure_dir(output_dir)

    cfg = load_config(args.config)
    _save_config_snapshot(output_dir, cfg)

    (output_dir / "experiment_metadata.json").write_text(
        json.dumps(
            {
                "config_file": str(Path(args.config).resolve()),
                "output_dir": str(output_dir.resolve()),
                "config_sha256": _config_hash(cfg),
                "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
            },
            indent=2,
        )
    )

    run_experiment(cfg, output_dir)
    print(f"  Results saved to : {output_dir.resolve()}")


if __name__ == "__main__":
    main()
