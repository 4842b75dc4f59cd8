"""Unit tests for sweep summary metrics."""

from __future__ import annotations

import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from site_percolation.engine import SitePercolation, SweepRecord, SweepResult
from site_percolation.metrics import (
    sweep_summary,
    check_monotonic,
    p_at_fraction,
    MonotonicityViolation,
)


def _scenario():
    return SitePercolation(4).run(
        [(0, 1), (0, 2), (1, 3), (2, 3)], [0.1, 0.9, 0.2, 0.8], step=0.1
    )


def _result(rows):
    return SweepResult(
        records=tuple(SweepRecord(p, c, s, s / 4) for p, c, s in rows),
        p_c=None,
        n_nodes=4,
        step=0.5,
    )


class TestSweepSummary(unittest.TestCase):

    def test_scenario_summary(self):
        s = sweep_summary(_scenario())
        self.assertEqual(s["n_nodes"], 4)
        self.assertEqual(s["n_steps"], 11)
        self.assertAlmostEqual(s["p_c"], 0.2)
        self.assertEqual(s["final_component_count"], 1)
        self.assertEqual(s["final_largest_cluster_size"], 4)
        self.assertAlmostEqual(s["final_largest_fraction"], 1.0)
        self.assertAlmostEqual(s["p_half"], 0.2)

    def test_p_at_fraction_unreached(self):
        self.assertIsNone(p_at_fraction(_result([(0.0, 4, 1), (0.5, 3, 2)]), 0.75))


class TestCheckMonotonic(unittest.TestCase):

    def test_engine_sweep_passes(self):
        check_monotonic(_scenario())

    def test_component_increase_detected(self):
        with self.assertRaises(MonotonicityViolation):
            check_monotonic(_result([(0.0, 3, 2), (0.5, 4, 2)]))

    def test_largest_shrink_detected(self):
        with self.assertRaises(MonotonicityViolation):
            check_monotonic(_result([(0.0, 3, 2), (0.5, 3, 1)]))

    def test_single_record_passes(self):
        check_monotonic(_result([(0.0, 4, 1)]))


if __name__ == "__main__":
    unittest.main()
