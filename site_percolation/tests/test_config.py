"""Unit tests for the configuration module."""

from __future__ import annotations
import json, sys, tempfile, unittest
from pathlib import Path
import numpy as np

sys.path.insert(0, str(Path(__file__).parent.parent.parent))
from site_percolation.config import load_config, build_rng, generate_weights

VALID_CFG = {
    "lattice": {"type": "square", "side": 8},
    "seed": 42,
    "step": 0.05,
}

def _write_cfg(d):
    f = tempfile.NamedTemporaryFile(suffix=".json", delete=False, mode="w")
    json.dump(d, f); f.close()
    return Path(f.name)


class TestLoadConfig(unittest.TestCase):

    def test_valid_config_loads(self):
        cfg = load_config(_write_cfg(VALID_CFG))
        self.assertEqual(cfg["seed"], 42)

    def test_bundled_example_loads(self):
        path = Path(__file__).parent.parent / "config_square_lattice.json"
        cfg = load_config(path)
        self.assertEqual(cfg["lattice"]["type"], "square")

    def test_missing_seed_raises(self):
        bad = {k: v for k, v in VALID_CFG.items() if k != "seed"}
        with self.assertRaises(ValueError):
            load_config(_write_cfg(bad))

    def test_invalid_lattice_type_raises(self):
        bad = {**VALID_CFG, "lattice": {"type": "triangular", "side": 4}}
        with self.assertRaises(ValueError):
            load_config(_write_cfg(bad))

    def test_missing_lattice_param_raises(self):
        bad = {**VALID_CFG, "lattice": {"type": "custom", "n": 4}}
        with self.assertRaises(ValueError):
            load_config(_write_cfg(bad))

    def test_bad_step_raises(self):
        for step in (0, -0.1, 1.5, "0.1", True):
            with self.assertRaises(ValueError):
                load_config(_write_cfg({**VALID_CFG, "step": step}))

    def test_step_is_optional(self):
        cfg = {k: v for k, v in VALID_CFG.items() if k != "step"}
        load_config(_write_cfg(cfg))

    def test_write_snapshots_must_be_bool(self):
        with self.assertRaises(ValueError):
            load_config(_write_cfg({**VALID_CFG, "write_snapshots": "yes"}))

    def test_file_not_found_raises(self):
        with self.assertRaises(FileNotFoundError):
            load_config("/nonexistent/path/config.json")


class TestWeights(unittest.TestCase):

    def test_weights_in_unit_interval(self):
        w = generate_weights(500, np.random.default_rng(0))
        self.assertEqual(w.shape, (500,))
        self.assertTrue(np.all((w >= 0) & (w < 1)))

    def test_reproducibility(self):
        w1 = generate_weights(50, np.random.default_rng(123))
        w2 = generate_weights(50, np.random.default_rng(123))
        np.testing.assert_array_equal(w1, w2)

    def test_build_rng_from_config(self):
        val1 = build_rng(VALID_CFG).integers(0, 1000)
        val2 = build_rng(VALID_CFG).integers(0, 1000)
        self.assertEqual(val1, val2)


if __name__ == "__main__":
    unittest.main()
