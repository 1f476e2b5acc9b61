"""
Tests for sample generation and simulation scenarios.
"""

import pytest
import json
import math
import random
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from benfordproof.core import InvalidLengthError, merkle
from benfordproof.sim import (
    generate_benford_number, generate_benford_numbers, generate_sample,
    sample_receipt, run_simulation, run_scenario, simulation_receipt,
    SimConfig, SimState, SimResult
)


class TestGenerator:
    """Tests for log-uniform sample generation."""

    def test_generate_one_in_range(self):
        """Test a single draw lands in [1, 1000]."""
        for _ in range(1000):
            value = generate_benford_number()
            assert math.isfinite(value)
            assert 1 <= value <= 1000

    @pytest.mark.parametrize("length", [1, 7, 5000])
    def test_generate_many_length(self, length):
        """Batch has exactly the requested length."""
        numbers = generate_benford_numbers(length)
        assert len(numbers) == length
        assert all(1 <= n <= 1000 and math.isfinite(n) for n in numbers)

    @pytest.mark.parametrize("length", [0, -5, 5.5, 5.0, True, None, "5"])
    def test_generate_many_invalid_length(self, length):
        """Zero, negative and non-integer lengths fail."""
        with pytest.raises(InvalidLengthError):
            generate_benford_numbers(length)

    def test_seeded_generation_reproducible(self):
        """Equal seeds give equal batches."""
        first = generate_benford_numbers(100, random.Random(7))
        second = generate_benford_numbers(100, random.Random(7))
        assert first == second

    def test_draws_are_independent(self, seeded_rng):
        """Consecutive draws from one generator differ."""
        numbers = generate_benford_numbers(100, seeded_rng)
        assert len(set(numbers)) == 100

    def test_leading_one_most_common(self, seeded_rng):
        """Roughly 30% of draws lead with 1."""
        numbers = generate_benford_numbers(10000, seeded_rng)
        ones = sum(1 for n in numbers if str(n)[0] == "1")
        assert 0.27 < ones / len(numbers) < 0.33


class TestGenerateSample:
    """Tests for named comparison samplers."""

    @pytest.mark.parametrize("distribution", ["benford", "uniform", "normal"])
    def test_sample_positive(self, distribution, seeded_rng):
        """Every sampler yields positive finite values."""
        sample = generate_sample(distribution, 500, seeded_rng)
        assert len(sample) == 500
        assert all(v >= 1 and math.isfinite(v) for v in sample)

    def test_unknown_distribution(self, seeded_rng):
        """Unknown distribution names fail."""
        with pytest.raises(ValueError):
            generate_sample("cauchy", 10, seeded_rng)


class TestSampleReceipt:
    """Tests for sample receipts."""

    def test_sample_receipt(self, seeded_rng, capsys):
        """Receipt records size, range and Merkle root."""
        numbers = generate_benford_numbers(64, seeded_rng)
        receipt = sample_receipt(numbers, "batch-1")

        assert receipt["receipt_type"] == "sample"
        assert receipt["sample_size"] == 64
        assert receipt["min"] == min(numbers)
        assert receipt["max"] == max(numbers)
        assert receipt["merkle_root"] == merkle(numbers)

        captured = capsys.readouterr()
        assert json.loads(captured.out)["source"] == "batch-1"


class TestSimulation:
    """Tests for simulation harness."""

    def test_simconfig_defaults(self):
        """Test default simulation configuration."""
        config = SimConfig()
        assert config.n_cycles == 100
        assert config.threshold == 0.01
        assert config.distributions == ["benford", "uniform", "normal"]

    def test_simconfig_to_dict(self):
        """Test conversion to dict."""
        d = SimConfig(n_cycles=5).to_dict()
        assert d["n_cycles"] == 5
        assert d["random_seed"] == 42

    def test_run_simulation_basic(self, capsys):
        """Benford data conforms far more often than the alternatives."""
        config = SimConfig(n_cycles=3, sample_size=50000)
        result = run_simulation(config)

        assert isinstance(result, SimResult)
        assert set(result.conformance_rates) == {"benford", "uniform", "normal"}
        assert result.conformance_rates["benford"] == 1.0
        assert result.conformance_rates["uniform"] == 0.0
        assert result.conformance_rates["normal"] == 0.0
        assert result.mean_max_deviation["benford"] < result.mean_max_deviation["uniform"]
        assert len(result.state.verdicts["benford"]) == 3

        receipt = json.loads(capsys.readouterr().out.strip())
        assert receipt["receipt_type"] == "simulation"

    def test_run_simulation_deterministic(self, capsys):
        """Same seed gives identical results."""
        config = SimConfig(n_cycles=2, sample_size=500)
        first = run_simulation(config)
        second = run_simulation(config)
        assert first.state.max_deviations == second.state.max_deviations

    def test_result_to_dict(self, capsys):
        """Result converts to a nested dict."""
        result = run_simulation(SimConfig(n_cycles=1, sample_size=100, distributions=["benford"]))
        d = result.to_dict()
        assert d["config"]["sample_size"] == 100
        assert d["state"]["cycle"] == 0


class TestScenarios:
    """Tests for the named scenarios."""

    def test_baseline(self, capsys):
        """Large Benford samples conform at the default threshold."""
        result = run_scenario("BASELINE")
        assert result.conformance_rates["benford"] >= 0.9
        assert result.mean_max_deviation["benford"] < 0.01

    def test_small_sample(self, capsys):
        """Small samples conform at the loose threshold."""
        result = run_scenario("SMALL_SAMPLE")
        assert result.conformance_rates["benford"] >= 0.9

    def test_uniform(self, capsys):
        """Uniform samples never conform."""
        result = run_scenario("UNIFORM")
        assert result.conformance_rates["uniform"] == 0.0

    def test_boundary(self, capsys):
        """Every boundary and invalid-input case behaves as expected."""
        result = run_scenario("BOUNDARY")
        assert result.state.violations == []

    def test_unknown_scenario(self):
        """Unknown scenario names fail."""
        with pytest.raises(ValueError):
            run_scenario("NOPE")

    def test_simulation_receipt(self, capsys):
        """Test simulation receipt emission."""
        config = SimConfig(n_cycles=0)
        result = SimResult(config=config, state=SimState())
        receipt = simulation_receipt(config, result)

        assert receipt["receipt_type"] == "simulation"
        assert receipt["scenario"] == "CUSTOM"
        assert receipt["violations"] == 0
