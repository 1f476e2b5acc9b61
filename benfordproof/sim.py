"""
BenfordProof Sample Generation and Monte Carlo Harness

Purpose: Produce Benford-distributed synthetic data and measure how often the
conformance test accepts it (and rejects data that should fail).

Log-uniform sampling: exp(U[ln 1, ln 1000)) lands in [1, 1000) with leading
digits that follow Benford's Law.

4 Named Scenarios:
1. BASELINE - Large Benford samples at the default threshold
2. SMALL_SAMPLE - 500-value Benford samples at a loose 0.1 threshold
3. UNIFORM - Uniform samples, which must never conform
4. BOUNDARY - Power-of-ten edge values and invalid inputs
"""

import math
import random
from dataclasses import dataclass, field, asdict
from numbers import Integral
from typing import Optional

from benfordproof.core import (
    emit_receipt, merkle, TENANT_ID,
    BenfordError, InvalidLengthError, NotFiniteError, NonPositiveError
)
from benfordproof.detect.benford import analyze_benford, DEFAULT_THRESHOLD

SAMPLE_MIN = 1
SAMPLE_MAX = 1000

DISTRIBUTIONS = ["benford", "uniform", "normal"]


def generate_benford_number(rng: Optional[random.Random] = None) -> float:
    """
    Draw one log-uniform number from [1, 1000).

    Args:
        rng: Random generator to draw from (default: module-level random)

    Returns:
        Number whose leading digit is Benford-distributed
    """
    if rng is None:
        rng = random
    low, high = math.log(SAMPLE_MIN), math.log(SAMPLE_MAX)
    return math.exp(rng.random() * (high - low) + low)


def generate_benford_numbers(length: int, rng: Optional[random.Random] = None) -> list[float]:
    """
    Draw `length` independent log-uniform numbers.

    Args:
        length: Number of values, a positive integer
        rng: Random generator to draw from (default: module-level random)

    Returns:
        List of `length` numbers

    Raises:
        InvalidLengthError: length is not an integer, or is smaller than 1
    """
    if isinstance(length, bool) or not isinstance(length, Integral) or length < 1:
        raise InvalidLengthError(length)

    return [generate_benford_number(rng) for _ in range(length)]


def generate_sample(distribution: str, n: int, rng: random.Random) -> list[float]:
    """
    Generate a synthetic sample from a named distribution.

    Args:
        distribution: benford, uniform or normal
        n: Sample size
        rng: Random generator

    Returns:
        List of positive numbers
    """
    if distribution == "benford":
        return generate_benford_numbers(n, rng)
    elif distribution == "uniform":
        return [rng.uniform(SAMPLE_MIN, SAMPLE_MAX) for _ in range(n)]
    elif distribution == "normal":
        return [max(SAMPLE_MIN, abs(rng.gauss(500, 150))) for _ in range(n)]

    raise ValueError(f"Unknown distribution: {distribution}")


def sample_receipt(numbers: list[float], source: str) -> dict:
    """
    Emit receipt describing a generated batch.

    Args:
        numbers: Generated values
        source: Batch identifier

    Returns:
        Receipt dict with size, range and Merkle root of the batch
    """
    return emit_receipt("sample", {
        "tenant_id": TENANT_ID,
        "source": source,
        "sample_size": len(numbers),
        "min": min(numbers) if numbers else None,
        "max": max(numbers) if numbers else None,
        "merkle_root": merkle(numbers)
    })


@dataclass
class SimConfig:
    """Configuration for Monte Carlo simulation."""
    n_cycles: int = 100
    sample_size: int = 5000
    threshold: float = DEFAULT_THRESHOLD
    distributions: list = field(default_factory=lambda: list(DISTRIBUTIONS))
    random_seed: int = 42

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class SimState:
    """State tracking for simulation runs."""
    verdicts: dict = field(default_factory=dict)
    max_deviations: dict = field(default_factory=dict)
    violations: list = field(default_factory=list)
    cycle: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class SimResult:
    """Result of a simulation run."""
    config: SimConfig
    state: SimState
    conformance_rates: dict = field(default_factory=dict)
    mean_max_deviation: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "config": self.config.to_dict(),
            "state": self.state.to_dict(),
            "conformance_rates": self.conformance_rates,
            "mean_max_deviation": self.mean_max_deviation
        }


def run_simulation(config: SimConfig) -> SimResult:
    """
    Execute full Monte Carlo simulation.

    Args:
        config: Simulation configuration

    Returns:
        Simulation results
    """
    rng = random.Random(config.random_seed)
    state = SimState(
        verdicts={d: [] for d in config.distributions},
        max_deviations={d: [] for d in config.distributions}
    )

    for cycle in range(config.n_cycles):
        state.cycle = cycle
        for distribution in config.distributions:
            sample = generate_sample(distribution, config.sample_size, rng)
            report = analyze_benford(sample, config.threshold)
            state.verdicts[distribution].append(report.is_following_benford_law)
            state.max_deviations[distribution].append(
                max(report.first_digit_accuracies.values())
            )

    result = SimResult(
        config=config,
        state=state,
        conformance_rates={
            d: sum(v) / len(v) if v else 0.0 for d, v in state.verdicts.items()
        },
        mean_max_deviation={
            d: sum(v) / len(v) if v else 0.0 for d, v in state.max_deviations.items()
        }
    )

    emit_receipt("simulation", {
        "tenant_id": TENANT_ID,
        "scenario": "SIMULATION",
        "n_cycles": config.n_cycles,
        "sample_size": config.sample_size,
        "threshold": config.threshold,
        "conformance_rates": result.conformance_rates,
        "mean_max_deviation": result.mean_max_deviation,
        "violations": len(state.violations)
    })

    return result


def run_scenario(scenario: str) -> SimResult:
    """
    Run a specific named scenario.

    Args:
        scenario: Scenario name

    Returns:
        Scenario results
    """
    scenarios = {
        "BASELINE": _run_baseline,
        "SMALL_SAMPLE": _run_small_sample,
        "UNIFORM": _run_uniform,
        "BOUNDARY": _run_boundary
    }

    if scenario not in scenarios:
        raise ValueError(f"Unknown scenario: {scenario}")

    return scenarios[scenario]()


def _run_baseline() -> SimResult:
    """BASELINE: Large Benford samples at the default threshold."""
    config = SimConfig(
        n_cycles=10,
        sample_size=50000,
        distributions=["benford"]
    )
    return run_simulation(config)


def _run_small_sample() -> SimResult:
    """SMALL_SAMPLE: Small Benford samples need a loose threshold."""
    config = SimConfig(
        n_cycles=50,
        sample_size=500,
        threshold=0.1,
        distributions=["benford"]
    )
    return run_simulation(config)


def _run_uniform() -> SimResult:
    """UNIFORM: Uniform data never conforms."""
    config = SimConfig(
        n_cycles=20,
        sample_size=5000,
        distributions=["uniform"]
    )
    return run_simulation(config)


def _run_boundary() -> SimResult:
    """BOUNDARY: Power-of-ten edge values and invalid inputs."""
    config = SimConfig(n_cycles=0, sample_size=0, distributions=[])
    result = SimResult(config=config, state=SimState())

    expected_counts = [
        ("one", [1.0], {"1": 1}),
        ("tenth", [0.1], {"1": 1}),
        ("ten", [10.0], {"1": 1}),
        ("just_under_thousand", [999.9999999999999], {"9": 1}),
        ("half", [0.5], {"5": 1}),
        ("thousand", [1000], {"1": 1}),
        ("exact_decimal_start", [0.0003, 7e25], {"3": 1, "7": 1}),
        ("huge_integer", [10 ** 400], {"1": 1})
    ]
    for case_name, data, expected in expected_counts:
        report = analyze_benford(data)
        if report.first_digit_counts != expected:
            result.state.violations.append({
                "case": case_name,
                "expected": expected,
                "observed": report.first_digit_counts
            })

    expected_errors = [
        ("zero", [1.0, 0], NonPositiveError),
        ("negative", [-100], NonPositiveError),
        ("nan", [float("nan")], NotFiniteError),
        ("infinity", [float("inf")], NotFiniteError)
    ]
    for case_name, data, error in expected_errors:
        try:
            analyze_benford(data)
        except error:
            continue
        except BenfordError as e:
            result.state.violations.append({
                "case": case_name,
                "expected": error.__name__,
                "observed": type(e).__name__
            })
            continue
        result.state.violations.append({
            "case": case_name,
            "expected": error.__name__,
            "observed": "no_error"
        })

    simulation_receipt(config, result)
    return result


def simulation_receipt(config: SimConfig, result: SimResult) -> dict:
    """
    Emit simulation receipt.

    Args:
        config: Simulation configuration
        result: Simulation results

    Returns:
        Receipt dict
    """
    return emit_receipt("simulation", {
        "tenant_id": TENANT_ID,
        "cycle_id": result.state.cycle,
        "scenario": "CUSTOM",
        "conformance_rates": result.conformance_rates,
        "mean_max_deviation": result.mean_max_deviation,
        "violations": len(result.state.violations),
        "config": config.to_dict()
    })
