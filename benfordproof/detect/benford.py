"""
Benford's Law Conformance Module

Purpose: First-digit distribution testing separates organic numeric data from
manufactured data.

Mathematical Basis:
- Natural data follows: P(d) = log10(1 + 1/d)
- Expected first-digit frequencies: 1=30.1%, 2=17.6%, 3=12.5%, ...
- Conformance is judged digit by digit: every |observed - expected| must stay
  strictly below the threshold
"""

import math
from dataclasses import dataclass, field, asdict
from typing import Iterable, Optional

from benfordproof.core import (
    emit_receipt, stoprule_alert, TENANT_ID,
    EmptyInputError, InvalidThresholdError
)
from benfordproof.detect.digits import extract_leading_digit

DEFAULT_THRESHOLD = 0.01

# Rounded Benford constants, keyed by digit string
STANDARD_BENFORD: dict[str, float] = {
    "1": 0.301,
    "2": 0.176,
    "3": 0.125,
    "4": 0.097,
    "5": 0.079,
    "6": 0.067,
    "7": 0.058,
    "8": 0.051,
    "9": 0.046,
}


@dataclass
class AnalysisReport:
    """Outcome of one conformance analysis."""
    is_following_benford_law: bool
    first_digit_counts: dict[str, int] = field(default_factory=dict)
    first_digit_probabilities: dict[str, float] = field(default_factory=dict)
    first_digit_accuracies: dict[str, float] = field(default_factory=dict)
    sample_size: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


def benford_expected() -> dict[str, float]:
    """
    Return the exact Benford first-digit frequencies.

    Returns:
        Dict mapping digit string ("1"-"9") to log10(1 + 1/d)
    """
    return {str(d): math.log10(1 + 1/d) for d in range(1, 10)}


def count_first_digits(values: list[float]) -> dict[str, int]:
    """
    Tally leading digits. Only digits that occur get an entry.

    Args:
        values: Finite positive numbers

    Returns:
        Dict mapping digit string to occurrence count, ascending by digit
    """
    counts = {}
    for v in values:
        digit = extract_leading_digit(v)
        counts[digit] = counts.get(digit, 0) + 1
    return {str(d): counts[d] for d in sorted(counts)}


def analyze_benford(numbers: Iterable[float],
                    threshold: float = DEFAULT_THRESHOLD,
                    reference: Optional[dict[str, float]] = None) -> AnalysisReport:
    """
    Perform a complete first-digit Benford analysis on a dataset.

    Args:
        numbers: Finite positive numbers
        threshold: Maximum allowed per-digit deviation, in (0, 1)
        reference: Digit string to expected probability (default STANDARD_BENFORD)

    Returns:
        AnalysisReport with verdict, counts, probabilities and accuracies

    Raises:
        EmptyInputError: numbers is empty
        InvalidThresholdError: threshold outside (0, 1)
        NotFiniteError, NonPositiveError: from the first invalid element
    """
    if reference is None:
        reference = STANDARD_BENFORD

    values = list(numbers)
    if not values:
        raise EmptyInputError()
    if not 0 < threshold < 1:
        raise InvalidThresholdError(threshold)

    total = len(values)
    counts = count_first_digits(values)
    probabilities = {d: count / total for d, count in counts.items()}

    # Absent digits count as probability 0
    accuracies = {
        d: abs(probabilities.get(d, 0.0) - expected)
        for d, expected in reference.items()
    }
    is_benford = all(diff < threshold for diff in accuracies.values())

    return AnalysisReport(
        is_following_benford_law=is_benford,
        first_digit_counts=counts,
        first_digit_probabilities=probabilities,
        first_digit_accuracies=accuracies,
        sample_size=total
    )


def benford_receipt(numbers: Iterable[float], source: str,
                    threshold: float = DEFAULT_THRESHOLD,
                    reference: Optional[dict[str, float]] = None) -> dict:
    """
    Emit receipt with Benford's Law analysis results.

    Args:
        numbers: Values to analyze
        source: Data source identifier
        threshold: Maximum allowed per-digit deviation
        reference: Expected distribution (default STANDARD_BENFORD)

    Returns:
        Receipt dict with analysis results
    """
    report = analyze_benford(numbers, threshold, reference)

    receipt = emit_receipt("benford", {
        "tenant_id": TENANT_ID,
        "source": source,
        "threshold": threshold,
        **report.to_dict()
    })

    if not report.is_following_benford_law:
        worst = max(report.first_digit_accuracies.values())
        stoprule_alert(
            metric="benford_conformity",
            message=f"Benford deviation detected for {source}",
            baseline=threshold,
            delta=worst - threshold
        )

    return receipt
