"""
BenfordProof: Receipts-native Benford's Law conformance testing

Generate log-uniform data, extract leading digits, and judge a dataset
digit by digit against the Benford distribution.
"""

__version__ = "1.0.0"
__author__ = "BenfordProof"

from benfordproof.core import TENANT_ID
from benfordproof.detect.benford import (
    AnalysisReport, STANDARD_BENFORD, DEFAULT_THRESHOLD,
    analyze_benford as process_benford_law
)
from benfordproof.sim import (
    generate_benford_number as generate_benford_law_number,
    generate_benford_numbers as generate_benford_law_numbers
)

__all__ = [
    "TENANT_ID",
    "AnalysisReport",
    "STANDARD_BENFORD",
    "DEFAULT_THRESHOLD",
    "generate_benford_law_number",
    "generate_benford_law_numbers",
    "process_benford_law",
]
