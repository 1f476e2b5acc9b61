"""
BenfordProof Detection Modules

- digits: Leading significant digit extraction
- benford: Benford's Law first-digit conformance analysis
"""

from . import digits
from . import benford

__all__ = ["digits", "benford"]
