"""
BenfordProof Core Module

Contains foundational pieces shared by all modules:
- BenfordError and its subclasses: the error taxonomy
- dual_hash: SHA256:BLAKE3 dual hashing
- emit_receipt: Receipt emission for analysis and simulation runs
- merkle: Merkle tree root computation for sample batches
- stoprule_alert: Anomaly receipt for non-conformant data
"""

import hashlib
import json
from datetime import datetime, timezone

import blake3

# Tenant ID for all receipts
TENANT_ID = "benfordproof"

# Receipt ledger file path
RECEIPTS_FILE = "receipts.jsonl"


class BenfordError(Exception):
    """Base class for every failure raised by BenfordProof. Never catch silently."""

    def __init__(self, message: str, metric: str = "unknown"):
        self.message = message
        self.metric = metric
        super().__init__(message)


class InvalidLengthError(BenfordError):
    """Sample count is not an integer, or is smaller than 1."""

    def __init__(self, length):
        self.length = length
        super().__init__(
            f"Sample length must be a positive integer, got {length!r}",
            metric="sample_length"
        )


class EmptyInputError(BenfordError):
    """Analysis was asked to run over zero values."""

    def __init__(self):
        super().__init__("Cannot analyze an empty dataset", metric="sample_size")


class InvalidThresholdError(BenfordError):
    """Threshold lies outside the open interval (0, 1)."""

    def __init__(self, threshold):
        self.threshold = threshold
        super().__init__(
            f"Threshold must be strictly between 0 and 1, got {threshold!r}",
            metric="threshold"
        )


class NotFiniteError(BenfordError):
    """Value is NaN or infinite."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Value must be finite, got {value!r}", metric="leading_digit")


class NonPositiveError(BenfordError):
    """Value is zero or negative."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Value must be positive, got {value!r}", metric="leading_digit")


class InvalidDigitError(BenfordError):
    """Extraction produced a digit outside 1-9. Signals a numeric edge-case bug."""

    def __init__(self, value, digit):
        self.value = value
        self.digit = digit
        super().__init__(
            f"Extracted leading digit {digit!r} from {value!r} is outside 1-9",
            metric="leading_digit"
        )


def dual_hash(data: bytes | str) -> str:
    """
    SHA256:BLAKE3 - ALWAYS use this, never single hash.

    Args:
        data: Bytes or string to hash

    Returns:
        String in format "sha256_hex:blake3_hex"
    """
    if isinstance(data, str):
        data = data.encode('utf-8')

    sha = hashlib.sha256(data).hexdigest()
    b3 = blake3.blake3(data).hexdigest()

    return f"{sha}:{b3}"


def emit_receipt(receipt_type: str, data: dict, to_file: bool = False) -> dict:
    """
    Emit a receipt for one operation.

    Args:
        receipt_type: Type of receipt (benford, sample, simulation, anomaly)
        data: Receipt payload data
        to_file: If True, also append to receipts.jsonl

    Returns:
        Complete receipt dict with metadata
    """
    payload = {"tenant_id": TENANT_ID, **data}

    receipt = {
        "receipt_type": receipt_type,
        "ts": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "tenant_id": payload["tenant_id"],
        "payload_hash": dual_hash(json.dumps(payload, sort_keys=True)),
        **payload
    }

    receipt_json = json.dumps(receipt, sort_keys=True)

    # Output to stdout for pipeline consumption
    print(receipt_json, flush=True)

    if to_file:
        with open(RECEIPTS_FILE, "a") as f:
            f.write(receipt_json + "\n")

    return receipt


def merkle(items: list) -> str:
    """
    Compute Merkle root of items.

    Args:
        items: List of items (will be JSON serialized)

    Returns:
        Dual hash of merkle root
    """
    if not items:
        return dual_hash(b"empty")

    hashes = [dual_hash(json.dumps(i, sort_keys=True)) for i in items]

    while len(hashes) > 1:
        # Pad with last element if odd
        if len(hashes) % 2:
            hashes.append(hashes[-1])
        hashes = [dual_hash(hashes[i] + hashes[i + 1])
                  for i in range(0, len(hashes), 2)]

    return hashes[0]


def stoprule_alert(metric: str, message: str, baseline: float = 0.0, delta: float = 0.0) -> dict:
    """
    Emit anomaly receipt and continue with alert.

    Args:
        metric: Name of the metric that triggered
        message: Alert message
        baseline: Expected baseline value
        delta: Deviation from baseline

    Returns:
        The anomaly receipt
    """
    return emit_receipt("anomaly", {
        "metric": metric,
        "message": message,
        "baseline": baseline,
        "delta": delta,
        "classification": "drift",
        "action": "alert",
        "tenant_id": TENANT_ID
    })
