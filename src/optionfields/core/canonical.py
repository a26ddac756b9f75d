"""
Canonical JSON serialization for stored flag sets and definition hashes.

Two-phase approach:
1. Normalize: Convert pandas/numpy scalars to JSON-safe primitives (our code)
2. Serialize: Produce deterministic JSON per RFC 8785/JCS (rfc8785 package)

Flag values frequently arrive from DataFrame-backed imports as numpy.bool_
or pandas.NA; both are normalized so the same flag set always encodes to
the same bytes. Equality filters on the relational backend rely on this.
"""

import hashlib
from typing import Any

import numpy as np
import pandas as pd
import rfc8785

# Version string recorded alongside definition fingerprints
CANONICAL_VERSION = "sha256-rfc8785-v1"


def _normalize_value(obj: Any) -> Any:
    """Convert a single value to a JSON-safe primitive.

    Args:
        obj: Any Python value

    Returns:
        JSON-serializable primitive
    """
    # Primitives pass through unchanged
    if obj is None or isinstance(obj, (str, int, bool, float)):
        return obj

    # NumPy scalar types
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)

    # Intentional missing values
    if obj is pd.NA or obj is pd.NaT:
        return None

    return obj


def normalize_for_canonical(data: Any) -> Any:
    """Recursively normalize a structure for canonical serialization."""
    if isinstance(data, dict):
        return {str(k): normalize_for_canonical(v) for k, v in data.items()}
    if isinstance(data, (list, tuple)):
        return [normalize_for_canonical(v) for v in data]
    return _normalize_value(data)


def canonical_json(obj: Any) -> str:
    """Serialize to canonical JSON (RFC 8785).

    Args:
        obj: Structure to serialize

    Returns:
        Deterministic JSON string (sorted keys, no whitespace)
    """
    normalized = normalize_for_canonical(obj)
    return rfc8785.dumps(normalized).decode("utf-8")


def stable_hash(obj: Any) -> str:
    """SHA-256 hex digest of the canonical JSON form."""
    return hashlib.sha256(canonical_json(obj).encode("utf-8")).hexdigest()
