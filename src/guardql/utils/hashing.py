"""Digests for missing-permissions cache keys."""

import hashlib
import json
from collections.abc import Sequence


def digest_permissions(permissions: Sequence[str]) -> str:
    """Digest an ordered permissions requirement.

    Order and duplicates are significant: the production filter reports
    the first missing permission, so ``["a", "b"]`` and ``["b", "a"]``
    must not share a key.

    Returns:
        The first 16 hex chars of the SHA-256 of the JSON-encoded list.
    """
    encoded = json.dumps(list(permissions), separators=(",", ":"))
    return hashlib.sha256(encoded.encode()).hexdigest()[:16]
