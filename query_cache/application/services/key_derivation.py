"""Canonical cache key derivation (canonical JSON + digest).

Pure functions of their inputs: no I/O, no mutation of the caller's key data.
"""

from __future__ import annotations

import hashlib
import json
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from query_cache.core.constants import RESERVED_KEY_FIELDS
from query_cache.domain.exceptions import KeySerializationError
from query_cache.domain.value_objects import ContextualCacheKey


class HashAlgorithm(ABC):
    """Abstract hash algorithm (OCP)."""

    @abstractmethod
    def hash(self, data: str) -> str:
        """Compute hash of input string."""
        ...


class SHA256Algorithm(HashAlgorithm):
    """SHA-256 implementation (64 hex chars)."""

    def hash(self, data: str) -> str:
        return hashlib.sha256(data.encode()).hexdigest()


class KeyDerivationService:
    """Single source of truth for canonical cache keys."""

    def __init__(self, algorithm: HashAlgorithm | None = None) -> None:
        self.algorithm = algorithm or SHA256Algorithm()

    @staticmethod
    def canonical_json(data: Mapping[str, Any]) -> str:
        """Canonical JSON for deterministic hashing.

        Raises:
            KeySerializationError: On cycles, non-JSON values or unsortable keys.
        """
        try:
            return json.dumps(
                data, sort_keys=True, separators=(",", ":"), allow_nan=False
            )
        except (TypeError, ValueError, RecursionError) as e:
            raise KeySerializationError(str(e)) from e

    @staticmethod
    def merge(
        base_key_data: Mapping[str, Any], contextual: ContextualCacheKey
    ) -> dict[str, Any]:
        """Merge contextual fields over the caller's key data.

        Caller fields named like contextual fields are dropped first, so key
        customization can never change or fake the session scope.
        """
        if not isinstance(base_key_data, Mapping):
            raise KeySerializationError(
                f"cache key data must be a mapping, got {type(base_key_data).__name__}"
            )
        merged = {
            k: v for k, v in base_key_data.items() if k not in RESERVED_KEY_FIELDS
        }
        merged.update(contextual.as_dict())
        return merged

    def derive_key(
        self, base_key_data: Mapping[str, Any], contextual: ContextualCacheKey
    ) -> str:
        """Derive the canonical key for key data under a session scope."""
        return self.algorithm.hash(
            self.canonical_json(self.merge(base_key_data, contextual))
        )
