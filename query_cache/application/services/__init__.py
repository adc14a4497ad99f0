"""Application services: key derivation, cacheability and background writes."""

from query_cache.application.services.background_writer import BackgroundWriter
from query_cache.application.services.cacheability_policy import CacheabilityPolicy
from query_cache.application.services.key_derivation import (
    HashAlgorithm,
    KeyDerivationService,
    SHA256Algorithm,
)

__all__ = [
    "BackgroundWriter",
    "CacheabilityPolicy",
    "HashAlgorithm",
    "KeyDerivationService",
    "SHA256Algorithm",
]
