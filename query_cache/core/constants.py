"""Core constants: key namespace, header names and shared literal values.

Single source of truth for the stored-entry layout and the default limits
applied to background writes.
"""

# Namespace prepended to every key written through the store adapter.
CACHE_KEY_PREFIX = "fqc:"

# Response header carrying the elapsed seconds since a cached entry was stored.
AGE_HEADER = "age"

# Contextual key fields; caller-supplied key data may not set these.
SESSION_MODE_FIELD = "sessionMode"
SESSION_ID_FIELD = "sessionId"
RESERVED_KEY_FIELDS = frozenset({SESSION_MODE_FIELD, SESSION_ID_FIELD})

# Stored entry fields (JSON wire format).
ENTRY_DATA_FIELD = "data"
ENTRY_CACHE_POLICY_FIELD = "cachePolicy"
ENTRY_CACHE_TIME_FIELD = "cacheTime"

# Background write limits.
DEFAULT_MAX_ENTRY_BYTES = 5 * 1024 * 1024  # 5MB
DEFAULT_MAX_PENDING_WRITES = 1000
DEFAULT_MEMORY_CACHE_MAX_ENTRIES = 10_000
