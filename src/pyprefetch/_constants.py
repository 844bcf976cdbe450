"""Internal constants shared across the library."""

USER_AGENT = "pyprefetch/1 (+prefetch)"

DEFAULT_MAX_PREFETCH = 3
DEFAULT_DECAY_RATE = 0.1

# Resource cost defaults, bytes and milliseconds.
DEFAULT_RESOURCE_SIZE: float = 100.0
DEFAULT_RESOURCE_LATENCY: float = 100.0

# Cost substituted when size * latency evaluates to zero.
MIN_COST: float = 1.0
