"""Shared constants for lawcheck.

Centralized defaults used by the runtime and generation packages. Placing
them here avoids circular imports between ``runtime.config`` and the
generators that need the same bounds.

Constants are grouped by domain:
- Trial limits: budget and size schedule of a run
- Shrink limits: bounds of the counterexample minimization search
- Generation limits: retry bounds for constrained generators

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Trial limits
    "DEFAULT_TRIAL_BUDGET",
    "DEFAULT_MAX_SIZE",
    "DEFAULT_MAX_REPEATED_ERRORS",
    "DEFAULT_WORKERS",
    # Shrink limits
    "DEFAULT_MAX_SHRINK_ATTEMPTS",
    "DEFAULT_SHRINK_VARIANTS",
    # Generation limits
    "MAX_FILTER_ATTEMPTS",
    "DOMAIN_PROBE_COUNT",
    "MAX_DIGEST_DEPTH",
    # Seeds
    "SEED_BYTES",
    # Rendering
    "FUNCTION_PLACEHOLDER",
]

# ============================================================================
# TRIAL LIMITS
# ============================================================================

# Number of trials per law check. 100 matches the customary default of
# QuickCheck-style tools.
DEFAULT_TRIAL_BUDGET: int = 100

# Size hint reached by the last trial of a run. Sizes grow linearly from 0.
DEFAULT_MAX_SIZE: int = 100

# Consecutive identical evaluation errors tolerated before a run stops
# with an inconclusive result.
DEFAULT_MAX_REPEATED_ERRORS: int = 5

# Worker threads used for the trial phase (1 = sequential).
DEFAULT_WORKERS: int = 1

# ============================================================================
# SHRINK LIMITS
# ============================================================================

# Maximum proposition evaluations spent on minimizing one counterexample.
DEFAULT_MAX_SHRINK_ATTEMPTS: int = 1000

# Candidates tried per input per smaller size hint: the input's own seed
# plus (variants - 1) seeds derived from it.
DEFAULT_SHRINK_VARIANTS: int = 8

# ============================================================================
# GENERATION LIMITS
# ============================================================================

# Derived seeds tried by Gen.filter() before giving up.
MAX_FILTER_ATTEMPTS: int = 100

# Domain samples digested by FunctionGenerator.preflight().
DOMAIN_PROBE_COUNT: int = 8

# Maximum container nesting encoded by stable_digest(). Deeper (or cyclic)
# values are rejected as ungeneratable domains.
MAX_DIGEST_DEPTH: int = 100

# ============================================================================
# SEEDS
# ============================================================================

# Seed key width (128 bits). blake2b digest_size for every derivation.
SEED_BYTES: int = 16

# ============================================================================
# RENDERING
# ============================================================================

# Template for the opaque rendering of generated functions.
FUNCTION_PLACEHOLDER: str = "<function seed={seed} size={size}>"
