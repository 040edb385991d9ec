"""Pytest configuration for the lawcheck test suite.

Two layers of randomness meet here: Hypothesis drives the test inputs
(seeds, sizes, values), and lawcheck itself samples trials from those
seeds. Hypothesis settings therefore live in one place:

    dev      200 examples, random
    ci       50 examples, derandomized, failure blobs printed
    verbose  100 examples with per-example output

The profile comes from HYPOTHESIS_PROFILE when set to one of those names,
else "ci" when CI=true, else "dev". Tests that run complete law checks per
example cap their own max_examples and disable the deadline.
"""

import logging
import os

import pytest
from hypothesis import Phase, Verbosity, settings

# =============================================================================
# HYPOTHESIS PROFILES
# =============================================================================

_PHASES = (Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink)

_PROFILES: dict[str, dict[str, object]] = {
    "dev": {"max_examples": 200, "derandomize": False},
    "ci": {"max_examples": 50, "derandomize": True, "print_blob": True},
    "verbose": {"max_examples": 100, "derandomize": False, "verbosity": Verbosity.verbose},
}

for _name, _options in _PROFILES.items():
    settings.register_profile(_name, phases=_PHASES, **_options)  # type: ignore[arg-type]


def _select_profile() -> str:
    """Pick the Hypothesis profile for this process."""
    requested = os.environ.get("HYPOTHESIS_PROFILE")
    if requested in _PROFILES:
        return requested
    return "ci" if os.environ.get("CI") == "true" else "dev"


settings.load_profile(_select_profile())


# =============================================================================
# SHARED FIXTURES
# =============================================================================


@pytest.fixture
def lawcheck_debug_logs(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    """Capture lawcheck log records down to DEBUG."""
    caplog.set_level(logging.DEBUG, logger="lawcheck")
    return caplog
