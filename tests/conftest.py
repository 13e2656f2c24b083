"""Pytest configuration for the ecslang test suite.

Hypothesis profiles are registered here and nowhere else; test modules only
override ``max_examples`` for the fuzz-marked intensive classes.

    dev      local runs, 300 examples
    ci       set when CI=true, 60 derandomized examples with blob printing
    verbose  100 examples with per-example output

``HYPOTHESIS_PROFILE`` selects a profile explicitly.

Tests marked ``@pytest.mark.fuzz`` are skipped unless the marker expression
names them: ``pytest -m fuzz``.
"""

import os

import pytest
from hypothesis import HealthCheck, Verbosity, settings

# =============================================================================
# HYPOTHESIS PROFILES
# =============================================================================

# Grammar rules recurse through blocks and calls; example timing varies with nesting.
_COMMON = {"deadline": None, "suppress_health_check": [HealthCheck.too_slow]}

_PROFILES: dict[str, dict[str, object]] = {
    "dev": {"max_examples": 300},
    "ci": {"max_examples": 60, "derandomize": True, "print_blob": True},
    "verbose": {"max_examples": 100, "verbosity": Verbosity.verbose},
}

for _name, _options in _PROFILES.items():
    settings.register_profile(_name, **_COMMON, **_options)


def _selected_profile() -> str:
    requested = os.environ.get("HYPOTHESIS_PROFILE", "")
    if requested in _PROFILES:
        return requested
    return "ci" if os.environ.get("CI") == "true" else "dev"


settings.load_profile(_selected_profile())


# =============================================================================
# FUZZ MARKER
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "fuzz: long-running property tests, skipped unless selected with -m fuzz",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if "fuzz" in str(config.getoption("-m", default="")):
        return

    skip = pytest.mark.skip(reason="intensive property test; run with: pytest -m fuzz")
    for item in items:
        if item.get_closest_marker("fuzz") is not None:
            item.add_marker(skip)
