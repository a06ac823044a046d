# tests/conftest.py
"""Shared test fixtures.

Record Fixtures:
- friends_records: The three-person sample where every record lists friends
- mixed_records: Leaves, branches, a dangling reference and a self-reference

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

import os
from typing import Any

import pytest
from hypothesis import Phase, Verbosity, settings

# CI profile: Fast tests for continuous integration
settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

# Nightly profile: Thorough testing for scheduled runs
settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Debug profile: Minimal examples with verbose output for debugging
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Load profile from environment, default to "ci"
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


@pytest.fixture
def friends_records() -> list[dict[str, Any]]:
    """Sample social data: every record references at least one other."""
    return [
        {"id": 1, "name": "Alice", "age": "30", "active": "true", "friends": [2, 3]},
        {"id": 2, "name": "Bob", "age": "25", "active": "false", "friends": [1]},
        {"id": 3, "name": "Carol", "age": "35", "active": "true", "friends": [1, 2]},
    ]


@pytest.fixture
def mixed_records() -> list[dict[str, Any]]:
    """Leaves, branches, one dangling reference and one self-reference."""
    return [
        {"id": "root", "children": ["a", "b", "ghost"]},
        {"id": "a", "children": []},
        {"id": "b", "children": ["c"]},
        {"id": "c"},
        {"id": "loop", "children": ["loop"]},
    ]
