# tests/conftest.py
"""Shared test fixtures and helpers.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/core/test_codec_properties.py
"""

import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
import yaml
from hypothesis import Phase, Verbosity, settings

# =============================================================================
# Hypothesis Configuration
# =============================================================================

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


COLORS = ["red", "green", "blue"]


def build_options_field(
    options: list[str] | None = None,
    *,
    path: str = "colors",
    list_key: str = "Sample",
    **config: Any,
) -> Any:
    """Build an OptionsField with the identity name provider."""
    from optionfields.fields.options import OptionsField

    return OptionsField.build(
        path,
        {"options": COLORS if options is None else options, **config},
        list_key=list_key,
        item_type_name_for=lambda key: key,
    )


@pytest.fixture
def colors_field() -> Any:
    """OptionsField "Sample.colors" with options red, green, blue."""
    return build_options_field()


@pytest.fixture
def write_schema(tmp_path: Path) -> Callable[[dict[str, Any]], Path]:
    """Write a schema definition dict as YAML and return its path."""

    def _write(definition: dict[str, Any]) -> Path:
        path = tmp_path / "schema.yaml"
        path.write_text(yaml.safe_dump(definition, sort_keys=False))
        return path

    return _write


@pytest.fixture
def sample_definition() -> dict[str, Any]:
    """Relational schema with one list holding one Options field."""
    return {
        "backend": "relational",
        "lists": {
            "Sample": {
                "fields": {
                    "colors": {
                        "type": "Options",
                        "options": list(COLORS),
                    },
                },
            },
        },
    }


@pytest.fixture
def make_options_field() -> Callable[..., Any]:
    """Factory fixture wrapping build_options_field."""
    return build_options_field
