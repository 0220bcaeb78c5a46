"""Shared fixtures for octogen tests.

The sample document in fixtures/octo.yaml carries one instance of every
naming and typing rule.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from octogen.loader import load_spec
from octogen.resolver import TypeResolver

FIXTURE_SPEC = Path(__file__).parent / "fixtures" / "octo.yaml"


@pytest.fixture(scope="session")
def octo_spec() -> dict[str, Any]:
    """The sample OCTO document, parsed once."""
    return load_spec(FIXTURE_SPEC)


@pytest.fixture
def resolver() -> TypeResolver:
    """A fresh resolver with empty registries and no document."""
    return TypeResolver()
