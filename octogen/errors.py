"""Errors raised while loading or resolving an API document.

Every failure aborts the run; none of them is retried.
"""

from __future__ import annotations

import json
from typing import Any


def _describe(fragment: Any) -> str:
    try:
        text = json.dumps(fragment, sort_keys=True, default=str)
    except (TypeError, ValueError):
        text = repr(fragment)
    return text if len(text) <= 200 else text[:197] + "..."


class GeneratorError(Exception):
    """Base class for failures that point at a spot in the source document."""

    def __init__(self, message: str, *, location: str = "", fragment: Any = None) -> None:
        self.location = location
        self.fragment = fragment
        text = f"{location}: {message}" if location else message
        if fragment is not None:
            text = f"{text} {_describe(fragment)}"
        super().__init__(text)


class SpecLoadError(GeneratorError):
    """The document could not be read or is not a mapping."""


class UnresolvableTypeError(GeneratorError):
    """A fragment carries no usable type information."""


class UnknownTypeError(UnresolvableTypeError):
    """A fragment names a type the resolver does not map."""


class UnresolvableUnionError(GeneratorError):
    """Every oneOf branch is null-typed or carries no type."""


class MissingItemsError(GeneratorError):
    """An array fragment has no items schema."""


class MissingRequestBodyError(GeneratorError):
    """An operation declares a request body without a JSON schema."""


class RecordCollisionError(GeneratorError):
    """Two different shapes resolved to the same record name."""
