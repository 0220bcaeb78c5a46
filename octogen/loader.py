"""Load and parse an OCTO-style API document.

Reads YAML (or JSON) and extracts paths, operations and component schemas.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from .errors import SpecLoadError

SPEC_PATH = Path(__file__).parent.parent / "spec" / "openapi.yaml"

_YAML_SUFFIXES = {".yaml", ".yml"}


def load_spec(path: Path | str | None = None) -> dict[str, Any]:
    """Load the API document from disk."""
    spec_file = Path(path) if path is not None else SPEC_PATH
    if not spec_file.exists():
        raise SpecLoadError(f"API document not found: {spec_file}")

    text = spec_file.read_text(encoding="utf-8")
    try:
        if spec_file.suffix.lower() in _YAML_SUFFIXES:
            spec = yaml.safe_load(text)
        else:
            spec = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise SpecLoadError(f"Failed to parse {spec_file}: {exc}") from exc

    if not isinstance(spec, dict):
        raise SpecLoadError(f"Document root must be a mapping: {spec_file}")
    return spec


def get_paths(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract paths from the API document."""
    return spec.get("paths") or {}


def get_schemas(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract component schemas from the API document."""
    return (spec.get("components") or {}).get("schemas") or {}


def ref_name(ref: str) -> str:
    """Last segment of a $ref pointer: #/components/schemas/Booking -> Booking."""
    return ref.rsplit("/", 1)[-1]


def resolve_ref(spec: dict[str, Any], ref: str) -> dict[str, Any]:
    """Resolve a local $ref pointer in the API document."""
    if not ref.startswith("#/"):
        raise SpecLoadError(f"Only local references are supported: {ref}")
    node: Any = spec
    for part in ref[2:].split("/"):
        part = part.replace("~1", "/").replace("~0", "~")
        try:
            node = node[part]
        except (KeyError, TypeError) as exc:
            raise SpecLoadError(f"Unresolvable reference: {ref}") from exc
    return node
