"""Tests for the loader module."""

import json

import pytest

from octogen.errors import SpecLoadError
from octogen.loader import get_paths, get_schemas, load_spec, ref_name, resolve_ref

_SPEC: dict = {
    "components": {
        "schemas": {
            "Booking": {"type": "object"},
            "a/b": {"type": "string"},
        }
    },
    "paths": {"/bookings": {}},
}


class TestLoadSpec:
    def test_yaml(self, octo_spec):
        assert "Booking" in get_schemas(octo_spec)
        assert "/bookings" in get_paths(octo_spec)

    def test_json(self, tmp_path):
        path = tmp_path / "openapi.json"
        path.write_text(json.dumps(_SPEC), encoding="utf-8")
        assert load_spec(path) == _SPEC

    def test_missing_file(self, tmp_path):
        with pytest.raises(SpecLoadError):
            load_spec(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("components: [unclosed", encoding="utf-8")
        with pytest.raises(SpecLoadError):
            load_spec(path)

    def test_root_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(SpecLoadError):
            load_spec(path)


class TestAccessors:
    def test_empty_document(self):
        assert get_schemas({}) == {}
        assert get_paths({}) == {}

    def test_null_sections(self):
        assert get_schemas({"components": None}) == {}
        assert get_paths({"paths": None}) == {}


class TestResolveRef:
    def test_schema(self):
        assert resolve_ref(_SPEC, "#/components/schemas/Booking") == {"type": "object"}

    def test_escaped_slash(self):
        assert resolve_ref(_SPEC, "#/components/schemas/a~1b") == {"type": "string"}

    def test_missing(self):
        with pytest.raises(SpecLoadError):
            resolve_ref(_SPEC, "#/components/schemas/Nope")

    def test_external_rejected(self):
        with pytest.raises(SpecLoadError):
            resolve_ref(_SPEC, "other.yaml#/components/schemas/Booking")

    def test_ref_name(self):
        assert ref_name("#/components/schemas/Booking") == "Booking"
