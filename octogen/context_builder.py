"""Build Jinja2 template context from a parsed API document.

Runs the resolver over every component schema and every inline request body,
then maps the resulting definitions to Java: type names, imports, packages,
Jackson annotations and the file each type is written to.
"""

from __future__ import annotations

import re
from pathlib import PurePosixPath
from typing import Any

from .config import REQUEST_NAMESPACE, GeneratorSettings
from .errors import RecordCollisionError
from .loader import get_paths, get_schemas
from .models import (
    BOOLEAN,
    DATE,
    DATE_TIME,
    EMAIL,
    INTEGER,
    PRIMITIVE,
    RECORD,
    STRING,
    URI,
    UUID,
    EnumDefinition,
    FieldDefinition,
    GenerationResult,
    RecordDefinition,
    TypeDescriptor,
)
from .naming import RESERVED_WORDS
from .request_bodies import synthesize_request_bodies
from .resolver import TypeResolver

# semantic primitive -> (Java type, import)
_JAVA_PRIMITIVES: dict[str, tuple[str, str | None]] = {
    STRING: ("String", None),
    BOOLEAN: ("Boolean", None),
    INTEGER: ("Integer", None),
    URI: ("URI", "java.net.URI"),
    EMAIL: ("String", None),
    DATE: ("LocalDate", "java.time.LocalDate"),
    DATE_TIME: ("OffsetDateTime", "java.time.OffsetDateTime"),
    UUID: ("UUID", "java.util.UUID"),
}

LIST_IMPORT = "java.util.ArrayList"
JSON_PROPERTY_IMPORT = "com.fasterxml.jackson.annotation.JsonProperty"


def resolve_document(
    spec: dict[str, Any],
    request_namespace: str = REQUEST_NAMESPACE,
) -> GenerationResult:
    """Resolve component schemas, then inline request bodies, in document order."""
    resolver = TypeResolver(spec)
    for name, schema in get_schemas(spec).items():
        resolver.resolve_schema(name, schema)
    synthesize_request_bodies(resolver, get_paths(spec), request_namespace)
    return resolver.finish()


def _one_line(text: str) -> str:
    """Collapse whitespace and keep the text from closing a Javadoc comment."""
    text = re.sub(r"\s+", " ", text or "").strip()
    return text.replace("*/", "*&#47;")


def java_type(
    descriptor: TypeDescriptor,
    settings: GeneratorSettings,
    namespace: str = "",
) -> tuple[str, set[str]]:
    """Java type for a descriptor used from `namespace`, plus the imports it needs."""
    imports: set[str] = set()
    if descriptor.kind == PRIMITIVE:
        type_name, type_import = _JAVA_PRIMITIVES[descriptor.base_name]
        if type_import:
            imports.add(type_import)
    else:
        type_name = descriptor.base_name
        # enums are always generated into the base package
        target = descriptor.namespace if descriptor.kind == RECORD else ""
        if target != namespace:
            imports.add(f"{settings.package_for(target)}.{type_name}")

    if descriptor.is_list:
        imports.add(LIST_IMPORT)
        type_name = f"ArrayList<{type_name}>"
    return type_name, imports


def json_property(field: FieldDefinition) -> str | None:
    """Jackson annotation keeping the wire name and required flag, if either matters."""
    required = field.type.required
    if field.renamed and required:
        return f'@JsonProperty(value = "{field.wire_name}", required = true)'
    if field.renamed:
        return f'@JsonProperty("{field.wire_name}")'
    if required:
        return "@JsonProperty(required = true)"
    return None


def enum_constant(value: str) -> str:
    """Java identifier for an enum option: en-GB -> en_GB."""
    name = re.sub(r"\W", "_", value)
    if not name or name[0].isdigit():
        name = "_" + name
    if name in RESERVED_WORDS:
        name += "_"
    return name


def file_path(name: str, namespace: str = "") -> str:
    """Output path of a type, relative to the output directory."""
    parts = [p for p in namespace.split(".") if p]
    return str(PurePosixPath(*parts, f"{name}.java"))


def record_context(record: RecordDefinition, settings: GeneratorSettings) -> dict[str, Any]:
    imports: set[str] = set()
    fields = []
    for field in record.fields:
        type_name, field_imports = java_type(field.type, settings, record.namespace)
        imports |= field_imports
        annotation = json_property(field)
        if annotation:
            imports.add(JSON_PROPERTY_IMPORT)
        declaration = f"{type_name} {field.name}"
        fields.append({
            "name": field.name,
            "wire_name": field.wire_name,
            "type": type_name,
            "annotation": annotation,
            "declaration": f"{annotation} {declaration}" if annotation else declaration,
            "doc": _one_line(field.doc),
            "nullable": field.type.nullable,
            "required": field.type.required,
        })

    return {
        "name": record.name,
        "package": settings.package_for(record.namespace),
        "path": file_path(record.name, record.namespace),
        "description": _one_line(record.description) or f"{record.name} (auto-generated)",
        "imports": sorted(imports),
        "fields": fields,
    }


def enum_context(enum: EnumDefinition, settings: GeneratorSettings) -> dict[str, Any]:
    options = []
    seen: dict[str, str] = {}
    for value in enum.options:
        constant = enum_constant(value)
        if constant in seen:
            raise RecordCollisionError(
                f"options {seen[constant]!r} and {value!r} both map to constant {constant}",
                location=enum.name,
                fragment=list(enum.options),
            )
        seen[constant] = value
        declaration = constant if constant == value else f'@JsonProperty("{value}") {constant}'
        options.append({"value": _one_line(value), "constant": constant, "declaration": declaration})

    return {
        "name": enum.name,
        "package": settings.package_for(""),
        "path": file_path(enum.name),
        "description": _one_line(enum.description) or f"{enum.name} (auto-generated)",
        "needs_json_property": any(o["constant"] != o["value"] for o in options),
        "options": options,
    }


def _check_unique_paths(types: list[dict[str, Any]]) -> None:
    """A record and an enum must not share an output file."""
    seen: set[str] = set()
    for type_context in types:
        path = type_context["path"]
        if path in seen:
            raise RecordCollisionError(
                f"two generated types would be written to {path}",
                location=type_context["name"],
            )
        seen.add(path)


def build_context(
    spec: dict[str, Any],
    settings: GeneratorSettings | None = None,
) -> dict[str, Any]:
    """Build the full template context from the API document."""
    settings = settings or GeneratorSettings()
    result = resolve_document(spec, settings.request_namespace)

    records = [record_context(r, settings) for r in result.records]
    enums = [enum_context(e, settings) for e in result.enums]
    _check_unique_paths(records + enums)
    info = spec.get("info") or {}

    return {
        "records": records,
        "enums": enums,
        "record_count": len(records),
        "enum_count": len(enums),
        "file_count": len(records) + len(enums),
        "api_title": info.get("title", "unknown"),
        "api_version": info.get("version", "unknown"),
    }
