"""Resolve schema fragments to type descriptors.

Handles:
- oneOf unions (null branches make the field nullable, last other branch wins)
- legacy type lists (["string", "null"])
- local $ref pointers into components.schemas
- arrays (items named in the singular)
- objects (registered as records)
- titled string enums (registered as enums)
- string formats (uri, email, date, date-time, uuid)
- domain overrides from overrides.py, consulted before the generic mapping
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from typing import Any

from . import overrides
from .enums import EnumRegistry
from .errors import (
    MissingItemsError,
    UnknownTypeError,
    UnresolvableTypeError,
    UnresolvableUnionError,
)
from .loader import ref_name, resolve_ref
from .models import (
    BOOLEAN,
    ENUM,
    INTEGER,
    LIST_OF,
    RECORD,
    STRING,
    STRING_FORMATS,
    GenerationResult,
    NamingContext,
    TypeDescriptor,
)
from .naming import make_object_name
from .records import RecordRegistry, register_object

logger = logging.getLogger(__name__)

# Fragment shapes, see classify()
UNION = "union"
REFERENCE = "reference"
SINGLE_TYPE = "single-type"
TYPE_LIST = "type-list"
UNTYPED = "untyped"

_PRIMITIVES: dict[str, str] = {
    "boolean": BOOLEAN,
    "integer": INTEGER,
}


def classify(node: Any) -> str:
    """Tell which of the fragment shapes a node has."""
    if not isinstance(node, dict):
        return UNTYPED
    if "oneOf" in node:
        return UNION
    if "$ref" in node:
        return REFERENCE
    schema_type = node.get("type")
    if isinstance(schema_type, str):
        return SINGLE_TYPE
    if isinstance(schema_type, list):
        return TYPE_LIST
    return UNTYPED


def titled_enum(node: Any, name: str) -> Any:
    """Give an untitled top-level string enum its schema name as title."""
    if (
        isinstance(node, dict)
        and node.get("type") == "string"
        and "enum" in node
        and not node.get("title")
    ):
        return {**node, "title": name}
    return node


class TypeResolver:
    """Walks schema fragments and collects the records and enums they define.

    One instance per document; it owns both registries.
    """

    def __init__(
        self,
        document: dict[str, Any] | None = None,
        enums: EnumRegistry | None = None,
        records: RecordRegistry | None = None,
    ) -> None:
        self.document = document or {}
        self.enums = enums if enums is not None else EnumRegistry()
        self.records = records if records is not None else RecordRegistry()
        # $ref pointers currently being resolved in place
        self._resolving: set[str] = set()

    def resolve(
        self,
        node: Any,
        name: str,
        enclosing_name: str,
        as_singular: bool = False,
        is_required: Callable[[str], bool] | None = None,
        namespace: str = "",
        origin: str = "",
    ) -> TypeDescriptor:
        """Resolve `node`, found under property `name` of `enclosing_name`."""
        ctx = NamingContext(
            property_name=name,
            enclosing_name=enclosing_name,
            namespace=namespace,
            as_singular=as_singular,
            origin=origin,
        )
        descriptor = self._resolve(node, ctx)
        return replace(descriptor, required=bool(is_required and is_required(name)))

    def resolve_schema(
        self,
        name: str,
        node: Any,
        namespace: str = "",
        origin: str = "",
    ) -> TypeDescriptor:
        """Resolve a named top-level schema."""
        return self.resolve(
            titled_enum(node, name),
            name,
            name,
            namespace=namespace,
            origin=origin or f"components.schemas.{name}",
        )

    def finish(self) -> GenerationResult:
        """Collect the output. Flushes the enum registry, so call once."""
        return GenerationResult(records=self.records.all(), enums=self.enums.flush_all())

    def object_name(self, ctx: NamingContext) -> str:
        name = make_object_name(ctx.property_name, ctx.as_singular)
        return overrides.rename_object(name, ctx.property_name, ctx.enclosing_name)

    # -- dispatch ---------------------------------------------------------

    def _resolve(self, node: Any, ctx: NamingContext) -> TypeDescriptor:
        shape = classify(node)
        if shape == UNION:
            return self._resolve_union(node, ctx)
        if shape == REFERENCE:
            return self._resolve_reference(node, ctx)
        if shape == SINGLE_TYPE:
            return self._resolve_type(node["type"], node, ctx, _declared_nullable(node))
        if shape == TYPE_LIST:
            return self._resolve_type_list(node, ctx)
        raise UnresolvableTypeError(
            "no type, oneOf or $ref", location=ctx.location, fragment=node,
        )

    def _resolve_union(self, node: dict[str, Any], ctx: NamingContext) -> TypeDescriptor:
        children = node["oneOf"]
        if not isinstance(children, list):
            raise UnresolvableUnionError("oneOf is not a list", location=ctx.location, fragment=node)

        nullable = _declared_nullable(node)
        chosen = None
        for child in children:
            if isinstance(child, dict) and child.get("type") == "null":
                nullable = True
                continue
            if classify(child) == UNTYPED:
                continue
            # later branches replace earlier ones
            chosen = child

        if chosen is None:
            raise UnresolvableUnionError(
                "oneOf has no non-null branch", location=ctx.location, fragment=node,
            )
        descriptor = self._resolve(chosen, ctx)
        return replace(descriptor, nullable=True) if nullable else descriptor

    def _resolve_reference(self, node: dict[str, Any], ctx: NamingContext) -> TypeDescriptor:
        ref = node["$ref"]
        target = resolve_ref(self.document, ref)
        name = ref_name(ref)
        record_name = overrides.alias(make_object_name(name))
        object_nullable = _object_nullable(target)
        owns_copy = overrides.is_excluded(record_name) or overrides.renames_object(
            ctx.property_name, ctx.enclosing_name,
        )

        if object_nullable is not None and not owns_copy:
            # registered by the components.schemas pass
            descriptor = TypeDescriptor(record_name, kind=RECORD, nullable=object_nullable)
        else:
            if ref in self._resolving:
                raise UnresolvableTypeError(
                    f"circular reference to {ref}", location=ctx.location, fragment=node,
                )
            self._resolving.add(ref)
            try:
                if object_nullable is not None:
                    # excluded or renamed by a name rule: the owner gets its own copy
                    descriptor = self._resolve(target, ctx)
                else:
                    target_ctx = NamingContext(property_name=name, enclosing_name=name, origin=ctx.origin)
                    descriptor = self._resolve(titled_enum(target, name), target_ctx)
            finally:
                self._resolving.discard(ref)

        if _declared_nullable(node):
            descriptor = replace(descriptor, nullable=True)
        return descriptor

    def _resolve_type_list(self, node: dict[str, Any], ctx: NamingContext) -> TypeDescriptor:
        nullable = _declared_nullable(node)
        chosen = None
        for entry in node["type"]:
            if entry == "null":
                nullable = True
                continue
            if isinstance(entry, str):
                chosen = entry

        if chosen is None:
            raise UnresolvableTypeError(
                "type list has no usable entry", location=ctx.location, fragment=node,
            )
        return self._resolve_type(chosen, node, ctx, nullable)

    def _resolve_type(
        self,
        type_name: str,
        node: dict[str, Any],
        ctx: NamingContext,
        nullable: bool,
    ) -> TypeDescriptor:
        if type_name == "array":
            descriptor = self._resolve_array(node, ctx)
        elif type_name == "object":
            descriptor = self._resolve_object(node, ctx)
        elif type_name == "string":
            descriptor = self._resolve_string(node, ctx)
        elif type_name in _PRIMITIVES:
            descriptor = TypeDescriptor(_PRIMITIVES[type_name])
        else:
            raise UnknownTypeError(
                f"unknown type {type_name!r}", location=ctx.location, fragment=node,
            )
        return replace(descriptor, nullable=True) if nullable else descriptor

    # -- concrete types ---------------------------------------------------

    def _resolve_array(self, node: dict[str, Any], ctx: NamingContext) -> TypeDescriptor:
        items = node.get("items")
        if items is None:
            raise MissingItemsError("array without items", location=ctx.location, fragment=node)

        item = self._resolve(items, replace(ctx, as_singular=True))
        if item.is_list:
            raise UnresolvableTypeError(
                "nested arrays are not supported", location=ctx.location, fragment=node,
            )
        return replace(item, wrapper=LIST_OF, nullable=False)

    def _resolve_object(self, node: dict[str, Any], ctx: NamingContext) -> TypeDescriptor:
        name = self.object_name(ctx)
        register_object(self, node, name, ctx.namespace, ctx.origin)
        return TypeDescriptor(name, kind=RECORD, namespace=ctx.namespace)

    def _resolve_string(self, node: dict[str, Any], ctx: NamingContext) -> TypeDescriptor:
        forced = overrides.forced_primitive(ctx.property_name, "string")
        if forced is not None:
            return TypeDescriptor(forced)

        title = node.get("title")
        options = node.get("enum")
        if title and options is not None:
            self.enums.register(str(title), options, node.get("description") or "")
            return TypeDescriptor(str(title), kind=ENUM)

        fmt = node.get("format")
        if fmt in STRING_FORMATS:
            return TypeDescriptor(STRING_FORMATS[fmt])
        return TypeDescriptor(STRING)


def _declared_nullable(node: dict[str, Any]) -> bool:
    return node.get("nullable") is True


def _object_nullable(node: Any) -> bool | None:
    """Nullability of an object schema, or None when `node` does not resolve to an object."""
    shape = classify(node)
    if shape == SINGLE_TYPE:
        return _declared_nullable(node) if node["type"] == "object" else None
    if shape == TYPE_LIST:
        entries = [e for e in node["type"] if isinstance(e, str) and e != "null"]
        if entries and entries[-1] == "object":
            return "null" in node["type"] or _declared_nullable(node)
        return None
    if shape == UNION and isinstance(node["oneOf"], list):
        nullable = _declared_nullable(node)
        chosen = None
        for child in node["oneOf"]:
            if isinstance(child, dict) and child.get("type") == "null":
                nullable = True
            elif classify(child) != UNTYPED:
                chosen = child
        inner = _object_nullable(chosen)
        return None if inner is None else inner or nullable
    return None
