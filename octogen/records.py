"""Turn object-shaped fragments into record definitions and keep them unique."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from . import overrides
from .errors import RecordCollisionError
from .models import FieldDefinition, RecordDefinition
from .naming import safe_field_name

if TYPE_CHECKING:
    from .resolver import TypeResolver

logger = logging.getLogger(__name__)


class RecordRegistry:
    """Records keyed by (namespace, name), in registration order.

    Re-registering the same shape is a no-op; a different shape under a taken
    name raises RecordCollisionError.
    """

    def __init__(self) -> None:
        self._records: dict[tuple[str, str], RecordDefinition] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, key: tuple[str, str]) -> bool:
        return key in self._records

    def get(self, name: str, namespace: str = "") -> RecordDefinition | None:
        return self._records.get((namespace, name))

    def register(self, record: RecordDefinition) -> RecordDefinition:
        if overrides.is_excluded(record.name):
            logger.debug("Skipping excluded record %s", record.name)
            return record

        key = (record.namespace, record.name)
        existing = self._records.get(key)
        if existing is None:
            self._records[key] = record
            logger.debug("Registered record %s (%d fields)", _qualified(record), len(record.fields))
            return record
        if existing.same_shape(record):
            return existing

        theirs = [f.wire_name for f in existing.fields]
        ours = [f.wire_name for f in record.fields]
        raise RecordCollisionError(
            f"record {_qualified(record)} already registered with a different shape"
            f" (fields {theirs} vs {ours})",
            location=_qualified(record),
        )

    def all(self) -> list[RecordDefinition]:
        return list(self._records.values())


def _qualified(record: RecordDefinition) -> str:
    return f"{record.namespace}.{record.name}" if record.namespace else record.name


def register_object(
    resolver: TypeResolver,
    node: dict[str, Any],
    name: str,
    namespace: str = "",
    origin: str = "",
) -> RecordDefinition:
    """Build the record for an object fragment and hand it to the registry."""
    properties = node.get("properties") or {}
    required = tuple(node.get("required") or ())
    required_set = set(required)

    fields: list[FieldDefinition] = []
    for prop_name, prop in properties.items():
        descriptor = resolver.resolve(
            prop,
            prop_name,
            name,
            is_required=required_set.__contains__,
            namespace=namespace,
            origin=origin,
        )
        doc = (prop.get("description") or "") if isinstance(prop, dict) else ""
        fields.append(FieldDefinition(
            name=safe_field_name(prop_name, name),
            type=descriptor,
            wire_name=prop_name,
            doc=doc,
        ))

    # convenience fields go after the declared ones
    taken = {f.wire_name for f in fields}
    for extra in overrides.extra_fields_for(name):
        if extra.name in taken:
            continue
        fields.append(FieldDefinition(
            name=safe_field_name(extra.name, name),
            type=extra.type,
            wire_name=extra.name,
            doc=extra.doc,
        ))

    record = RecordDefinition(
        name=name,
        fields=tuple(fields),
        description=node.get("description") or "",
        namespace=namespace,
        required=required,
    )
    return resolver.records.register(record)
