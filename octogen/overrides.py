"""Domain naming and typing rules for OCTO documents.

These are business rules, kept as data. The resolver consults them before
its generic dispatch, so an entry here always beats the default mapping.
"""

from __future__ import annotations

from dataclasses import dataclass

from . import models
from .models import TypeDescriptor
from .naming import capitalize

ANY = "*"


@dataclass(frozen=True)
class NameRule:
    """Rename an object found under `field` inside `enclosing`.

    `target` may use {enclosing}.
    """

    field: str
    target: str
    enclosing: str = ANY
    shape: str = "object"

    def matches(self, field: str, enclosing: str, shape: str) -> bool:
        return (
            self.field == field
            and self.shape == shape
            and self.enclosing in (ANY, enclosing)
        )

    def apply(self, enclosing: str) -> str:
        return self.target.format(enclosing=capitalize(enclosing))


@dataclass(frozen=True)
class PrimitiveRule:
    """Force a primitive type for a string property, whatever its format."""

    fields: frozenset[str]
    primitive: str
    shape: str = "string"

    def matches(self, field: str, shape: str) -> bool:
        return shape == self.shape and field in self.fields


@dataclass(frozen=True)
class ExtraField:
    """A convenience field appended to specific records after their properties."""

    records: frozenset[str]
    name: str
    type: TypeDescriptor
    doc: str


NAME_RULES: tuple[NameRule, ...] = (
    # the shared Restrictions object is never emitted; every owner gets its own
    NameRule(field="restrictions", target="{enclosing}Restrictions"),
    # a booking carries a cut-down availability, not the full Availability schema
    NameRule(field="availability", enclosing="Booking", target="BookingAvailability"),
    NameRule(field="contact", enclosing="Supplier", target="SupplierContact"),
)

# resolved object name -> name actually emitted
TYPE_ALIASES: dict[str, str] = {
    "Voucher": "Ticket",
}

# discovered and walked, never emitted
EXCLUDED_RECORDS: frozenset[str] = frozenset({"Restrictions"})

TIMESTAMP_FIELDS: frozenset[str] = frozenset({
    "utcCreatedAt",
    "utcUpdatedAt",
    "utcDeletedAt",
    "utcExpiresAt",
    "utcRedeemedAt",
    "utcConfirmedAt",
    "utcCutoffAt",
    "localDateTimeStart",
    "localDateTimeEnd",
})

PRIMITIVE_RULES: tuple[PrimitiveRule, ...] = (
    PrimitiveRule(fields=frozenset({"uuid"}), primitive=models.UUID),
    PrimitiveRule(fields=TIMESTAMP_FIELDS, primitive=models.DATE_TIME),
)

EXTRA_FIELDS: tuple[ExtraField, ...] = (
    ExtraField(
        records=frozenset({"AvailabilityRequest", "PostAvailability", "PostAvailabilityCalendar"}),
        name="localDate",
        type=TypeDescriptor(models.DATE, nullable=True),
        doc="Shorthand for setting localDateStart and localDateEnd to the same date.",
    ),
)


def rename_object(name: str, field: str, enclosing: str) -> str:
    """Apply the first matching name rule, then any alias."""
    for rule in NAME_RULES:
        if rule.matches(field, enclosing, "object"):
            name = rule.apply(enclosing)
            break
    return alias(name)


def renames_object(field: str, enclosing: str) -> bool:
    return any(rule.matches(field, enclosing, "object") for rule in NAME_RULES)


def alias(name: str) -> str:
    return TYPE_ALIASES.get(name, name)


def forced_primitive(field: str, shape: str) -> str | None:
    for rule in PRIMITIVE_RULES:
        if rule.matches(field, shape):
            return rule.primitive
    return None


def extra_fields_for(record_name: str) -> list[ExtraField]:
    return [extra for extra in EXTRA_FIELDS if record_name in extra.records]


def is_excluded(record_name: str) -> bool:
    return record_name in EXCLUDED_RECORDS
