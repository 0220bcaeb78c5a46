"""Value types produced by the resolver.

Schema fragments themselves stay plain dicts from the document parser; only
the resolved output gets dedicated types.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# TypeDescriptor.kind
PRIMITIVE = "primitive"
RECORD = "record"
ENUM = "enum"

# TypeDescriptor.wrapper
LIST_OF = "list-of"

# Semantic primitive names, independent of the target language
STRING = "string"
BOOLEAN = "boolean"
INTEGER = "integer"
URI = "uri"
EMAIL = "email"
DATE = "date"
DATE_TIME = "date-time"
UUID = "uuid"

# string formats mapped to semantic primitives
STRING_FORMATS: dict[str, str] = {
    "uri": URI,
    "email": EMAIL,
    "date-time": DATE_TIME,
    "date": DATE,
    "uuid": UUID,
}


@dataclass(frozen=True)
class TypeDescriptor:
    """What type a field has: a primitive, a record or an enum, maybe in a list."""

    base_name: str
    kind: str = PRIMITIVE
    wrapper: str | None = None
    nullable: bool = False
    required: bool = False
    namespace: str = ""

    @property
    def is_list(self) -> bool:
        return self.wrapper == LIST_OF


@dataclass(frozen=True)
class FieldDefinition:
    name: str
    type: TypeDescriptor
    wire_name: str
    doc: str = ""

    @property
    def renamed(self) -> bool:
        return self.name != self.wire_name


@dataclass(frozen=True)
class RecordDefinition:
    """A named, fixed-shape aggregate of typed fields."""

    name: str
    fields: tuple[FieldDefinition, ...] = ()
    description: str = ""
    namespace: str = ""
    required: tuple[str, ...] = ()

    def same_shape(self, other: RecordDefinition) -> bool:
        """Compare field lists, ignoring documentation."""
        def shape(record: RecordDefinition) -> list[tuple]:
            return [(f.name, f.wire_name, f.type) for f in record.fields]
        return shape(self) == shape(other) and set(self.required) == set(other.required)


@dataclass(frozen=True)
class EnumDefinition:
    name: str
    options: tuple[str, ...] = ()
    description: str = ""


@dataclass(frozen=True)
class NamingContext:
    """Naming hints handed down one branch of the recursion."""

    property_name: str
    enclosing_name: str
    namespace: str = ""
    as_singular: bool = False
    origin: str = ""

    @property
    def location(self) -> str:
        where = f"{self.enclosing_name}.{self.property_name}" \
            if self.enclosing_name != self.property_name else self.property_name
        return f"{self.origin}: {where}" if self.origin else where


@dataclass
class GenerationResult:
    """Everything one resolution pass produced, in output order."""

    records: list[RecordDefinition] = field(default_factory=list)
    enums: list[EnumDefinition] = field(default_factory=list)
