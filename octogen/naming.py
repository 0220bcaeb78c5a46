"""Turn schema, property and path names into target type identifiers.

Pattern: capitalized property name, singular when it names array items.
  - units (array items)       -> Unit
  - unitItems (array items)   -> UnitItem
  - openingHours (array items) -> OpeningHours (never singularized)
  - contact                   -> Contact

Request bodies are named from method + path:
  POST  /bookings/{uuid}/confirm -> PostBookingsUuidConfirm
  PATCH /bookings/{uuid}         -> PatchBookingsUuid
"""

from __future__ import annotations

import re

# Irregular plurals seen in OCTO-style documents
_SINGULARS: dict[str, str] = {
    "responses": "response",
    "statuses": "status",
    "children": "child",
    "people": "person",
}

# Capitalized names that read as plural but denote a single shape
NO_SINGULAR_NAMES: frozenset[str] = frozenset({"OpeningHours"})

# Java reserved words; properties with these names are renamed
RESERVED_WORDS: frozenset[str] = frozenset({
    "abstract", "assert", "boolean", "break", "byte", "case", "catch", "char",
    "class", "const", "continue", "default", "do", "double", "else", "enum",
    "extends", "final", "finally", "float", "for", "goto", "if", "implements",
    "import", "instanceof", "int", "interface", "long", "native", "new",
    "package", "private", "protected", "public", "return", "short", "static",
    "strictfp", "super", "switch", "synchronized", "this", "throw", "throws",
    "transient", "try", "void", "volatile", "while", "true", "false", "null",
})


def capitalize(name: str) -> str:
    """Upper-case the first character, leaving the rest untouched."""
    return name[:1].upper() + name[1:]


def singularize(word: str) -> str:
    """Return the singular form of a (possibly camelCase) plural word."""
    lowered = word.lower()
    for plural, singular in _SINGULARS.items():
        if lowered.endswith(plural):
            # keep the case of the suffix's first letter: BookingResponses -> BookingResponse
            tail = word[len(word) - len(plural):]
            return word[: len(word) - len(plural)] + tail[0] + singular[1:]
    if word.endswith("ies"):
        return word[:-3] + "y"
    if word.endswith("sses"):
        return word[:-2]
    if word.endswith(("ss", "us")):
        return word
    if word.endswith("s"):
        return word[:-1]
    return word


def make_object_name(name: str, as_singular: bool = False) -> str:
    """Build a type name from a property or schema name."""
    result = capitalize(name)
    if not as_singular or result in NO_SINGULAR_NAMES:
        return result
    return singularize(result)


def safe_field_name(name: str, record_name: str) -> str:
    """Rename properties that collide with reserved words: default -> defaultOption."""
    if name in RESERVED_WORDS:
        return name + capitalize(record_name)
    return name


def request_body_name(path: str, method: str) -> str:
    """Build a type name from an HTTP method and path template.

    '/' and '{' start a new segment, '}' is dropped.
    """
    segments = re.split(r"[/{]", path.replace("}", ""))
    return method.capitalize() + "".join(capitalize(s) for s in segments if s)
