"""
Naming utilities for Swagger to TypeScript code generation.

All helpers are pure string functions. They follow the identifier rules of the
generated TypeScript code, so they only treat ASCII letters, digits and
underscores as identifier characters.
"""

import re
from typing import Any

_WORD_CHAR = re.compile(r"[A-Za-z0-9_]")
_ALNUM_CHAR = re.compile(r"[A-Za-z0-9]")
_NON_WORD = re.compile(r"[^A-Za-z0-9_]")
_UNDERSCORES = re.compile(r"_+")
_BARE_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def normalize_model_name(name: str) -> str:
    """Key used for model and service tables (case-insensitive lookup)."""
    return name.lower()


def to_file_name(type_name: str) -> str:
    """Convert a class name to a kebab-case file stem.

    Examples:
        "PetStore" -> "pet-store"
        "ApiModule" -> "api-module"
        "HTTPClient" -> "httpclient"
    """
    result = ""
    was_lower = False
    for c in type_name:
        is_lower = "a" <= c <= "z"
        if not is_lower and was_lower:
            result += "-"
        result += c.lower()
        was_lower = is_lower
    return result


def to_class_name(name: str) -> str:
    """Convert an arbitrary name to a valid class name.

    Characters that are not valid in identifiers are dropped and the following
    character is upper-cased. A leading digit is escaped with an underscore.

    Examples:
        "the-user" -> "TheUser"
        "pet store" -> "PetStore"
        "3d-model" -> "_3dModel"
    """
    result = ""
    up_next = False
    for c in name:
        if not _WORD_CHAR.match(c):
            up_next = True
        elif up_next:
            result += c.upper()
            up_next = False
        elif result == "":
            result = c.upper()
        else:
            result += c
    if result[:1].isdigit():
        result = "_" + result
    return result


def simple_ref(ref: str | None) -> str | None:
    """Resolve the class name from a qualified reference like "#/definitions/Pet"."""
    if not ref:
        return None
    return to_class_name(ref.rsplit("/", 1)[-1])


def to_enum_name(value) -> str:
    """Convert an enum value to a constant name.

    Examples:
        "available" -> "AVAILABLE"
        "inStock" -> "IN_STOCK"
        "on-hold" -> "ON_HOLD"
        "1st" -> "_1ST"
    """
    value = str(value)
    result = ""
    was_lower = False
    for c in value:
        is_lower = "a" <= c <= "z"
        if not is_lower and was_lower:
            result += "_"
        result += c.upper()
        was_lower = is_lower
    if value == "" or value[0].isdigit() or value[0].isspace():
        result = "_" + result
    result = _NON_WORD.sub("_", result)
    return _UNDERSCORES.sub("_", result)


def to_identifier(text: str) -> str:
    """Drop non-alphanumeric characters, upper-casing the character after each.

    Examples:
        "get/pets/{id}" -> "getPetsId"
        "pet_id" -> "petId"
    """
    result = ""
    was_sep = False
    for c in text:
        if _ALNUM_CHAR.match(c):
            if was_sep:
                c = c.upper()
                was_sep = False
            result += c
        else:
            was_sep = True
    return result


def tag_name(tag: Any, default_tag: str = "Api") -> str:
    """Normalize a tag name into the service name it produces."""
    if not tag:
        tag = default_tag or "Api"
    tag = to_identifier(str(tag))
    return tag[:1].upper() + tag[1:]


def to_property_identifier(name: str) -> str:
    """Quote a property name that is not usable as a bare identifier."""
    if _BARE_IDENTIFIER.match(name):
        return name
    return '"' + name.replace("\\", "\\\\").replace('"', '\\"') + '"'
