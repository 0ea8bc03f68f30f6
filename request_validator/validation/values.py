"""
JSON value classification and rendering helpers.

Request bodies are decoded with the standard ``json`` module, which yields plain
Python containers. This module tags each decoded value with a ``JSONKind`` so the
traversal engine can dispatch on an explicit variant instead of ad hoc
``isinstance`` chains, and renders values to the text form used by the field
validators and by error messages.
"""

import json
from enum import Enum
from typing import Any


class JSONKind(Enum):
    """Variant tag for a decoded JSON value."""

    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


def json_kind(value: Any) -> JSONKind:
    """
    Classify a decoded JSON value.

    ``bool`` is checked before numbers because it subclasses ``int``.

    Raises:
        TypeError: If the value is not something ``json.loads`` can produce
    """
    if value is None:
        return JSONKind.NULL
    if isinstance(value, bool):
        return JSONKind.BOOLEAN
    if isinstance(value, (int, float)):
        return JSONKind.NUMBER
    if isinstance(value, str):
        return JSONKind.STRING
    if isinstance(value, dict):
        return JSONKind.OBJECT
    if isinstance(value, (list, tuple)):
        return JSONKind.ARRAY
    raise TypeError(f"Unsupported JSON value type: {type(value).__name__}")


def render_value(value: Any) -> str:
    """
    Render a JSON value to its default text form.

    Strings are returned untouched. Integral floats drop their fractional part
    (``12345.0`` renders as ``12345``), booleans and null use their JSON
    spelling and containers are rendered as compact JSON.
    """
    kind = json_kind(value)

    if kind is JSONKind.STRING:
        return value
    if kind is JSONKind.BOOLEAN:
        return 'true' if value else 'false'
    if kind is JSONKind.NULL:
        return 'null'
    if kind is JSONKind.NUMBER:
        if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return str(value)

    return _render_container(value)


def _render_scalar(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def _render_container(value: Any) -> str:
    """
    Render an object or array as compact JSON without recursing.

    Output matches ``json.dumps(value, separators=(',', ':'), ensure_ascii=False)``
    for any nesting depth. Stack entries are ``(is_text, item)``: text is
    emitted as is, anything else is expanded or rendered as a scalar.
    """
    parts = []
    stack = [(False, value)]

    while stack:
        is_text, item = stack.pop()
        if is_text:
            parts.append(item)
            continue

        kind = json_kind(item)
        if kind is JSONKind.OBJECT:
            pending = [(True, '{')]
            for index, (key, member) in enumerate(item.items()):
                if index:
                    pending.append((True, ','))
                pending.append((True, _render_scalar(str(key)) + ':'))
                pending.append((False, member))
            pending.append((True, '}'))
            stack.extend(reversed(pending))
        elif kind is JSONKind.ARRAY:
            pending = [(True, '[')]
            for index, element in enumerate(item):
                if index:
                    pending.append((True, ','))
                pending.append((False, element))
            pending.append((True, ']'))
            stack.extend(reversed(pending))
        else:
            parts.append(_render_scalar(item))

    return ''.join(parts)
