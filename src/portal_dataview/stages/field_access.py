"""
Field Access - Dynamic Field Lookup on Arbitrary Records.

Records reach the pipeline as dicts (static JSON fixtures), pydantic
models or plain objects. Stages address fields either by name or by an
accessor callable; these helpers hide the difference.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Iterator, Mapping

from pydantic import BaseModel

from portal_dataview.domain.value_objects import FieldRef


def get_field(item: Any, field: FieldRef) -> Any:
    """
    Look up a field on a record.

    Args:
        item: Mapping, pydantic model or plain object
        field: Field name or accessor callable

    Returns:
        The field value, or None if the record has no such field
    """
    if callable(field):
        return field(item)
    if isinstance(item, Mapping):
        return item.get(field)
    return getattr(item, field, None)


def iter_string_values(item: Any) -> Iterator[str]:
    """Yield every string-valued field of a record. Other values are skipped."""
    for value in _field_values(item):
        if isinstance(value, str):
            yield value


def count_string_fields(item: Any) -> int:
    """Number of string-valued fields on a record."""
    return sum(1 for _ in iter_string_values(item))


def field_label(field: FieldRef) -> str:
    """Printable name for a field reference."""
    if callable(field):
        return getattr(field, "__name__", repr(field))
    return field


def _field_values(item: Any) -> Iterator[Any]:
    if isinstance(item, Mapping):
        yield from item.values()
    elif isinstance(item, BaseModel):
        for name in type(item).model_fields:
            yield getattr(item, name)
    elif dataclasses.is_dataclass(item) and not isinstance(item, type):
        for f in dataclasses.fields(item):
            yield getattr(item, f.name)
    else:
        yield from getattr(item, "__dict__", {}).values()
        for name in _slot_names(type(item)):
            if hasattr(item, name):
                yield getattr(item, name)


def _slot_names(cls: type) -> Iterator[str]:
    """Names declared in __slots__ anywhere in the class hierarchy."""
    for klass in cls.__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name not in ("__dict__", "__weakref__"):
                yield name
