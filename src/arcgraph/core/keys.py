"""
Identity key derivation for node values.

Nodes are identified by a string key derived from the value they wrap. Two
structurally-equal values always produce the same key, and values that can be
told apart (including by their type) produce different keys. The concrete type
is part of every key, so ``1``, ``1.0``, ``True`` and ``"1"`` are distinct nodes,
as are ``[1, 2]`` and ``(1, 2)``.

Values with no structural form of their own (plain instances, functions,
classes) are keyed by object identity. The graph keeps a reference to every
stored value, so such an identity cannot be reused while its node exists.
"""

import dataclasses
from collections import deque
from collections.abc import Mapping, Set as AbstractSet
from datetime import date, time, timedelta
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from pathlib import PurePath
from typing import Any, Callable, Dict, Iterator, Optional, Set
from uuid import UUID

KeyFunc = Callable[[Any], str]

NONE_KEY = "None"
CYCLE_MARKER = "<cycle>"

# Types whose repr is deterministic and faithful to the value
_REPR_TYPES = (
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    bytearray,
    Decimal,
    Fraction,
    date,
    time,
    timedelta,
    UUID,
    PurePath,
    range,
)

_SEQUENCE_TYPES = (list, tuple, deque)


def type_name(value: Any) -> str:
    """Return the qualified type name used as the prefix of a key."""
    cls = type(value)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def node_key(value: Any) -> str:
    """
    Derive the identity key of a node value.

    Args:
        value (Any): Any caller-supplied value, including None

    Returns:
        str: Key that is equal for structurally-equal values
    """
    return _encode(value, set())


def _encode(value: Any, active: Set[int]) -> str:
    if value is None:
        return NONE_KEY

    name = type_name(value)

    custom = getattr(type(value), "__node_key__", None)
    if custom is not None:
        return f"{name}<{custom(value)!r}>"

    # Enum check comes first: IntEnum and StrEnum members are also scalars
    if isinstance(value, Enum):
        return f"{name}.{value.name}"

    if isinstance(value, _REPR_TYPES):
        return f"{name}({value!r})"

    if id(value) in active:
        return f"{name}{CYCLE_MARKER}"

    active.add(id(value))
    try:
        return _encode_composite(value, name, active)
    finally:
        active.discard(id(value))


def _encode_composite(value: Any, name: str, active: Set[int]) -> str:
    if isinstance(value, _SEQUENCE_TYPES):
        items = ",".join(_encode(item, active) for item in value)
        return f"{name}[{items}]"

    if isinstance(value, Mapping):
        entries = sorted(
            (_encode(k, active), _encode(v, active)) for k, v in value.items()
        )
        body = ",".join(f"{k}:{v}" for k, v in entries)
        return f"{name}{{{body}}}"

    if isinstance(value, AbstractSet):
        items = ",".join(sorted(_encode(item, active) for item in value))
        return f"{name}{{{items}}}"

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        body = ",".join(
            f"{f.name}={_encode(getattr(value, f.name), active)}"
            for f in dataclasses.fields(value)
        )
        return f"{name}({body})"

    state = _instance_state(value) if _has_structural_eq(value) else None
    if state is not None:
        body = ",".join(f"{attr}={_encode(state[attr], active)}" for attr in sorted(state))
        return f"{name}({body})"

    return f"{name}@{id(value):#x}"


def _has_structural_eq(value: Any) -> bool:
    """Check whether a value's type overrides equality."""
    cls = type(value)
    return not isinstance(value, type) and cls.__eq__ is not object.__eq__


def _slot_names(cls: type) -> Iterator[str]:
    """Yield the attribute names of the slots declared along the MRO of ``cls``."""
    for klass in cls.__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if slot in ("__dict__", "__weakref__"):
                continue
            if slot.startswith("__") and not slot.endswith("__"):
                slot = f"_{klass.__name__.lstrip('_')}{slot}"
            yield slot


def _instance_state(value: Any) -> Optional[Dict[str, Any]]:
    """
    Collect the instance attributes of ``value`` from its __dict__ and slots.

    Returns None when the value has neither, so it has no state to key on.
    Unset slots are left out.
    """
    has_dict = hasattr(value, "__dict__")
    state: Dict[str, Any] = dict(vars(value)) if has_dict else {}
    slot_names = list(_slot_names(type(value)))
    if not has_dict and not slot_names:
        return None
    for slot in slot_names:
        try:
            state[slot] = getattr(value, slot)
        except AttributeError:
            continue
    return state
