"""Per-field, per-record state: Pending until a value is bound.

A record starts with every field Pending (holding its Definition). Decoding
binds every field or fails; assignment binds a single field.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeAlias, TypeVar

if TYPE_CHECKING:
    from urlschema._definition import Definition


@dataclass(frozen=True, slots=True)
class Pending:
    """No concrete value yet."""

    definition: Definition


T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Bound(Generic[T]):
    """A concrete typed value is present."""

    value: T


FieldState: TypeAlias = Pending | Bound[Any]
