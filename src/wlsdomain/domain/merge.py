"""Absorb-missing merge primitives.

Every merge here takes a *specific* value and a *general* value and
returns the specific value with its gaps filled from the general one.
A value the specific side declared is never replaced. Inputs are never
mutated; collections in the result are always fresh.

Shapes:
  - scalar:      specific if declared (not None), else general
  - keyed list:  union by ``name``, specific entries first and whole
  - map:         union by key, specific pairs win
  - unique list: order-preserving distinct union (capability names)
  - record:      field-by-field, using a per-field merger table
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any, Protocol, TypeVar

from pydantic import BaseModel

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

Merger = Callable[[Any, Any], Any]


class Named(Protocol):
    name: str


N = TypeVar("N", bound=Named)


def merge_scalar(specific: T | None, general: T | None) -> T | None:
    """Keep *specific* unless it was left unset."""
    return general if specific is None else specific


def merge_keyed_list(specific: Iterable[N] | None, general: Iterable[N] | None) -> list[N]:
    """Union two name-keyed lists.

    The result holds all of *specific* in its original order, followed by
    the entries of *general* whose name is not already present, in
    *general*'s order. Entries are never merged with each other.
    """
    result = list(specific or ())
    seen = {entry.name for entry in result}
    for entry in general or ():
        if entry.name not in seen:
            result.append(entry)
            seen.add(entry.name)
    return result


def merge_map(
    specific: Mapping[str, T] | None,
    general: Mapping[str, T] | None,
) -> dict[str, T]:
    """Union two maps; keys present in *specific* keep their value."""
    result = dict(specific or {})
    for key, value in (general or {}).items():
        result.setdefault(key, value)
    return result


def merge_unique(specific: list[T] | None, general: list[T] | None) -> list[T] | None:
    """Distinct union of two lists, *specific* order first.

    ``None`` on one side adopts the other side; ``None`` on both stays
    ``None`` so "not declared" survives the merge.
    """
    if specific is None and general is None:
        return None
    result: list[T] = []
    for item in [*(specific or ()), *(general or ())]:
        if item not in result:
            result.append(item)
    return result


def absorb(
    specific: M,
    general: M | None,
    mergers: Mapping[str, Merger] | None = None,
) -> M:
    """Fill the unset fields of a record from a more general record.

    Fields named in *mergers* use that merger; every other field uses
    :func:`merge_scalar`. Extra (undeclared) keys on *specific* are kept.
    A missing *general* still yields a fresh copy of *specific*.
    """
    mergers = mergers or {}
    updates: dict[str, Any] = {}
    for field_name in type(specific).model_fields:
        merger = mergers.get(field_name, merge_scalar)
        fallback = None if general is None else getattr(general, field_name)
        updates[field_name] = merger(getattr(specific, field_name), fallback)
    return specific.model_copy(update=updates)


def absorb_with(mergers: Mapping[str, Merger]) -> Merger:
    """Build a nested-record merger from a merger table."""

    def merge(specific: Any, general: Any) -> Any:
        if specific is None:
            return None if general is None else absorb(general, None, mergers)
        return absorb(specific, general, mergers)

    return merge
