"""Input helpers shared by the entity services."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from portfolio_cms.errors import ValidationError


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require_fields(data: Mapping[str, Any], *names: str) -> None:
    """Raise ValidationError naming the first missing or blank field."""
    for name in names:
        if is_blank(data.get(name)):
            raise ValidationError(f"{name} is required")


def pick_fields(
    data: Mapping[str, Any],
    fields: Iterable[str],
    *,
    flags: Iterable[str] = (),
) -> dict[str, Any]:
    """Return the changes an update request asks for.

    Missing, None and blank values are left out, so the stored value is kept.
    Boolean ``flags`` are always included and default to False.
    """
    changes = {name: data[name] for name in fields if not is_blank(data.get(name))}
    for name in flags:
        changes[name] = bool(data.get(name, False))
    return changes


def ordered_children(
    items: Sequence[Mapping[str, Any]] | None,
    value_field: str,
    *extra_fields: str,
) -> list[dict[str, Any]]:
    """Build child rows, keeping the given display order or falling back to position.

    Entries with a blank ``value_field`` are skipped.
    """
    rows: list[dict[str, Any]] = []
    for position, item in enumerate(items or ()):
        value = item.get(value_field)
        if is_blank(value):
            continue
        order = item.get("display_order")
        row = {value_field: value.strip(), "display_order": position if order is None else order}
        for name in extra_fields:
            row[name] = item.get(name)
        rows.append(row)
    return rows


def check_year_range(start: int | None, end: int | None) -> None:
    if start is not None and end is not None and end < start:
        raise ValidationError("end_year cannot be before start_year")


def check_display_order(value: int | None) -> None:
    if value is not None and value < 0:
        raise ValidationError("display_order must be non-negative")
