"""Editing of user-entered actuals and horizon stepping.

The override map handed to the engine is owned by the caller. ``ActualsBook``
produces a new map on every edit and drops months left with no values, so
an empty month never lingers in storage.
"""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import ValidationError

from brokersim.core.exceptions import InputLoadError, InvalidParameterError
from brokersim.core.logging import get_logger
from brokersim.core.settings import get_settings
from brokersim.domain.models.results import MonthlyActuals

log = get_logger(__name__)


def _field_name(field: str) -> str:
    """Accept snake_case or the stored camelCase name of an actuals field."""
    if field in MonthlyActuals.model_fields:
        return field
    for name, info in MonthlyActuals.model_fields.items():
        if info.alias == field:
            return name
    raise InvalidParameterError("field", field, "not an overridable monthly value")


class ActualsBook:
    """Immutable map of month -> MonthlyActuals."""

    def __init__(self, entries: Mapping[int, MonthlyActuals] | None = None):
        self._entries: dict[int, MonthlyActuals] = {
            int(m): a for m, a in (entries or {}).items() if not a.is_empty
        }

    @classmethod
    def from_records(cls, records: Mapping[Any, Mapping[str, Any]] | None) -> ActualsBook:
        """Rehydrate stored overrides; month keys may be strings."""
        entries: dict[int, MonthlyActuals] = {}
        for month, record in (records or {}).items():
            try:
                month_number = int(month)
            except (TypeError, ValueError) as e:
                raise InvalidParameterError("month", month, "expected an integer month") from e
            try:
                entries[month_number] = MonthlyActuals.model_validate(dict(record))
            except ValidationError as e:
                raise InputLoadError(
                    f"Invalid actuals record for month {month}: {e.error_count()} error(s)",
                    errors=e.errors(include_url=False),
                ) from e
        return cls(entries)

    def to_records(self) -> dict[str, dict[str, Any]]:
        """Dump with string month keys and camelCase field names."""
        return {
            str(month): actual.model_dump(by_alias=True, exclude_none=True)
            for month, actual in sorted(self._entries.items())
        }

    def set_value(self, month: int, field: str, value: float | None) -> ActualsBook:
        """Return a new book with ``field`` of ``month`` set (or cleared by None)."""
        if month < 1:
            raise InvalidParameterError("month", month, "months are 1-based")
        name = _field_name(field)

        current = self._entries.get(month, MonthlyActuals())
        try:
            updated = MonthlyActuals.model_validate({**current.model_dump(), name: value})
        except ValidationError as e:
            raise InvalidParameterError(name, value, "expected a number or None") from e

        entries = dict(self._entries)
        if updated.is_empty:
            entries.pop(month, None)
            log.debug("actuals_month_cleared", month=month)
        else:
            entries[month] = updated
            log.debug("actuals_value_set", month=month, field=name, value=value)
        return ActualsBook(entries)

    def get(self, month: int) -> MonthlyActuals | None:
        return self._entries.get(month)

    def as_overrides(self) -> dict[int, MonthlyActuals]:
        """Override map in the shape ``SimulationEngine.calculate`` takes."""
        return dict(self._entries)

    def months(self) -> list[int]:
        return sorted(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, month: object) -> bool:
        return month in self._entries

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ActualsBook):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"ActualsBook(months={self.months()})"


def extend_duration(duration_months: int, step: int | None = None) -> int:
    """Add one step to the horizon, capped at the configured maximum."""
    settings = get_settings()
    if step is None:
        step = settings.duration_step_months
    return min(duration_months + step, settings.max_duration_months)


def shrink_duration(duration_months: int, step: int | None = None) -> int:
    """Remove one step from the horizon, never going below one step."""
    if step is None:
        step = get_settings().duration_step_months
    return duration_months - step if duration_months > step else step
