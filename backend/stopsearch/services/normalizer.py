"""Normalize raw data.police.uk records into the canonical schema."""

import re
from collections.abc import Mapping
from typing import Any

from stopsearch.schemas.stop_search import (
    NOT_SPECIFIED,
    Location,
    OutcomeObject,
    StopSearchRecord,
    Street,
)

_SNAKE_SEGMENT = re.compile(r"_([a-z])")


def snake_to_camel(key: str) -> str:
    """Convert ``outcome_object`` to ``outcomeObject`` in a single pass."""
    return _SNAKE_SEGMENT.sub(lambda m: m.group(1).upper(), key)


def _lookup(record: Mapping[str, Any], key: str) -> Any:
    """Return the first truthy value under the snake_case or camelCase key."""
    return record.get(key) or record.get(snake_to_camel(key))


def _get_string(record: Mapping[str, Any], key: str, fallback: str = NOT_SPECIFIED) -> str:
    value = _lookup(record, key)
    return str(value) if value else fallback


def _get_bool(record: Mapping[str, Any], key: str) -> bool:
    # Any truthy value counts, "Yes" and 1 included.
    return bool(_lookup(record, key))


def _get_nullable_string(record: Mapping[str, Any], key: str) -> str | None:
    value = _lookup(record, key)
    return str(value) if value else None


def _get_nullable_bool(record: Mapping[str, Any], key: str) -> bool | None:
    # Falsy values, False included, read as unknown.
    return True if _lookup(record, key) else None


def _to_int(value: Any) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0


def _parse_outcome_object(record: Mapping[str, Any]) -> OutcomeObject:
    # The API nests outcome_object; flat dotted keys are only a fallback.
    nested = _lookup(record, "outcome_object")
    if not isinstance(nested, Mapping):
        nested = {}

    outcome_id = nested.get("id") or _lookup(record, "outcome_object.id")
    name = nested.get("name") or _lookup(record, "outcome_object.name")

    return OutcomeObject(
        id=str(outcome_id) if outcome_id else "",
        name=str(name) if name else NOT_SPECIFIED,
    )


def _parse_location(record: Mapping[str, Any]) -> Location | None:
    location = record.get("location")
    if not location or not isinstance(location, Mapping):
        return None

    street = location.get("street")
    if isinstance(street, Mapping):
        parsed_street = Street(
            id=_to_int(street.get("id")),
            name=str(street.get("name") or NOT_SPECIFIED),
        )
    else:
        parsed_street = Street()

    return Location(
        latitude=str(location.get("latitude") or ""),
        longitude=str(location.get("longitude") or ""),
        street=parsed_street,
    )


def normalize_record(record: Mapping[str, Any]) -> StopSearchRecord:
    """
    Convert one raw API record into a fully populated StopSearchRecord.

    Never raises. Keys are looked up as snake_case first, then camelCase.
    Missing or falsy values fall back to "Not specified", False or None
    depending on the field.
    """
    if not isinstance(record, Mapping):
        record = {}

    return StopSearchRecord(
        age_range=_get_string(record, "age_range"),
        outcome=_get_string(record, "outcome"),
        involved_person=_get_bool(record, "involved_person"),
        self_defined_ethnicity=_get_string(record, "self_defined_ethnicity"),
        gender=_get_string(record, "gender"),
        legislation=_get_nullable_string(record, "legislation"),
        outcome_linked_to_object_of_search=_get_nullable_bool(
            record, "outcome_linked_to_object_of_search"
        ),
        datetime=_get_string(record, "datetime"),
        removal_of_more_than_outer_clothing=_get_bool(
            record, "removal_of_more_than_outer_clothing"
        ),
        outcome_object=_parse_outcome_object(record),
        location=_parse_location(record),
        operation=_get_nullable_string(record, "operation"),
        officer_defined_ethnicity=_get_nullable_string(record, "officer_defined_ethnicity"),
        type=_get_string(record, "type"),
        operation_name=_get_nullable_string(record, "operation_name"),
        object_of_search=_get_string(record, "object_of_search"),
    )


def is_well_formed(record: Any) -> bool:
    """A raw record is usable when it is a mapping with datetime and outcome keys."""
    return isinstance(record, Mapping) and "datetime" in record and "outcome" in record
