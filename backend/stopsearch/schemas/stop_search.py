"""Pydantic schemas for stop and search records."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

NOT_SPECIFIED = "Not specified"


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Street(CamelModel):
    """Street the search was recorded against."""

    model_config = ConfigDict(frozen=True)

    id: int = 0
    name: str = NOT_SPECIFIED


class Location(CamelModel):
    """Approximate location of a stop and search."""

    model_config = ConfigDict(frozen=True)

    latitude: str = ""
    longitude: str = ""
    street: Street = Street()


class OutcomeObject(CamelModel):
    """Reference object for the search outcome."""

    model_config = ConfigDict(frozen=True)

    id: str = ""
    name: str = NOT_SPECIFIED


class StopSearchRecord(CamelModel):
    """Canonical stop and search record.

    Every field is populated after normalization. Only ``legislation``,
    ``outcome_linked_to_object_of_search``, ``location``, ``operation``,
    ``officer_defined_ethnicity`` and ``operation_name`` may be None, and None
    there means "not provided" rather than empty.
    """

    model_config = ConfigDict(frozen=True)

    age_range: str = NOT_SPECIFIED
    outcome: str = NOT_SPECIFIED
    involved_person: bool = False
    self_defined_ethnicity: str = NOT_SPECIFIED
    gender: str = NOT_SPECIFIED
    legislation: str | None = None
    outcome_linked_to_object_of_search: bool | None = None
    datetime: str = NOT_SPECIFIED
    removal_of_more_than_outer_clothing: bool = False
    outcome_object: OutcomeObject = OutcomeObject()
    location: Location | None = None
    operation: str | None = None
    officer_defined_ethnicity: str | None = None
    type: str = NOT_SPECIFIED
    operation_name: str | None = None
    object_of_search: str = NOT_SPECIFIED
