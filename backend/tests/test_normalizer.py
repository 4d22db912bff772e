"""Tests for record normalization."""

import pytest
from pydantic import ValidationError

from stopsearch.schemas.stop_search import NOT_SPECIFIED
from stopsearch.services.normalizer import is_well_formed, normalize_record, snake_to_camel


class TestSnakeToCamel:
    def test_converts_each_segment(self):
        assert snake_to_camel("age_range") == "ageRange"
        assert snake_to_camel("outcome_linked_to_object_of_search") == "outcomeLinkedToObjectOfSearch"

    def test_leaves_plain_keys(self):
        assert snake_to_camel("datetime") == "datetime"
        assert snake_to_camel("outcome_object.id") == "outcomeObject.id"


class TestNormalizeRecord:
    """Tests for normalize_record."""

    def test_empty_record_gets_defaults(self):
        """Test every non-nullable field is defaulted and nullable fields are None."""
        record = normalize_record({})

        assert record.age_range == NOT_SPECIFIED
        assert record.outcome == NOT_SPECIFIED
        assert record.involved_person is False
        assert record.self_defined_ethnicity == NOT_SPECIFIED
        assert record.gender == NOT_SPECIFIED
        assert record.datetime == NOT_SPECIFIED
        assert record.removal_of_more_than_outer_clothing is False
        assert record.outcome_object.id == ""
        assert record.outcome_object.name == NOT_SPECIFIED
        assert record.type == NOT_SPECIFIED
        assert record.object_of_search == NOT_SPECIFIED

        assert record.legislation is None
        assert record.outcome_linked_to_object_of_search is None
        assert record.location is None
        assert record.operation is None
        assert record.officer_defined_ethnicity is None
        assert record.operation_name is None

    def test_non_mapping_input_gets_defaults(self):
        record = normalize_record(None)  # type: ignore[arg-type]
        assert record.outcome == NOT_SPECIFIED

    def test_snake_and_camel_keys_are_equivalent(self):
        """Test snake_case and camelCase inputs produce identical records."""
        snake = {
            "age_range": "25-34",
            "self_defined_ethnicity": "Other ethnic group - Not stated",
            "involved_person": True,
            "outcome_linked_to_object_of_search": True,
            "removal_of_more_than_outer_clothing": True,
            "officer_defined_ethnicity": "Black",
            "operation_name": "Op Nexus",
            "object_of_search": "Offensive weapons",
            "outcome_object": {"id": "bu-summons", "name": "Summons / charged by post"},
        }
        camel = {snake_to_camel(key): value for key, value in snake.items()}

        assert normalize_record(snake) == normalize_record(camel)

    def test_snake_case_wins_over_camel_case(self):
        record = normalize_record({"age_range": "18-24", "ageRange": "over 34"})
        assert record.age_range == "18-24"

    def test_falsy_values_fall_back(self):
        record = normalize_record({"age_range": "", "gender": None, "legislation": ""})

        assert record.age_range == NOT_SPECIFIED
        assert record.gender == NOT_SPECIFIED
        assert record.legislation is None

    def test_truthy_values_coerce_to_true(self):
        """Test boolean fields accept any truthy value."""
        record = normalize_record({"involved_person": "yes", "removalOfMoreThanOuterClothing": 1})

        assert record.involved_person is True
        assert record.removal_of_more_than_outer_clothing is True

    def test_outcome_linked_falsy_values_are_unknown(self):
        """Test missing or falsy outcome links normalize to None."""
        raw_records = [
            {},
            {"outcome_linked_to_object_of_search": None},
            {"outcome_linked_to_object_of_search": False},
            {"outcomeLinkedToObjectOfSearch": 0},
        ]
        for raw in raw_records:
            assert normalize_record(raw).outcome_linked_to_object_of_search is None

    def test_outcome_linked_truthy_values(self):
        assert (
            normalize_record({"outcomeLinkedToObjectOfSearch": True}).outcome_linked_to_object_of_search
            is True
        )
        assert (
            normalize_record({"outcome_linked_to_object_of_search": "yes"}).outcome_linked_to_object_of_search
            is True
        )

    def test_outcome_linked_falsy_snake_falls_back_to_camel(self):
        record = normalize_record(
            {"outcome_linked_to_object_of_search": 0, "outcomeLinkedToObjectOfSearch": True}
        )
        assert record.outcome_linked_to_object_of_search is True

    def test_outcome_object_flat_keys_fallback(self):
        record = normalize_record({"outcome_object.id": "bu-caution", "outcomeObject.name": "Caution"})

        assert record.outcome_object.id == "bu-caution"
        assert record.outcome_object.name == "Caution"

    def test_location_with_street(self, sample_raw_records):
        record = normalize_record(sample_raw_records[0])

        assert record.location is not None
        assert record.location.latitude == "51.512173"
        assert record.location.longitude == "-0.131577"
        assert record.location.street.id == 1672870
        assert record.location.street.name == "On or near Shaftesbury Avenue"

    def test_location_without_street(self, sample_raw_records):
        """Test a missing street object defaults its id and name."""
        record = normalize_record(sample_raw_records[2])

        assert record.location is not None
        assert record.location.street.id == 0
        assert record.location.street.name == NOT_SPECIFIED

    def test_location_street_id_not_numeric(self):
        record = normalize_record({"location": {"street": {"id": "abc", "name": ""}}})

        assert record.location.street.id == 0
        assert record.location.street.name == NOT_SPECIFIED
        assert record.location.latitude == ""

    def test_falsy_location_is_none(self):
        assert normalize_record({"location": None}).location is None
        assert normalize_record({"location": {}}).location is None

    def test_outcome_object_nested(self, sample_raw_records):
        record = normalize_record(sample_raw_records[1])

        assert record.outcome_object.id == "bu-no-further-action"
        assert record.outcome_object.name == "A no further action disposal"

    def test_full_record(self, sample_raw_records):
        record = normalize_record(sample_raw_records[0])

        assert record.age_range == "18-24"
        assert record.outcome == "Arrest"
        assert record.legislation == "Misuse of Drugs Act 1971 (section 23)"
        assert record.outcome_linked_to_object_of_search is True
        assert record.operation is None
        assert record.type == "Person search"

    def test_unrecognized_timestamp_key(self):
        """Test a record keyed by an unknown field name still normalizes."""
        record = normalize_record(
            {"date_time": "2024-01-05T10:00:00", "outcome": "Arrest", "type": "Person search"}
        )

        assert record.age_range == "Not specified"
        assert record.outcome == "Arrest"
        assert record.involved_person is False
        assert record.location is None
        assert record.type == "Person search"

    def test_record_is_immutable(self):
        record = normalize_record({"outcome": "Arrest"})

        with pytest.raises(ValidationError):
            record.outcome = "Caution"

    def test_serializes_with_camel_case_keys(self, sample_raw_records):
        data = normalize_record(sample_raw_records[0]).model_dump(by_alias=True)

        assert data["ageRange"] == "18-24"
        assert data["outcomeObject"] == {"id": "bu-arrest", "name": "Arrest"}
        assert data["location"]["street"]["name"] == "On or near Shaftesbury Avenue"
        assert "outcomeLinkedToObjectOfSearch" in data


class TestIsWellFormed:
    def test_requires_datetime_and_outcome_keys(self):
        assert is_well_formed({"datetime": None, "outcome": None})
        assert not is_well_formed({"datetime": "2024-01-01T00:00:00"})
        assert not is_well_formed({"outcome": "Arrest"})
        assert not is_well_formed(None)
        assert not is_well_formed(["datetime", "outcome"])
