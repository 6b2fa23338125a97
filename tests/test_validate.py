"""Unit tests for clearfashion.processing.validate."""

import pytest

from clearfashion.processing.validate import validate_raw_record


class TestValidateRawRecord:
    def test_valid_record_no_problems(self, raw_record):
        assert validate_raw_record(raw_record) == []

    def test_not_a_mapping(self):
        assert validate_raw_record(["link", "name"]) == ["not_a_record"]
        assert validate_raw_record(None) == ["not_a_record"]

    def test_empty_record_reports_everything_required(self):
        problems = validate_raw_record({})
        assert problems == ["missing_link", "missing_name", "missing_price"]

    def test_relative_link_ok_with_base(self, raw_record):
        raw_record["link"] = "men/jacket"
        assert validate_raw_record(raw_record, base_url="https://shop.example.com/en/") == []

    def test_price_as_text(self, raw_record):
        raw_record["price"] = "29 €"
        assert validate_raw_record(raw_record) == []

    @pytest.mark.parametrize("price,problem", [
        ("gratuit", "price_not_numeric"),
        (False, "price_not_numeric"),
        (-0.5, "price_negative"),
        (2**63, "price_out_of_range"),
        (1e300, "price_out_of_range"),
        (float("inf"), "price_out_of_range"),
        (10**400, "price_out_of_range"),
        ("", "missing_price"),
    ])
    def test_price_problems(self, raw_record, price, problem):
        raw_record["price"] = price
        assert validate_raw_record(raw_record) == [problem]

    def test_large_int64_price_accepted(self, raw_record):
        raw_record["price"] = 2**62
        assert validate_raw_record(raw_record) == []

    def test_invalid_release_date(self, raw_record):
        raw_record["released"] = "2024-13-45"
        assert validate_raw_record(raw_record) == ["released_invalid"]
