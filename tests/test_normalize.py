"""Unit tests for clearfashion.processing.normalize."""

import math
import uuid
from datetime import date, datetime, timedelta, timezone

import numpy as np
import pytest

from clearfashion.errors import NormalizationError
from clearfashion.processing.normalize import (
    canonicalize_link,
    collapse_whitespace,
    is_missing,
    normalize,
    normalize_batch,
    normalize_photo,
    parse_price_number,
    parse_released,
    product_uuid,
)


# ============================================================================
# collapse_whitespace
# ============================================================================
class TestCollapseWhitespace:
    def test_none_returns_empty(self):
        assert collapse_whitespace(None) == ""

    def test_collapses_runs(self):
        assert collapse_whitespace("  Jacket \n\t  Black  ") == "Jacket Black"

    def test_non_breaking_space(self):
        assert collapse_whitespace("Sweat\u00a0Hoodie") == "Sweat Hoodie"

    def test_nan_is_empty(self):
        assert collapse_whitespace(float("nan")) == ""


# ============================================================================
# is_missing
# ============================================================================
class TestIsMissing:
    @pytest.mark.parametrize("value", [None, "", "   ", float("nan"), [], {}])
    def test_missing(self, value):
        assert is_missing(value)

    @pytest.mark.parametrize("value", ["x", 0, 0.0, ["a"], {"a": 1}])
    def test_present(self, value):
        assert not is_missing(value)


# ============================================================================
# canonicalize_link
# ============================================================================
class TestCanonicalizeLink:
    def test_absolute_link_kept(self):
        assert canonicalize_link("https://shop.example.com/a?b=1") == "https://shop.example.com/a?b=1"

    def test_fragment_dropped_host_lowered(self):
        assert canonicalize_link("HTTPS://Shop.Example.COM/Item#reviews") == "https://shop.example.com/Item"

    def test_relative_link_with_base(self):
        link = canonicalize_link("men/news/jacket", "https://www.dedicatedbrand.com/en/")
        assert link == "https://www.dedicatedbrand.com/en/men/news/jacket"

    def test_relative_link_without_base(self):
        assert canonicalize_link("/men/jacket") is None

    def test_protocol_relative(self):
        assert canonicalize_link("//cdn.example.com/a.jpg") == "https://cdn.example.com/a.jpg"

    def test_non_http_scheme(self):
        assert canonicalize_link("javascript:void(0)") is None

    def test_empty_path_becomes_root(self):
        assert canonicalize_link("https://shop.example.com") == "https://shop.example.com/"

    def test_missing(self):
        assert canonicalize_link(None) is None
        assert canonicalize_link("  ") is None


# ============================================================================
# product_uuid
# ============================================================================
class TestProductUuid:
    def test_uuid5_url_namespace(self):
        link = "https://www.dedicatedbrand.com/en/men/news/jacket"
        assert product_uuid(link) == str(uuid.uuid5(uuid.NAMESPACE_URL, link))

    def test_deterministic(self):
        assert product_uuid("https://a.example/x") == product_uuid("https://a.example/x")

    def test_distinct_links(self):
        assert product_uuid("https://a.example/x") != product_uuid("https://a.example/y")


# ============================================================================
# parse_price_number
# ============================================================================
class TestParsePriceNumber:
    @pytest.mark.parametrize("raw,expected", [
        (45, 45.0),
        (np.int64(45), 45.0),
        (49.99, 49.99),
        ("45", 45.0),
        ("45,90 €", 45.9),
        ("€ 45", 45.0),
        ("$1,299.00", 1299.0),
        ("1.299,00 EUR", 1299.0),
        ("-5", -5.0),
    ])
    def test_numeric(self, raw, expected):
        assert parse_price_number(raw) == pytest.approx(expected)

    @pytest.mark.parametrize("raw", ["sold out", "", "45/50", True, None, float("nan"), {"priceAsNumber": 4}])
    def test_not_numeric(self, raw):
        assert parse_price_number(raw) is None

    def test_int_beyond_float_range_is_infinite(self):
        assert parse_price_number(10**400) == math.inf
        assert parse_price_number(-(10**400)) == -math.inf


# ============================================================================
# parse_released
# ============================================================================
class TestParseReleased:
    def test_missing(self):
        assert parse_released(None) is None
        assert parse_released("") is None

    def test_iso_string(self):
        assert parse_released("2024-03-01") == date(2024, 3, 1)

    def test_iso_timestamp(self):
        assert parse_released("2024-03-01T23:10:00Z") == date(2024, 3, 1)

    def test_datetime(self):
        assert parse_released(datetime(2024, 3, 1, 8, 30)) == date(2024, 3, 1)

    def test_aware_datetime_read_in_utc(self):
        tokyo = timezone(timedelta(hours=9))
        assert parse_released(datetime(2024, 3, 2, 5, 0, tzinfo=tokyo)) == date(2024, 3, 1)

    def test_date(self):
        assert parse_released(date(2024, 3, 1)) == date(2024, 3, 1)

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_released("01/03/2024")


# ============================================================================
# normalize_photo
# ============================================================================
class TestNormalizePhoto:
    def test_first_image_of_list(self):
        assert normalize_photo(["https://img.example/a.jpg", "https://img.example/b.jpg"]) == "https://img.example/a.jpg"

    def test_empty_list(self):
        assert normalize_photo([]) is None

    def test_relative_without_base(self):
        assert normalize_photo("a.jpg") is None


# ============================================================================
# normalize
# ============================================================================
class TestNormalize:
    def test_canonical_fields(self, raw_record, today):
        product = normalize(raw_record, ingested_on=today)
        assert product.name == "T-shirt Stockholm Base Black"
        assert product.brand == "DEDICATED"
        assert product.price == 29
        assert product.link == raw_record["link"]
        assert product.photo == raw_record["photo"]
        assert product.uuid == str(uuid.uuid5(uuid.NAMESPACE_URL, raw_record["link"]))

    def test_released_defaults_to_ingestion_date(self, raw_record, today):
        assert normalize(raw_record, ingested_on=today).released == today

    def test_released_from_record(self, raw_record, today):
        raw_record["released"] = "2024-01-15"
        assert normalize(raw_record, ingested_on=today).released == date(2024, 1, 15)

    def test_idempotent(self, raw_record, today):
        assert normalize(raw_record, ingested_on=today) == normalize(raw_record, ingested_on=today)

    def test_same_link_different_whitespace_same_uuid(self, raw_record):
        other = dict(raw_record, name="T-shirt   Stockholm Base Black")
        assert normalize(raw_record).uuid == normalize(other).uuid

    def test_source_brand_used_when_record_has_none(self, raw_record):
        del raw_record["brand"]
        assert normalize(raw_record, brand="DEDICATED").brand == "DEDICATED"

    def test_record_brand_wins(self, raw_record):
        assert normalize(raw_record, brand="OTHER").brand == "DEDICATED"

    def test_no_brand_at_all(self, raw_record):
        del raw_record["brand"]
        assert normalize(raw_record).brand == ""

    def test_float_price_truncated(self, raw_record):
        raw_record["price"] = 49.99
        assert normalize(raw_record).price == 49

    def test_url_key_accepted(self, raw_record):
        raw_record["url"] = raw_record.pop("link")
        assert normalize(raw_record).link.startswith("https://www.dedicatedbrand.com/")

    def test_relative_link_resolved(self, raw_record):
        raw_record["link"] = "men/news/jacket"
        product = normalize(raw_record, base_url="https://www.dedicatedbrand.com/en/")
        assert product.link == "https://www.dedicatedbrand.com/en/men/news/jacket"

    def test_image_key_accepted(self, raw_record):
        del raw_record["photo"]
        raw_record["image"] = ["https://img.example/a.jpg"]
        assert normalize(raw_record).photo == "https://img.example/a.jpg"

    def test_zero_price_is_valid(self, raw_record):
        raw_record["price"] = 0
        assert normalize(raw_record).price == 0

    @pytest.mark.parametrize("field,value,problem", [
        ("link", None, "missing_link"),
        ("link", "/relative/only", "invalid_link"),
        ("name", "   ", "missing_name"),
        ("price", None, "missing_price"),
        ("price", "call us", "price_not_numeric"),
        ("price", -3, "price_negative"),
        ("price", 10**20, "price_out_of_range"),
        ("price", "123456789012345678901", "price_out_of_range"),
        ("released", "yesterday", "released_invalid"),
    ])
    def test_rejections(self, raw_record, field, value, problem):
        raw_record[field] = value
        with pytest.raises(NormalizationError) as exc_info:
            normalize(raw_record)
        assert problem in exc_info.value.problems

    def test_non_numeric_price_is_not_zero(self, raw_record):
        raw_record["price"] = "N/A"
        with pytest.raises(NormalizationError):
            normalize(raw_record)


# ============================================================================
# normalize_batch
# ============================================================================
class TestNormalizeBatch:
    def test_skips_bad_records_and_continues(self, raw_record, caplog):
        bad = dict(raw_record, price="free")
        good = dict(raw_record, link="https://shop.example.com/other")
        products, rejected = normalize_batch([raw_record, bad, "garbage", good])
        assert [p.link for p in products] == [raw_record["link"], "https://shop.example.com/other"]
        assert [index for index, _ in rejected] == [1, 2]
        assert "price_not_numeric" in rejected[0][1].problems
        assert "not_a_record" in rejected[1][1].problems
        assert "Skipping record #1" in caplog.text

    def test_shared_ingestion_date(self, raw_record, today):
        other = dict(raw_record, link="https://shop.example.com/other")
        products, _ = normalize_batch([raw_record, other], ingested_on=today)
        assert {p.released for p in products} == {today}

    def test_empty(self):
        assert normalize_batch([]) == ([], [])
