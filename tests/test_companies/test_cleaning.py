"""Tests for the controversy/citation cleaner."""

import pytest

from butji.companies.cleaning import (
    clean_citations,
    clean_company_payload,
    clean_controversies,
    parse_controversies,
)


@pytest.fixture
def messy_payload() -> dict:
    return {
        "name": "Example AI",
        "controversies": [
            {"text": "  Scraped artists without consent  ", "date": "2023-01-04",
             "citations": [{"url": "https://a.example"}, {"url": "   "}, {"title": "no url"}]},
            {"text": "   ", "date": "2022-01-01"},
            {"text": "Undated", "date": "  ", "citations": []},
            "not a dict",
        ],
        "citations": {
            "ceo": [{"url": "https://b.example", "title": "Profile"}, {"url": ""}],
            "funding": [{"url": " "}],
            "controversies": [{"url": "https://should-be-dropped.example"}],
        },
    }


class TestCleanControversies:
    def test_drops_blank_text_entries(self, messy_payload):
        cleaned = clean_controversies(messy_payload["controversies"])
        assert [c["text"] for c in cleaned] == ["Scraped artists without consent", "Undated"]

    def test_drops_blank_citations_and_empty_lists(self, messy_payload):
        cleaned = clean_controversies(messy_payload["controversies"])
        assert cleaned[0]["citations"] == [{"url": "https://a.example"}]
        assert "citations" not in cleaned[1]

    def test_blank_date_removed(self, messy_payload):
        cleaned = clean_controversies(messy_payload["controversies"])
        assert cleaned[0]["date"] == "2023-01-04"
        assert "date" not in cleaned[1]

    def test_legacy_string_becomes_single_entry(self):
        assert clean_controversies("Plain text history") == [{"text": "Plain text history"}]

    def test_all_blank_returns_none(self):
        assert clean_controversies([{"text": ""}, {"text": "  "}]) is None
        assert clean_controversies([]) is None
        assert clean_controversies(None) is None


class TestCleanCitations:
    def test_reserved_key_and_empty_fields_dropped(self, messy_payload):
        cleaned = clean_citations(messy_payload["citations"])
        assert cleaned == {"ceo": [{"url": "https://b.example", "title": "Profile"}]}

    def test_non_mapping_returns_none(self):
        assert clean_citations(["https://a.example"]) is None


class TestCleanCompanyPayload:
    def test_idempotent(self, messy_payload):
        once = clean_company_payload(messy_payload)
        twice = clean_company_payload(once)
        assert once == twice

    def test_absent_keys_stay_absent(self):
        cleaned = clean_company_payload({"name": "Only name"})
        assert cleaned == {"name": "Only name"}

    def test_input_not_mutated(self, messy_payload):
        before = repr(messy_payload)
        clean_company_payload(messy_payload)
        assert repr(messy_payload) == before

    def test_no_entry_with_blank_text_or_url_survives(self, messy_payload):
        cleaned = clean_company_payload(messy_payload)
        for entry in cleaned["controversies"]:
            assert entry["text"].strip()
            for citation in entry.get("citations", []):
                assert citation["url"].strip()
        for citations in cleaned["citations"].values():
            assert all(c["url"].strip() for c in citations)


class TestParseControversies:
    def test_newest_first_then_undated(self):
        parsed = parse_controversies([
            {"text": "old", "date": "2020-01-01"},
            {"text": "undated-a"},
            {"text": "new", "date": "2024-06-01"},
            {"text": "undated-b"},
        ])
        assert [c["text"] for c in parsed] == ["new", "old", "undated-a", "undated-b"]

    def test_legacy_string(self):
        assert parse_controversies("legacy") == [{"text": "legacy"}]

    def test_empty(self):
        assert parse_controversies("") is None
        assert parse_controversies(None) is None
