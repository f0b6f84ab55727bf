"""Tests for the Generation and GenerationDiff models."""

import json
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from timemach.models import Generation, GenerationDiff, profile_link


class TestProfileLink:
    def test_default_root(self):
        assert profile_link("7") == "/nix/var/nix/profiles/system-7-link"

    def test_custom_root_trailing_slash(self):
        assert profile_link("7", "/tmp/profiles/") == "/tmp/profiles/system-7-link"


class TestGeneration:
    def test_from_listing_derives_profiles(self):
        gen = Generation.from_listing("7", datetime(2024, 2, 9, 10, 0, 0))
        assert gen.profiles == ["/nix/var/nix/profiles/system-7-link"]
        assert gen.current is False
        assert gen.description is None

    def test_naive_timestamp_assumed_utc(self):
        gen = Generation(id="1", timestamp=datetime(2024, 2, 9, 10, 0, 0))
        assert gen.timestamp.tzinfo == timezone.utc
        assert gen.timestamp.hour == 10

    def test_aware_timestamp_normalized_to_utc(self):
        plus_two = timezone(timedelta(hours=2))
        gen = Generation(id="1", timestamp=datetime(2024, 2, 9, 12, 0, 0, tzinfo=plus_two))
        assert gen.timestamp == datetime(2024, 2, 9, 10, 0, 0, tzinfo=timezone.utc)
        assert gen.timestamp.utcoffset() == timedelta(0)

    def test_rejects_non_numeric_id(self):
        with pytest.raises(ValidationError):
            Generation(id="12current", timestamp=datetime(2024, 2, 9))

    def test_rejects_non_ascii_digits(self):
        with pytest.raises(ValidationError):
            Generation(id="\u0661", timestamp=datetime(2024, 2, 9))

    def test_frozen(self):
        gen = Generation(id="1", timestamp=datetime(2024, 2, 9))
        with pytest.raises(ValidationError):
            gen.current = True

    def test_json_shape(self):
        gen = Generation.from_listing(
            "2", datetime(2024, 2, 9, 11, 0, 0), description="nixos-22.11", current=True,
        )
        data = json.loads(gen.model_dump_json())
        assert data == {
            "id": "2",
            "timestamp": "2024-02-09T11:00:00Z",
            "description": "nixos-22.11",
            "profiles": ["/nix/var/nix/profiles/system-2-link"],
            "current": True,
        }

    def test_python_dump_keeps_datetime(self):
        gen = Generation(id="1", timestamp=datetime(2024, 2, 9))
        assert isinstance(gen.model_dump()["timestamp"], datetime)

    def test_null_description_serialized(self):
        gen = Generation(id="1", timestamp=datetime(2024, 2, 9))
        assert gen.model_dump(mode="json")["description"] is None


class TestGenerationDiff:
    def test_defaults_empty(self):
        diff = GenerationDiff()
        assert diff.is_empty
        assert diff.summary() == {"added": 0, "removed": 0, "modified": 0}

    def test_summary(self):
        diff = GenerationDiff(added=["a"], removed=["b", "c"], modified=["b"])
        assert not diff.is_empty
        assert diff.summary() == {"added": 1, "removed": 2, "modified": 1}

    def test_json_field_names(self):
        data = GenerationDiff(added=["x"]).model_dump(mode="json")
        assert set(data) == {"added", "removed", "modified"}
