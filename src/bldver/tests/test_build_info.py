"""Tests for bldver.build_info module."""

import pytest
from pydantic import ValidationError

from bldver.build_info import BuildMetadata, load_build_metadata


class TestDefaults:
    def test_compiled_in_values(self):
        build = load_build_metadata()

        assert build.program_name == "bldver"
        assert build.build_date == "2022-10-01_00:00:00AM"
        assert build.version == "v0.0.10"
        assert build.githash == "0" * 40

    def test_version_line(self):
        build = BuildMetadata()

        assert build.version_line() == (
            "bldver ver: v0.0.10 at: 2022-10-01_00:00:00AM githash: 0000000000000000000000000000000000000000"
        )


class TestStampedEnvironment:
    def test_reads_stamp_from_env(self, monkeypatch):
        monkeypatch.setenv("BLDVER_VERSION", "v1.2.3")
        monkeypatch.setenv("BLDVER_BUILD_DATE", "2024-05-06_07:08:09PM")
        monkeypatch.setenv("BLDVER_GITHASH", "36d2f5de81003116ceb92f3fa0fd9468a654e25c")

        build = load_build_metadata()

        assert build.program_name == "bldver"
        assert build.version == "v1.2.3"
        assert build.build_date == "2024-05-06_07:08:09PM"
        assert build.githash == "36d2f5de81003116ceb92f3fa0fd9468a654e25c"

    def test_program_name_override(self, monkeypatch):
        monkeypatch.setenv("BLDVER_PROGRAM_NAME", "mytool")

        assert load_build_metadata().version_line().startswith("mytool ver: v0.0.10 ")

    def test_empty_stamp_is_kept(self, monkeypatch):
        monkeypatch.setenv("BLDVER_VERSION", "")

        build = load_build_metadata()

        assert build.version == ""
        assert build.version_line().startswith("bldver ver:  at: 2022-10-01_00:00:00AM ")

    def test_unrelated_env_is_ignored(self, monkeypatch):
        monkeypatch.setenv("BLDVER_SOMETHING_ELSE", "x")

        assert load_build_metadata().version == "v0.0.10"

    def test_init_values_take_precedence(self, monkeypatch):
        monkeypatch.setenv("BLDVER_VERSION", "v9.9.9")

        assert BuildMetadata(version="v2.0.0").version == "v2.0.0"


class TestImmutability:
    def test_fields_cannot_be_reassigned(self):
        build = BuildMetadata()

        with pytest.raises(ValidationError):
            build.version = "v0.0.11"


class TestStamp:
    def test_lists_values_in_env_form(self, monkeypatch):
        monkeypatch.setenv("BLDVER_GITHASH", "abc123")

        assert load_build_metadata().stamp() == (
            ("BLDVER_PROGRAM_NAME", "bldver"),
            ("BLDVER_BUILD_DATE", "2022-10-01_00:00:00AM"),
            ("BLDVER_VERSION", "v0.0.10"),
            ("BLDVER_GITHASH", "abc123"),
        )
