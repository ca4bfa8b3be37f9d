"""Tests for duration/date codecs and config handling."""

import json
from datetime import date, timedelta
from pathlib import Path

import pytest

from errors import FormatError
from utils import (
    format_date,
    format_duration,
    load_config_safe,
    parse_date,
    parse_duration,
    settings_from_config,
    validate_config,
)


# ---------------------------------------------------------------------------
# Durations
# ---------------------------------------------------------------------------

class TestDuration:

    @pytest.mark.parametrize(
        "duration, text",
        [
            (timedelta(seconds=12), "00:00:12"),
            (timedelta(seconds=60), "00:01:00"),
            (timedelta(seconds=61), "00:01:01"),
            (timedelta(minutes=2, seconds=11), "00:02:11"),
            (timedelta(hours=1, minutes=21), "01:21:00"),
            (timedelta(hours=1, seconds=1), "01:00:01"),
            (timedelta(hours=1, seconds=59), "01:00:59"),
            (timedelta(0), "00:00:00"),
            (timedelta(hours=123, seconds=5), "123:00:05"),
            (timedelta(days=2, hours=3), "51:00:00"),
        ],
    )
    def test_format_and_parse(self, duration, text):
        assert format_duration(duration) == text
        assert parse_duration(text) == duration

    def test_format_truncates_fraction(self):
        assert format_duration(timedelta(seconds=5, milliseconds=999)) == "00:00:05"

    def test_format_negative(self):
        with pytest.raises(ValueError):
            format_duration(timedelta(seconds=-1))

    def test_parse_sums_fields(self):
        assert parse_duration("00:90:00") == timedelta(minutes=90)

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "12:00",
            "01:02:03:04",
            "aa:00:00",
            "01:-2:00",
            "01::00",
            " 01:00:00",
            "١:00:00",
            "01:00:00\n",
        ],
    )
    def test_parse_rejects(self, text):
        with pytest.raises(FormatError):
            parse_duration(text)


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

class TestDate:

    def test_parse(self):
        assert parse_date("03.02.2021") == date(2021, 2, 3)

    def test_parse_single_digits(self):
        assert parse_date("3.2.2021") == date(2021, 2, 3)

    def test_format_pads(self):
        assert format_date(date(2021, 2, 3)) == "03.02.2021"

    @pytest.mark.parametrize(
        "text", ["", "2021-02-03", "31.02.2021", "00.01.2021", "01.13.2021", "١٢.03.2021"]
    )
    def test_parse_rejects(self, text):
        with pytest.raises(FormatError):
            parse_date(text)


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

VALID_CONFIG = {
    "gist": {"api_token": "secret", "gist_id": "abc123"},
    "report": {"directory": "/tmp/hours"},
    "monthly_quota_hours": 160,
    "backup_interval_s": 5,
}


class TestValidateConfig:

    def test_valid(self):
        assert validate_config(VALID_CONFIG) == []

    def test_missing_gist(self):
        assert validate_config({}) == ["Missing section 'gist' in config"]

    def test_missing_gist_ok_offline(self):
        assert validate_config({}, offline=True) == []

    def test_missing_token(self):
        errors = validate_config({"gist": {"gist_id": "abc"}})
        assert errors == ["Missing gist.api_token"]

    @pytest.mark.parametrize("key", ["monthly_quota_hours", "backup_interval_s"])
    def test_non_numeric(self, key):
        config = {**VALID_CONFIG, key: "lots"}
        assert f"{key} must be a number" in validate_config(config)

    @pytest.mark.parametrize("section", ["gist", "report"])
    def test_section_not_object(self, section):
        config = {**VALID_CONFIG, section: "x"}
        assert validate_config(config) == [f"Section '{section}' must be an object"]

    def test_interval_positive(self):
        config = {**VALID_CONFIG, "backup_interval_s": 0}
        assert "backup_interval_s must be greater than 0" in validate_config(config)


class TestLoadConfigSafe:

    def test_missing_file(self, tmp_path, capsys):
        assert load_config_safe(str(tmp_path / "nope.json")) is None
        out = capsys.readouterr().out
        assert "not found" in out
        assert "hours.yaml" in out

    def test_missing_file_offline(self, tmp_path):
        assert load_config_safe(str(tmp_path / "nope.json"), offline=True) == {}

    def test_invalid_json(self, tmp_path, capsys):
        path = tmp_path / "hours.json"
        path.write_text('{"gist": ')
        assert load_config_safe(str(path)) is None
        assert "not valid JSON" in capsys.readouterr().out

    def test_incomplete(self, tmp_path, capsys):
        path = tmp_path / "hours.json"
        path.write_text(json.dumps({"gist": {}}))
        assert load_config_safe(str(path)) is None
        out = capsys.readouterr().out
        assert "gist.api_token" in out
        assert "gist.gist_id" in out

    def test_gist_not_object(self, tmp_path, capsys):
        path = tmp_path / "hours.json"
        path.write_text(json.dumps({"gist": "x"}))
        assert load_config_safe(str(path)) is None
        assert "Section 'gist' must be an object" in capsys.readouterr().out

    def test_valid(self, tmp_path):
        path = tmp_path / "hours.json"
        path.write_text(json.dumps(VALID_CONFIG))
        assert load_config_safe(str(path)) == VALID_CONFIG


class TestSettingsFromConfig:

    def test_full(self):
        settings = settings_from_config(VALID_CONFIG)
        assert settings.report_dir == Path("/tmp/hours")
        assert settings.api_token == "secret"
        assert settings.gist_id == "abc123"
        assert settings.gist_file == "hours"
        assert settings.monthly_quota == timedelta(hours=160)
        assert settings.backup_interval_s == 5.0
        assert settings.can_sync

    def test_defaults(self):
        settings = settings_from_config({})
        assert settings.report_dir == Path.home()
        assert settings.monthly_quota is None
        assert settings.backup_interval_s == 3.0
        assert not settings.can_sync
