"""Tests for the report format regex patterns."""

import pytest

from patterns import Patterns


# ---------------------------------------------------------------------------
# DATE — DD.MM.YYYY
# ---------------------------------------------------------------------------

class TestDatePattern:

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("01.02.2021", ("01", "02", "2021")),
            ("31.12.1999", ("31", "12", "1999")),
            ("1.2.2021", ("1", "2", "2021")),
        ],
    )
    def test_matches(self, text, expected):
        m = Patterns.DATE.fullmatch(text)
        assert m is not None, f"DATE should match '{text}'"
        assert m.groups() == expected

    @pytest.mark.parametrize(
        "text",
        [
            "2021-02-01",   # ISO order
            "01.02.21",     # two-digit year
            "01/02/2021",   # wrong separator
            "001.02.2021",
            "١٢.03.2021",   # Arabic-Indic digits
            "01.02.2021\n",
            "",
        ],
    )
    def test_rejects(self, text):
        assert Patterns.DATE.fullmatch(text) is None


# ---------------------------------------------------------------------------
# DURATION_FIELD — digits only
# ---------------------------------------------------------------------------

class TestDurationField:

    @pytest.mark.parametrize("text", ["0", "07", "123"])
    def test_matches(self, text):
        assert Patterns.DURATION_FIELD.fullmatch(text)

    @pytest.mark.parametrize("text", ["", "-1", "+1", "1a", " 1", "1.5", "١", "1\n"])
    def test_rejects(self, text):
        assert Patterns.DURATION_FIELD.fullmatch(text) is None


# ---------------------------------------------------------------------------
# TOTAL_LINE — subtotal lines are skipped when reading
# ---------------------------------------------------------------------------

class TestTotalLine:

    @pytest.mark.parametrize(
        "line",
        [
            "Total for February 2021 16:17:24",
            "TOTAL 10:00:00",
            "total",
            "totally made up",
        ],
    )
    def test_matches(self, line):
        assert Patterns.TOTAL_LINE.match(line)

    def test_entry_line_not_total(self):
        assert Patterns.TOTAL_LINE.match("01.02.2021 07:00:12") is None

    def test_only_at_start(self):
        assert Patterns.TOTAL_LINE.match("01.02.2021 total") is None
