"""
Unit tests for season and year inference.
"""
from datetime import date, datetime

import pytest

from hoops_admin.seasons import infer_season, normalize_season, season_for_month, season_from_title


class TestSeasons:
    """Tests for the season helpers."""

    @pytest.mark.parametrize(
        "month,season",
        [(1, "Winter"), (3, "Spring"), (5, "Spring"), (6, "Summer"), (9, "Fall"), (11, "Fall"), (12, "Winter")],
    )
    def test_month_table(self, month, season):
        assert season_for_month(month) == season

    def test_autumn_is_fall(self):
        assert normalize_season("autumn") == "Fall"
        assert season_from_title("AUTUMN 2023 Shootout") == ("Fall", 2023)

    def test_title_without_year_does_not_match(self):
        assert season_from_title("Spring Classic") is None


class TestInferSeason:
    """Tests for infer_season precedence."""

    def test_explicit_fields_win(self):
        assert infer_season("winter", "2024", ["Spring 2025 Classic"], datetime(2025, 7, 1)) == ("Winter", 2024)

    def test_form_title_before_tournament_title(self):
        titles = ["Summer 2023 Jam", "Spring 2025 Classic"]
        assert infer_season(titles=titles, when=datetime(2025, 1, 1)) == ("Summer", 2023)

    def test_tournament_title_when_form_title_has_none(self):
        titles = ["Ticket form", "Spring 2025 Classic"]
        assert infer_season(titles=titles) == ("Spring", 2025)

    def test_month_fallback(self):
        assert infer_season(when=datetime(2025, 10, 3)) == ("Fall", 2025)

    def test_partial_explicit_fields_fill_the_gap(self):
        assert infer_season(season="Spring", when=datetime(2023, 10, 3)) == ("Spring", 2023)

    def test_nothing_known(self):
        assert infer_season(today=date(2026, 10, 19)) == ("", 2026)
