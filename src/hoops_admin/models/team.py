"""Internal team rows and their normalizer."""

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from benedict import benedict

from hoops_admin.models.common import ListRow, unique_sorted
from hoops_admin.utils import to_int

GRADES = ("K", "1", "2", "3", "4", "5", "6", "7", "8")


@dataclass(slots=True)
class TeamRow(ListRow):
    """One internal (club) team."""

    name: str = ""
    year: int = 0
    grade: str = ""
    gender: str = ""
    coach_count: int = 0
    player_count: int = 0
    tryout_season: str = ""
    tryout_year: int = 0


def normalize_team(record: Mapping[str, Any]) -> TeamRow:
    """Convert a raw team record; missing status means "active"."""
    b = benedict(dict(record), keypath_separator=None)
    return TeamRow(
        id=str(b.get("_id") or b.get("id") or ""),
        status=str(b.get("status") or "active").lower(),
        name=b.get("name") or "",
        year=to_int(b.get("year")),
        grade=str(b.get("grade") or ""),
        gender=b.get("gender") or "",
        coach_count=len(b.get("coachIds") or []),
        player_count=len(b.get("playerIds") or []),
        tryout_season=b.get("tryoutSeason") or "",
        tryout_year=to_int(b.get("tryoutYear")),
    )


def team_stats(rows: Sequence[TeamRow]) -> dict[str, float]:
    return {
        "totalTeams": len(rows),
        "activeTeams": sum(1 for row in rows if row.status == "active"),
        "totalPlayers": sum(row.player_count for row in rows),
        "totalCoaches": sum(row.coach_count for row in rows),
    }


def team_metadata(rows: Sequence[TeamRow]) -> dict[str, list]:
    return {
        "years": unique_sorted((row.year for row in rows if row.year), reverse=True),
        "grades": unique_sorted(row.grade for row in rows),
        "tryoutSeasons": unique_sorted(row.tryout_season for row in rows),
    }


def default_team_metadata(today_year: int) -> dict[str, list]:
    return {
        "years": [today_year - 1, today_year],
        "grades": list(GRADES),
        "tryoutSeasons": ["Basketball Select Tryout"],
    }
