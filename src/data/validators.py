"""Schema validators for season snapshot payloads."""

from __future__ import annotations

from typing import Dict, List, Optional

_TEAM_NUMERIC_FIELDS = (
    "games_played",
    "wins",
    "losses",
    "ties",
    "points_for",
    "points_against",
    "total_off_yards",
    "total_off_plays",
    "total_def_yards_allowed",
    "total_def_plays_faced",
    "takeaways",
    "giveaways",
)

_STANDING_NUMERIC_FIELDS = ("total_wins", "total_losses", "total_ties", "points_for", "points_against")


def _to_float(value) -> Optional[float]:
    # Only real JSON numbers count; "3", null and booleans are rejected
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def validate_teams_payload(payload: Dict) -> List[str]:
    errors: List[str] = []
    teams = payload.get("teams")
    if not isinstance(teams, list) or not teams:
        return ["snapshot payload must include non-empty 'teams' list"]

    seen = set()
    for idx, row in enumerate(teams):
        if not isinstance(row, dict):
            errors.append(f"teams[{idx}] must be an object")
            continue
        if "team_id" not in row:
            errors.append(f"teams[{idx}] missing fields: team_id")
            continue
        if row["team_id"] in seen:
            errors.append(f"teams[{idx}] duplicate team_id {row['team_id']}")
        seen.add(row["team_id"])

        for field in _TEAM_NUMERIC_FIELDS:
            if field not in row:
                continue
            val = _to_float(row[field])
            if val is None:
                errors.append(f"teams[{idx}] invalid numeric field '{field}'")
            elif val < 0:
                errors.append(f"teams[{idx}] negative value for '{field}'")

        opponents = row.get("opponent_team_ids", [])
        if not isinstance(opponents, list):
            errors.append(f"teams[{idx}] 'opponent_team_ids' must be a list")
    return errors


def validate_standings_payload(payload: Dict) -> List[str]:
    standings = payload.get("standings")
    if standings is None:
        return []
    if not isinstance(standings, list):
        return ["'standings' must be a list"]

    errors: List[str] = []
    for idx, row in enumerate(standings):
        if not isinstance(row, dict):
            errors.append(f"standings[{idx}] must be an object")
            continue
        if "team_id" not in row:
            errors.append(f"standings[{idx}] missing fields: team_id")
        for field in _STANDING_NUMERIC_FIELDS:
            if row.get(field) is not None and _to_float(row[field]) is None:
                errors.append(f"standings[{idx}] invalid numeric field '{field}'")
    return errors


def validate_schedule_payload(payload: Dict) -> List[str]:
    schedule = payload.get("schedule")
    if schedule is None:
        return []
    if not isinstance(schedule, list):
        return ["'schedule' must be a list"]

    errors: List[str] = []
    for idx, row in enumerate(schedule):
        if not isinstance(row, dict):
            errors.append(f"schedule[{idx}] must be an object")
            continue
        missing = [k for k in ("schedule_id", "home_team_id", "away_team_id") if k not in row]
        if missing:
            errors.append(f"schedule[{idx}] missing fields: {', '.join(missing)}")
        elif row["home_team_id"] == row["away_team_id"]:
            errors.append(f"schedule[{idx}] home and away team are the same")
    return errors


def validate_snapshot_payload(payload: Dict) -> List[str]:
    """Run every snapshot check and return all errors found."""
    if not isinstance(payload, dict):
        return ["snapshot payload must be an object"]

    # Standings alone are enough; aggregates are estimated from them
    if "teams" in payload or not payload.get("standings"):
        team_errors = validate_teams_payload(payload)
    else:
        team_errors = []
    return team_errors + validate_standings_payload(payload) + validate_schedule_payload(payload)
