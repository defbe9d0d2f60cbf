"""
Zone standings.

Standings are fully derived: recomputed from completed fixtures on every read
and never persisted. Ranking order:

1. points DESC
2. enabled tiebreakers in priority order
3. team name ASC (case-insensitive, then exact), then team id

Tiebreaker criteria:
- goalDifference, goalsFor, matchesWon: DESC
- pointsCoefficient: points / played DESC (0 when nothing played)
- directResult: points earned in matches among the teams still tied on every
  earlier key, DESC
- drawLot: not modelled (lots are drawn off-line), skipped
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Set, Tuple

from zonecup.services.rules_config import DEFAULT_RULES, RulesConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TeamRef:
    id: str
    name: str


@dataclass(frozen=True)
class MatchScore:
    """A completed match: team ids and final scores."""

    team1_id: str
    team2_id: str
    score1: int
    score2: int


@dataclass
class StandingEntry:
    team_id: str
    team_name: str
    position: int = 0
    points: int = 0
    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0
    goal_difference: int = 0

    @property
    def points_coefficient(self) -> float:
        return self.points / self.played if self.played else 0.0


_STAT_CRITERIA = {
    "goalDifference": lambda e: e.goal_difference,
    "goalsFor": lambda e: e.goals_for,
    "matchesWon": lambda e: e.won,
    "pointsCoefficient": lambda e: e.points_coefficient,
}


def _points_for(rules: RulesConfig, scored: int, conceded: int) -> int:
    if scored > conceded:
        return rules.points_for_win
    if scored < conceded:
        return rules.points_for_loss
    return rules.points_for_draw


def _record(entry: StandingEntry, scored: int, conceded: int, rules: RulesConfig) -> None:
    entry.played += 1
    entry.goals_for += scored
    entry.goals_against += conceded
    if scored > conceded:
        entry.won += 1
    elif scored < conceded:
        entry.lost += 1
    else:
        entry.drawn += 1
    entry.points += _points_for(rules, scored, conceded)


def _head_to_head_points(members: Set[str], matches: Sequence[MatchScore], rules: RulesConfig) -> Dict[str, int]:
    points = {team_id: 0 for team_id in members}
    for m in matches:
        if m.team1_id in members and m.team2_id in members:
            points[m.team1_id] += _points_for(rules, m.score1, m.score2)
            points[m.team2_id] += _points_for(rules, m.score2, m.score1)
    return points


def _ranking_keys(
    entries: List[StandingEntry], matches: Sequence[MatchScore], rules: RulesConfig
) -> Dict[str, List[float]]:
    """Per-team key list; lower sorts first."""
    keys: Dict[str, List[float]] = {e.team_id: [-e.points] for e in entries}

    for tiebreaker in rules.enabled_tiebreakers():
        if tiebreaker.id == "directResult":
            tied: Dict[Tuple[float, ...], Set[str]] = defaultdict(set)
            for e in entries:
                tied[tuple(keys[e.team_id])].add(e.team_id)
            h2h: Dict[str, int] = {}
            for members in tied.values():
                if len(members) > 1:
                    h2h.update(_head_to_head_points(members, matches, rules))
            for e in entries:
                keys[e.team_id].append(-h2h.get(e.team_id, 0))
        elif tiebreaker.id in _STAT_CRITERIA:
            value_of = _STAT_CRITERIA[tiebreaker.id]
            for e in entries:
                keys[e.team_id].append(-value_of(e))
        else:
            logger.debug("Tiebreaker '%s' is not applied to standings", tiebreaker.id)

    return keys


def compute_standings(
    teams: Sequence[TeamRef],
    matches: Sequence[MatchScore],
    rules: Optional[RulesConfig] = None,
) -> List[StandingEntry]:
    """
    Rank one zone.

    Args:
        teams: Teams of the zone
        matches: Completed matches of the zone (scores >= 0)
        rules: Rules to apply; None falls back to DEFAULT_RULES

    Returns:
        StandingEntry list in rank order with position set (1-based, no ties)
    """
    if rules is None:
        logger.warning("Tournament rules not available, computing standings with default rules")
        rules = DEFAULT_RULES

    table: Dict[str, StandingEntry] = {}
    for team in teams:
        table[team.id] = StandingEntry(team_id=team.id, team_name=team.name)

    for m in matches:
        # A side outside the zone is ignored; the in-zone side still counts
        if m.team1_id in table:
            _record(table[m.team1_id], m.score1, m.score2, rules)
        if m.team2_id in table:
            _record(table[m.team2_id], m.score2, m.score1, rules)

    entries = list(table.values())
    for entry in entries:
        entry.goal_difference = entry.goals_for - entry.goals_against

    keys = _ranking_keys(entries, matches, rules)
    entries.sort(key=lambda e: (keys[e.team_id], e.team_name.casefold(), e.team_name, e.team_id))

    for position, entry in enumerate(entries, start=1):
        entry.position = position
    return entries
