"""
Zone playoff brackets derived from group standings.

For every zone with at least PLAYOFF_QUALIFIERS_PER_ZONE teams:
- Semifinal 1: 1st vs 4th (1st at home)
- Semifinal 2: 2nd vs 3rd (2nd at home)
- Final: teams undetermined (pending_teams)

Two-way tournaments add a "- Vuelta" return leg for each round with the home
side reversed. Existing playoff fixtures are deleted and the new bracket is
written in the same commit; if no zone qualifies nothing is changed.

Filling the Final legs with the semifinal winners is left to result entry.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from sqlmodel import Session, col, select

from zonecup.models.match import STATUS_PENDING_DATE, Match
from zonecup.models.playoff_fixture import STATUS_PENDING_TEAMS, PlayoffFixture
from zonecup.models.zone import Zone
from zonecup.services.group_assignment import ensure_zones
from zonecup.services.operation import OperationResult, PreconditionFailedError, TournamentOperationError
from zonecup.services.rules_config import ROUND_ROBIN_TWO_WAY, RulesConfigError
from zonecup.services.rules_store import get_or_create_rules, rules_config_from_row
from zonecup.services.standings import StandingEntry
from zonecup.services.zone_queries import load_teams, zone_standings
from zonecup.services.zone_rules import PLAYOFF_QUALIFIERS_PER_ZONE

logger = logging.getLogger(__name__)

SECOND_LEG_SUFFIX = " - Vuelta"

_ORDINALS = {1: "1st", 2: "2nd", 3: "3rd", 4: "4th"}


@dataclass(frozen=True)
class BracketLeg:
    round: str
    match_label: str
    home_rank: Optional[int]  # None: decided by earlier rounds
    away_rank: Optional[int]
    is_second_leg: bool = False


def _semifinal(number: int, home_rank: int, away_rank: int) -> BracketLeg:
    return BracketLeg(
        round=f"Semifinal {number}",
        match_label=f"SF{number}: {_ORDINALS[home_rank]} vs {_ORDINALS[away_rank]}",
        home_rank=home_rank,
        away_rank=away_rank,
    )


def _second_leg(leg: BracketLeg, match_label: str) -> BracketLeg:
    return BracketLeg(
        round=leg.round + SECOND_LEG_SUFFIX,
        match_label=match_label,
        home_rank=leg.away_rank,
        away_rank=leg.home_rank,
        is_second_leg=True,
    )


def bracket_legs(round_robin_type: str) -> List[BracketLeg]:
    """Legs of one zone bracket in display order."""
    sf1 = _semifinal(1, 1, 4)
    sf2 = _semifinal(2, 2, 3)
    final = BracketLeg(round="Final", match_label="Final (Winner SF1 vs Winner SF2)", home_rank=None, away_rank=None)

    if round_robin_type != ROUND_ROBIN_TWO_WAY:
        return [sf1, sf2, final]

    return [
        sf1,
        _second_leg(sf1, f"SF1{SECOND_LEG_SUFFIX}: {_ORDINALS[4]} vs {_ORDINALS[1]}"),
        sf2,
        _second_leg(sf2, f"SF2{SECOND_LEG_SUFFIX}: {_ORDINALS[3]} vs {_ORDINALS[2]}"),
        final,
        _second_leg(final, f"Final{SECOND_LEG_SUFFIX} (Winner SF2 vs Winner SF1)"),
    ]


def build_zone_bracket(zone: Zone, standings: List[StandingEntry], round_robin_type: str) -> List[PlayoffFixture]:
    """Unsaved playoff fixtures for one zone from its ranked standings."""
    by_position = {entry.position: entry.team_id for entry in standings}
    fixtures = []
    for order, leg in enumerate(bracket_legs(round_robin_type), start=1):
        team1_id = by_position.get(leg.home_rank) if leg.home_rank else None
        team2_id = by_position.get(leg.away_rank) if leg.away_rank else None
        fixtures.append(
            PlayoffFixture(
                zone_id=zone.id,
                round=leg.round,
                match_label=f"{zone.name} - {leg.match_label}",
                bracket_order=order,
                team1_id=team1_id,
                team2_id=team2_id,
                is_second_leg=leg.is_second_leg,
                status=STATUS_PENDING_DATE if team1_id and team2_id else STATUS_PENDING_TEAMS,
            )
        )
    return fixtures


def _delete_playoff_fixtures(session: Session) -> int:
    """Stage deletion of the bracket and of legacy playoff matches (round label, no zone)."""
    fixtures = session.exec(select(PlayoffFixture)).all()
    legacy = session.exec(
        select(Match).where(col(Match.round_name).is_not(None), col(Match.zone_id).is_(None))
    ).all()
    for row in [*fixtures, *legacy]:
        session.delete(row)
    return len(fixtures) + len(legacy)


def generate_playoff_brackets(session: Session) -> OperationResult:
    """
    Rebuild every zone bracket from current standings.

    Returns:
        OperationResult with data:
        - fixtures_generated: number of playoff fixtures written
        - zones: ids of the zones that got a bracket
        - zones_skipped: {zone_id: reason} for zones without a bracket
    """
    skipped: Dict[str, str] = {}
    try:
        config = rules_config_from_row(get_or_create_rules(session))
        zones = ensure_zones(session, commit=False)

        deleted = _delete_playoff_fixtures(session)

        all_team_ids = [tid for zone in zones for tid in zone.team_ids or []]
        teams_by_id = load_teams(session, all_team_ids)

        generated: List[PlayoffFixture] = []
        bracket_zones: List[str] = []
        for zone in zones:
            roster = zone.team_ids or []
            if len(roster) < PLAYOFF_QUALIFIERS_PER_ZONE:
                skipped[zone.id] = f"{len(roster)} team(s) assigned, {PLAYOFF_QUALIFIERS_PER_ZONE} required"
                continue
            missing = [tid for tid in roster if tid not in teams_by_id]
            if missing:
                skipped[zone.id] = f"unknown team id(s): {', '.join(missing)}"
                continue

            standings = zone_standings(session, zone, config, teams_by_id)
            top = standings[:PLAYOFF_QUALIFIERS_PER_ZONE]
            fixtures = build_zone_bracket(zone, top, config.round_robin_type)
            session.add_all(fixtures)
            generated.extend(fixtures)
            bracket_zones.append(zone.id)

        if not bracket_zones:
            raise PreconditionFailedError(
                f"No zone has the {PLAYOFF_QUALIFIERS_PER_ZONE} teams needed to generate playoff brackets."
            )

        session.commit()
    except RulesConfigError as e:
        session.rollback()
        return OperationResult(success=False, message=f"Stored tournament rules are invalid: {e}", code="invalid_config")
    except TournamentOperationError as e:
        session.rollback()
        return OperationResult.failed(e, zones_skipped=skipped)

    for zone_id, reason in skipped.items():
        logger.info("Playoff bracket skipped for %s: %s", zone_id, reason)
    logger.info(
        "Generated %d playoff fixture(s) for %d zone(s); replaced %d old fixture(s)",
        len(generated),
        len(bracket_zones),
        deleted,
    )

    return OperationResult.ok(
        f"Playoff brackets generated ({len(generated)} fixtures across {len(bracket_zones)} zone(s)).",
        fixtures_generated=len(generated),
        zones=bracket_zones,
        zones_skipped=skipped,
    )


def clear_playoff_fixtures(session: Session) -> OperationResult:
    deleted = _delete_playoff_fixtures(session)
    session.commit()
    if not deleted:
        return OperationResult.ok("There are no playoff fixtures to clear.", deleted_fixtures=0)
    logger.info("Cleared %d playoff fixture(s)", deleted)
    return OperationResult.ok(f"Deleted {deleted} playoff fixture(s).", deleted_fixtures=deleted)


def list_playoff_fixtures(session: Session) -> List[Dict[str, Any]]:
    """Playoff fixtures ordered by zone then bracket order, with team names resolved."""
    fixtures = session.exec(
        select(PlayoffFixture).order_by(PlayoffFixture.zone_id, PlayoffFixture.bracket_order, PlayoffFixture.id)
    ).all()
    teams_by_id = load_teams(session, [tid for f in fixtures for tid in (f.team1_id, f.team2_id)])

    def _name(team_id: Optional[str]) -> Optional[str]:
        team = teams_by_id.get(team_id) if team_id else None
        return team.name if team else None

    return [
        {
            "id": f.id,
            "zone_id": f.zone_id,
            "round": f.round,
            "match_label": f.match_label,
            "team1_id": f.team1_id,
            "team2_id": f.team2_id,
            "team1_name": _name(f.team1_id),
            "team2_name": _name(f.team2_id),
            "is_second_leg": f.is_second_leg,
            "status": f.status,
            "score1": f.score1,
            "score2": f.score2,
            "date": f.date,
        }
        for f in fixtures
    ]
