"""Read helpers shared by the standings, playoff and competition services."""

from typing import Dict, Iterable, List, Optional

from sqlmodel import Session, col, select

from zonecup.models.match import STATUS_COMPLETED, Match
from zonecup.models.team import Team
from zonecup.models.zone import Zone
from zonecup.services.rules_config import RulesConfig
from zonecup.services.standings import MatchScore, StandingEntry, TeamRef, compute_standings


def load_teams(session: Session, team_ids: Iterable[str]) -> Dict[str, Team]:
    ids = {tid for tid in team_ids if tid}
    if not ids:
        return {}
    teams = session.exec(select(Team).where(col(Team.id).in_(sorted(ids)))).all()
    return {t.id: t for t in teams}


def completed_zone_matches(session: Session, zone_id: str) -> List[MatchScore]:
    """Completed, scored group-stage matches of one zone."""
    matches = session.exec(
        select(Match)
        .where(
            Match.zone_id == zone_id,
            col(Match.round_name).is_(None),
            Match.status == STATUS_COMPLETED,
            col(Match.score1).is_not(None),
            col(Match.score2).is_not(None),
        )
        .order_by(Match.id)
    ).all()
    return [MatchScore(m.team1_id, m.team2_id, m.score1, m.score2) for m in matches]


def zone_team_refs(zone: Zone, teams_by_id: Dict[str, Team]) -> List[TeamRef]:
    """Roster as TeamRefs; ids without a team row are dropped."""
    return [TeamRef(id=tid, name=teams_by_id[tid].name) for tid in zone.team_ids or [] if tid in teams_by_id]


def zone_standings(
    session: Session,
    zone: Zone,
    rules: Optional[RulesConfig],
    teams_by_id: Optional[Dict[str, Team]] = None,
) -> List[StandingEntry]:
    if teams_by_id is None:
        teams_by_id = load_teams(session, zone.team_ids or [])
    return compute_standings(zone_team_refs(zone, teams_by_id), completed_zone_matches(session, zone.id), rules)
