"""
Competition view: zones with their teams and live-computed standings, plus the
playoff bracket. Read-only apart from initializing missing zones.
"""

import logging
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from sqlmodel import Session

from zonecup.models.zone import Zone
from zonecup.services.group_assignment import ensure_zones
from zonecup.services.playoff_bracket import list_playoff_fixtures
from zonecup.services.rules_config import RulesConfig, RulesConfigError
from zonecup.services.rules_store import get_or_create_rules, rules_config_from_row
from zonecup.services.standings import StandingEntry
from zonecup.services.zone_queries import load_teams, zone_standings

logger = logging.getLogger(__name__)


def _rules_or_default(session: Session) -> Optional[RulesConfig]:
    """Stored rules, or None (standings fall back to defaults) when they cannot be read."""
    try:
        return rules_config_from_row(get_or_create_rules(session))
    except RulesConfigError as e:
        logger.warning("Stored tournament rules are invalid, using defaults for standings: %s", e)
        return None


def get_zone_standings(session: Session, zone_id: str) -> Optional[List[StandingEntry]]:
    """Standings of one zone, or None if the zone does not exist."""
    ensure_zones(session)
    zone = session.get(Zone, zone_id)
    if zone is None:
        return None
    return zone_standings(session, zone, _rules_or_default(session))


def get_competition(session: Session) -> Dict[str, Any]:
    zones = ensure_zones(session)
    rules = _rules_or_default(session)
    teams_by_id = load_teams(session, [tid for z in zones for tid in z.team_ids or []])
    stage = get_or_create_rules(session)

    groups = []
    for zone in zones:
        groups.append(
            {
                "zone_id": zone.id,
                "name": zone.name,
                "teams": [
                    {"id": tid, "name": teams_by_id[tid].name, "logo_url": teams_by_id[tid].logo_url}
                    for tid in zone.team_ids or []
                    if tid in teams_by_id
                ],
                "standings": [asdict(e) for e in zone_standings(session, zone, rules, teams_by_id)],
            }
        )

    return {
        "groups_seeded": stage.groups_seeded,
        "groups": groups,
        "playoff_fixtures": list_playoff_fixtures(session),
    }
