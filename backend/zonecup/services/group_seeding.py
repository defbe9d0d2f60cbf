"""
Group-stage seeding: lock the zones and generate their round-robin fixtures.

Preconditions:
- seed state is unseeded
- at least MIN_ZONES_FOR_SEED zones hold exactly TEAMS_PER_ZONE teams

Only complete zones are seeded; incomplete zones are skipped. Deleting old
group fixtures, writing the new ones and flipping the seed state happen in a
single commit.
"""

import logging
from typing import List

from sqlmodel import Session

from zonecup.models.match import STATUS_PENDING_DATE, Match
from zonecup.models.tournament_rules import SeedingStage
from zonecup.models.zone import Zone
from zonecup.services.group_assignment import delete_group_fixtures, ensure_zones
from zonecup.services.operation import OperationResult, PreconditionFailedError, TournamentOperationError
from zonecup.services.round_robin import generate_round_robin
from zonecup.services.rules_config import RulesConfigError
from zonecup.services.rules_store import get_or_create_rules, rules_config_from_row, transition_stage
from zonecup.services.zone_rules import MIN_ZONES_FOR_SEED, TEAMS_PER_ZONE

logger = logging.getLogger(__name__)


def seedable_zones(zones: List[Zone]) -> List[Zone]:
    return [z for z in zones if len(z.team_ids or []) == TEAMS_PER_ZONE]


def build_zone_fixtures(zone: Zone, round_robin_type: str) -> List[Match]:
    """Unsaved group fixtures for one zone."""
    return [
        Match(
            zone_id=zone.id,
            zone_name=zone.name,
            team1_id=pairing.team1_id,
            team2_id=pairing.team2_id,
            matchday=pairing.matchday,
            status=STATUS_PENDING_DATE,
        )
        for pairing in generate_round_robin(list(zone.team_ids), round_robin_type)
    ]


def seed_group_stage(session: Session) -> OperationResult:
    """
    Generate the group-stage fixtures for every complete zone and lock the zones.

    Returns:
        OperationResult with data:
        - matches_generated: number of fixtures written
        - zones_seeded: ids of the seeded zones
        - zones_skipped: ids of zones that were not complete
    """
    ready: List[Zone] = []
    try:
        rules = get_or_create_rules(session)
        if rules.groups_seeded:
            raise PreconditionFailedError(
                "The group stage is already seeded. Reset the groups before generating fixtures again."
            )
        config = rules_config_from_row(rules)

        zones = ensure_zones(session, commit=False)
        ready = seedable_zones(zones)
        if len(ready) < MIN_ZONES_FOR_SEED:
            raise PreconditionFailedError(
                f"At least {MIN_ZONES_FOR_SEED} zones need exactly {TEAMS_PER_ZONE} teams to seed the group stage "
                f"({len(ready)} ready)."
            )

        deleted = delete_group_fixtures(session)

        generated = 0
        for zone in ready:
            fixtures = build_zone_fixtures(zone, config.round_robin_type)
            session.add_all(fixtures)
            generated += len(fixtures)

        transition_stage(rules, SeedingStage.seeded)
        session.add(rules)
        session.commit()
    except RulesConfigError as e:
        session.rollback()
        return OperationResult(success=False, message=f"Stored tournament rules are invalid: {e}", code="invalid_config")
    except TournamentOperationError as e:
        session.rollback()
        return OperationResult.failed(e, ready_zone_count=len(ready))

    ready_ids = [z.id for z in ready]
    skipped_ids = [z.id for z in zones if z.id not in ready_ids]
    if skipped_ids:
        logger.warning("Seeding skipped incomplete zone(s): %s", ", ".join(skipped_ids))
    logger.info(
        "Seeded %d zone(s) with %d fixture(s) (%s); replaced %d old fixture(s)",
        len(ready_ids),
        generated,
        config.round_robin_type,
        deleted,
    )

    return OperationResult.ok(
        f"Group stage seeded: {generated} matches generated for {len(ready_ids)} zone(s).",
        matches_generated=generated,
        zones_seeded=ready_ids,
        zones_skipped=skipped_ids,
    )
