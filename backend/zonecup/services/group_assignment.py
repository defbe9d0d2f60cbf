"""
Team -> zone assignment before the group stage is seeded.

Operations:
1. ensure_zones: create the fixed zone rows if missing
2. auto_assign_teams: random full reassignment (seedable Fisher-Yates shuffle)
3. move_team: manual relocation, swapping when the target zone is full
4. reset_groups: clear rosters and group fixtures, unlock seeding

Every mutating operation stages all zone writes in one session and commits
once; a failure rolls back and is returned as an OperationResult.
"""

import logging
import random
from typing import Dict, List, Optional

from sqlmodel import Session, col, select

from zonecup.models.match import Match
from zonecup.models.team import Team
from zonecup.models.tournament_rules import SeedingStage
from zonecup.models.zone import Zone
from zonecup.services.operation import (
    InvalidRequestError,
    NotFoundError,
    OperationResult,
    PreconditionFailedError,
    TournamentOperationError,
)
from zonecup.services.rules_store import get_or_create_rules, transition_stage
from zonecup.services.zone_rules import TEAMS_PER_ZONE, default_zone_layout

logger = logging.getLogger(__name__)


def ensure_zones(session: Session, commit: bool = True) -> List[Zone]:
    """
    Create any missing zone of the fixed layout and return all zones ordered by name.
    Existing rosters are left untouched.

    Args:
        commit: If False, only flush so the caller's transaction owns the new rows
    """
    existing = {z.id for z in session.exec(select(Zone)).all()}
    created = 0
    for zone_id, zone_name in default_zone_layout():
        if zone_id not in existing:
            session.add(Zone(id=zone_id, name=zone_name, team_ids=[]))
            created += 1
    if created:
        if commit:
            session.commit()
        else:
            session.flush()
        logger.info("Initialized %d zone(s)", created)

    return list(session.exec(select(Zone).order_by(Zone.name)).all())


def _require_unseeded(session: Session, action: str) -> None:
    rules = get_or_create_rules(session)
    if rules.groups_seeded:
        raise PreconditionFailedError(f"Cannot {action}: zones are locked because the group stage is already seeded.")


def shuffle_teams(teams: List[Team], rng: Optional[random.Random] = None) -> List[Team]:
    """Uniform Fisher-Yates shuffle of a copy of `teams`."""
    rng = rng or random.Random()
    shuffled = list(teams)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def auto_assign_teams(session: Session, rng: Optional[random.Random] = None) -> OperationResult:
    """
    Shuffle every team and deal them into the zones in order, filling each zone
    to TEAMS_PER_ZONE before the next. Overwrites all current rosters; teams
    beyond total capacity stay unassigned.

    Args:
        rng: Source of randomness; pass a seeded random.Random for reproducible draws
    """
    try:
        _require_unseeded(session, "auto-assign teams")

        teams = session.exec(select(Team).order_by(Team.name, Team.id)).all()
        if not teams:
            raise InvalidRequestError("There are no teams to assign. Add teams first.")

        zones = ensure_zones(session, commit=False)
        shuffled = shuffle_teams(list(teams), rng)

        assignments: Dict[str, List[str]] = {}
        for index, zone in enumerate(zones):
            start = index * TEAMS_PER_ZONE
            team_ids = [t.id for t in shuffled[start : start + TEAMS_PER_ZONE]]
            zone.team_ids = team_ids
            session.add(zone)
            assignments[zone.id] = team_ids

        unassigned = [t.id for t in shuffled[len(zones) * TEAMS_PER_ZONE :]]
        session.commit()
    except TournamentOperationError as e:
        session.rollback()
        return OperationResult.failed(e)

    assigned_count = sum(len(ids) for ids in assignments.values())
    logger.info("Auto-assigned %d team(s) to zones, %d left unassigned", assigned_count, len(unassigned))

    message = f"Assigned {assigned_count} team(s) to zones."
    if unassigned:
        message += f" {len(unassigned)} team(s) did not fit and remain unassigned."
    return OperationResult.ok(message, assignments=assignments, unassigned_team_ids=unassigned)


def move_team(
    session: Session,
    team_id: str,
    source_zone_id: str,
    target_zone_id: str,
    swap_with_team_id: Optional[str] = None,
) -> OperationResult:
    """
    Move a team between zones.

    If the target has room the team is simply relocated. If the target is full,
    the team swaps places with `swap_with_team_id` when that team is in the
    target, otherwise with the first team on the target roster.

    Both zones are written in the same commit.
    """
    try:
        _require_unseeded(session, "move teams")

        if source_zone_id == target_zone_id:
            raise InvalidRequestError("Source and target zone are the same.")

        source = session.get(Zone, source_zone_id)
        if source is None:
            raise NotFoundError(f"Zone '{source_zone_id}' not found.")
        target = session.get(Zone, target_zone_id)
        if target is None:
            raise NotFoundError(f"Zone '{target_zone_id}' not found.")

        source_ids = list(source.team_ids or [])
        target_ids = list(target.team_ids or [])

        if team_id not in source_ids:
            raise NotFoundError(f"Team '{team_id}' is not in zone '{source.name}'.")
        if team_id in target_ids:
            raise InvalidRequestError(f"Team '{team_id}' is already in zone '{target.name}'.")

        swapped_team_id: Optional[str] = None
        if len(target_ids) < TEAMS_PER_ZONE:
            source_ids.remove(team_id)
            target_ids.append(team_id)
        else:
            swapped_team_id = swap_with_team_id if swap_with_team_id in target_ids else target_ids[0]
            # Each team takes the other's roster slot
            source_ids[source_ids.index(team_id)] = swapped_team_id
            target_ids[target_ids.index(swapped_team_id)] = team_id

        source.team_ids = source_ids
        target.team_ids = target_ids
        session.add(source)
        session.add(target)
        session.commit()
    except TournamentOperationError as e:
        session.rollback()
        return OperationResult.failed(e)

    if swapped_team_id:
        logger.info("Swapped team %s (%s) with %s (%s)", team_id, source_zone_id, swapped_team_id, target_zone_id)
        message = f"Team swapped with '{swapped_team_id}' between {source_zone_id} and {target_zone_id}."
    else:
        logger.info("Moved team %s from %s to %s", team_id, source_zone_id, target_zone_id)
        message = f"Team moved from {source_zone_id} to {target_zone_id}."
    return OperationResult.ok(
        message,
        team_id=team_id,
        swapped_team_id=swapped_team_id,
        source_zone_id=source_zone_id,
        target_zone_id=target_zone_id,
    )


def group_fixture_filter():
    """Group-stage fixtures: linked to a zone and without a round label."""
    return col(Match.zone_id).is_not(None), col(Match.round_name).is_(None)


def delete_group_fixtures(session: Session) -> int:
    """Stage deletion of every group-stage fixture. Does not commit."""
    matches = session.exec(select(Match).where(*group_fixture_filter())).all()
    for match in matches:
        session.delete(match)
    return len(matches)


def reset_groups(session: Session) -> OperationResult:
    """
    Empty every zone, delete all group-stage fixtures and unlock seeding.
    Allowed while seeded; playoff fixtures are not touched.
    """
    try:
        zones = ensure_zones(session, commit=False)
        for zone in zones:
            zone.team_ids = []
            session.add(zone)

        deleted = delete_group_fixtures(session)

        rules = get_or_create_rules(session)
        if rules.groups_seeded:
            transition_stage(rules, SeedingStage.unseeded)
            session.add(rules)

        session.commit()
    except TournamentOperationError as e:
        session.rollback()
        return OperationResult.failed(e)

    logger.info("Reset %d zone(s) and deleted %d group fixture(s)", len(zones), deleted)
    return OperationResult.ok(
        f"Zones cleared, {deleted} group fixture(s) deleted and seeding unlocked.",
        deleted_matches=deleted,
    )
