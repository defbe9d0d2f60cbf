"""
Zone (group) API Routes
Assignment, seeding and standings for the group stage.
"""

import random
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlmodel import Session

from zonecup.database import get_session
from zonecup.services.competition import get_zone_standings
from zonecup.services.group_assignment import auto_assign_teams, ensure_zones, move_team, reset_groups
from zonecup.services.group_seeding import seed_group_stage
from zonecup.services.rules_store import get_or_create_rules
from zonecup.services.zone_queries import load_teams
from zonecup.utils.operation_http import OperationResponse, raise_for_failure

router = APIRouter()


# ============================================================================
# Request/Response Models
# ============================================================================


class ZoneTeam(BaseModel):
    id: str
    name: str


class ZoneResponse(BaseModel):
    id: str
    name: str
    team_ids: List[str]
    teams: List[ZoneTeam]
    locked: bool


class MoveTeamRequest(BaseModel):
    team_id: str
    source_zone_id: str
    target_zone_id: str
    swap_with_team_id: Optional[str] = None


class StandingResponse(BaseModel):
    team_id: str
    team_name: str
    position: int
    points: int
    played: int
    won: int
    drawn: int
    lost: int
    goals_for: int
    goals_against: int
    goal_difference: int


# ============================================================================
# Endpoints
# ============================================================================


@router.get("/zones", response_model=List[ZoneResponse])
def list_zones(session: Session = Depends(get_session)):
    """All zones ordered by name, with their rosters. Missing zones are created."""
    zones = ensure_zones(session)
    locked = get_or_create_rules(session).groups_seeded
    session.commit()
    teams_by_id = load_teams(session, [tid for z in zones for tid in z.team_ids or []])

    return [
        ZoneResponse(
            id=zone.id,
            name=zone.name,
            team_ids=list(zone.team_ids or []),
            teams=[ZoneTeam(id=tid, name=teams_by_id[tid].name) for tid in zone.team_ids or [] if tid in teams_by_id],
            locked=locked,
        )
        for zone in zones
    ]


@router.post("/zones/auto-assign", response_model=OperationResponse)
def auto_assign(
    seed: Optional[int] = Query(None, description="Random seed for a reproducible draw"),
    session: Session = Depends(get_session),
):
    """Randomly reassign every team to zones (rejected once seeded)"""
    rng = random.Random(seed) if seed is not None else None
    return raise_for_failure(auto_assign_teams(session, rng))


@router.post("/zones/move", response_model=OperationResponse)
def move(request: MoveTeamRequest, session: Session = Depends(get_session)):
    """Move a team to another zone, swapping when the target zone is full"""
    return raise_for_failure(
        move_team(
            session,
            team_id=request.team_id,
            source_zone_id=request.source_zone_id,
            target_zone_id=request.target_zone_id,
            swap_with_team_id=request.swap_with_team_id,
        )
    )


@router.post("/zones/reset", response_model=OperationResponse)
def reset(session: Session = Depends(get_session)):
    """Clear every zone and its group fixtures; unlocks seeding"""
    return raise_for_failure(reset_groups(session))


@router.post("/zones/seed", response_model=OperationResponse)
def seed(session: Session = Depends(get_session)):
    """Lock the zones and generate the group-stage fixtures"""
    return raise_for_failure(seed_group_stage(session))


@router.get("/zones/{zone_id}/standings", response_model=List[StandingResponse])
def standings(zone_id: str, session: Session = Depends(get_session)):
    """Standings computed from the zone's completed matches"""
    entries = get_zone_standings(session, zone_id)
    if entries is None:
        raise HTTPException(status_code=404, detail="Zone not found")
    return [StandingResponse(**vars(entry)) for entry in entries]
