"""
Group-stage match API Routes
Listing and result entry. Fixtures themselves are only created by seeding.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field
from sqlmodel import Session, select

from zonecup.database import get_session
from zonecup.models.match import MATCH_STATUSES, Match
from zonecup.services.match_results import record_match_result
from zonecup.utils.operation_http import raise_for_failure

router = APIRouter()


class MatchResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    zone_id: Optional[str] = None
    zone_name: Optional[str] = None
    round_name: Optional[str] = None
    matchday: Optional[int] = None
    team1_id: str
    team2_id: str
    status: str
    score1: Optional[int] = None
    score2: Optional[int] = None
    date: Optional[datetime] = None


class MatchResultUpdate(BaseModel):
    status: Optional[str] = None
    score1: Optional[int] = Field(None, ge=0)
    score2: Optional[int] = Field(None, ge=0)
    date: Optional[datetime] = None


@router.get("/matches", response_model=List[MatchResponse])
def list_matches(
    zone_id: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    session: Session = Depends(get_session),
):
    """Group-stage matches ordered by zone, matchday, id"""
    if status is not None and status not in MATCH_STATUSES:
        raise HTTPException(status_code=400, detail=f"Invalid status. Expected one of: {', '.join(MATCH_STATUSES)}")

    query = select(Match)
    if zone_id is not None:
        query = query.where(Match.zone_id == zone_id)
    if status is not None:
        query = query.where(Match.status == status)
    return session.exec(query.order_by(Match.zone_id, Match.matchday, Match.id)).all()


@router.patch("/matches/{match_id}", response_model=MatchResponse)
def update_match(match_id: int, request: MatchResultUpdate, session: Session = Depends(get_session)):
    """Update status, scores or date. Completing a match requires both scores."""
    raise_for_failure(
        record_match_result(
            session,
            match_id,
            status=request.status,
            score1=request.score1,
            score2=request.score2,
            date=request.date,
        )
    )
    return session.get(Match, match_id)
