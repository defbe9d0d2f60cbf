"""
Playoff API Routes
Bracket generation from current standings, listing, clearing and result entry.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlmodel import Session

from zonecup.database import get_session
from zonecup.services.match_results import record_playoff_result
from zonecup.services.playoff_bracket import clear_playoff_fixtures, generate_playoff_brackets, list_playoff_fixtures
from zonecup.utils.operation_http import OperationResponse, raise_for_failure

router = APIRouter()


class PlayoffFixtureResponse(BaseModel):
    id: int
    zone_id: str
    round: str
    match_label: str
    team1_id: Optional[str] = None
    team2_id: Optional[str] = None
    team1_name: Optional[str] = None
    team2_name: Optional[str] = None
    is_second_leg: bool
    status: str
    score1: Optional[int] = None
    score2: Optional[int] = None
    date: Optional[datetime] = None


class PlayoffResultUpdate(BaseModel):
    status: Optional[str] = None
    score1: Optional[int] = Field(None, ge=0)
    score2: Optional[int] = Field(None, ge=0)
    date: Optional[datetime] = None


@router.post("/playoffs/generate", response_model=OperationResponse)
def generate(session: Session = Depends(get_session)):
    """Replace every zone bracket with one built from current standings"""
    return raise_for_failure(generate_playoff_brackets(session))


@router.get("/playoffs", response_model=List[PlayoffFixtureResponse])
def list_fixtures(session: Session = Depends(get_session)):
    return list_playoff_fixtures(session)


@router.delete("/playoffs", response_model=OperationResponse)
def clear(session: Session = Depends(get_session)):
    return raise_for_failure(clear_playoff_fixtures(session))


@router.patch("/playoffs/{fixture_id}", response_model=PlayoffFixtureResponse)
def update_fixture(fixture_id: int, request: PlayoffResultUpdate, session: Session = Depends(get_session)):
    """Update status, scores or date of a playoff fixture"""
    raise_for_failure(
        record_playoff_result(
            session,
            fixture_id,
            status=request.status,
            score1=request.score1,
            score2=request.score2,
            date=request.date,
        )
    )
    return next(f for f in list_playoff_fixtures(session) if f["id"] == fixture_id)
