"""
Team API Routes
Teams are owned by club management; this surface only registers and lists them.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, field_validator
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from zonecup.database import get_session
from zonecup.models.team import Team

router = APIRouter()


class TeamCreateRequest(BaseModel):
    id: Optional[str] = None
    name: str
    logo_url: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("name cannot be empty")
        return v.strip()


class TeamResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    logo_url: Optional[str] = None
    created_at: datetime


@router.get("/teams", response_model=List[TeamResponse])
def list_teams(session: Session = Depends(get_session)):
    """List all teams ordered by name"""
    return session.exec(select(Team).order_by(Team.name, Team.id)).all()


@router.post("/teams", response_model=TeamResponse, status_code=201)
def create_team(request: TeamCreateRequest, session: Session = Depends(get_session)):
    """Register a team. (name) must be unique."""
    data = request.model_dump(exclude_none=True)
    team = Team(**data)

    try:
        session.add(team)
        session.commit()
    except IntegrityError:
        session.rollback()
        raise HTTPException(status_code=409, detail=f"Team '{request.name}' already exists")

    session.refresh(team)
    return team
