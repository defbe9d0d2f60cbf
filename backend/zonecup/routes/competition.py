"""Public read-only view of the whole competition."""

from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlmodel import Session

from zonecup.database import get_session
from zonecup.services.competition import get_competition

router = APIRouter()


@router.get("/competition")
def competition(session: Session = Depends(get_session)) -> Dict[str, Any]:
    """Zones with rosters and live standings, plus the playoff bracket"""
    view = get_competition(session)
    session.commit()
    return view
