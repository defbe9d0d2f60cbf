from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlmodel import Session

from zonecup.database import get_session
from zonecup.services.operation import OperationResult
from zonecup.services.rules_config import RulesConfig, RulesConfigError, TiebreakerRule
from zonecup.services.rules_store import get_or_create_rules, rules_config_from_row, update_rules_config
from zonecup.utils.operation_http import raise_for_failure

router = APIRouter()


class RulesResponse(BaseModel):
    points_for_win: int
    points_for_draw: int
    points_for_loss: int
    round_robin_type: str
    tiebreakers: List[TiebreakerRule]
    stage: str
    groups_seeded: bool
    groups_seeded_at: Optional[datetime] = None


def _rules_response(session: Session) -> RulesResponse:
    rules = get_or_create_rules(session)
    try:
        config = rules_config_from_row(rules)
    except RulesConfigError as e:
        raise_for_failure(
            OperationResult(success=False, message=f"Stored tournament rules are invalid: {e}", code="invalid_config")
        )
    return RulesResponse(
        points_for_win=config.points_for_win,
        points_for_draw=config.points_for_draw,
        points_for_loss=config.points_for_loss,
        round_robin_type=config.round_robin_type,
        tiebreakers=config.tiebreakers,
        stage=rules.stage,
        groups_seeded=rules.groups_seeded,
        groups_seeded_at=rules.groups_seeded_at,
    )


@router.get("/rules", response_model=RulesResponse)
def get_rules(session: Session = Depends(get_session)):
    """Current tournament rules (defaults are created on first read)"""
    response = _rules_response(session)
    session.commit()
    return response


@router.put("/rules", response_model=RulesResponse)
def put_rules(config: RulesConfig, session: Session = Depends(get_session)):
    """
    Replace the tournament rules.

    Body accepts snake_case or camelCase keys. Invalid configurations are
    rejected with 422; edits while the group stage is seeded with 409.
    """
    raise_for_failure(update_rules_config(session, config))
    return _rules_response(session)
