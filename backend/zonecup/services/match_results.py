"""
Result entry for group and playoff fixtures.

Only status, scores and date change here; teams and zone/round tags are fixed
when fixtures are generated. Scores are kept only on completed fixtures.
"""

import logging
from datetime import datetime
from typing import Optional, Tuple

from sqlmodel import Session

from zonecup.models.match import MATCH_STATUSES, STATUS_COMPLETED, Match
from zonecup.models.playoff_fixture import STATUS_PENDING_TEAMS, PlayoffFixture
from zonecup.services.operation import InvalidRequestError, NotFoundError, OperationResult, TournamentOperationError

logger = logging.getLogger(__name__)

PLAYOFF_STATUSES = (STATUS_PENDING_TEAMS,) + MATCH_STATUSES


def _resolve_scores(
    status: str,
    score1: Optional[int],
    score2: Optional[int],
    current: Tuple[Optional[int], Optional[int]],
) -> Tuple[Optional[int], Optional[int]]:
    if status != STATUS_COMPLETED:
        return None, None

    s1 = score1 if score1 is not None else current[0]
    s2 = score2 if score2 is not None else current[1]
    if s1 is None or s2 is None:
        raise InvalidRequestError("Both scores are required to complete a match.")
    if s1 < 0 or s2 < 0:
        raise InvalidRequestError("Scores must be 0 or greater.")
    return s1, s2


def record_match_result(
    session: Session,
    match_id: int,
    status: Optional[str] = None,
    score1: Optional[int] = None,
    score2: Optional[int] = None,
    date: Optional[datetime] = None,
) -> OperationResult:
    """Update status / scores / date of a group-stage match."""
    try:
        match = session.get(Match, match_id)
        if match is None:
            raise NotFoundError(f"Match {match_id} not found.")

        new_status = status or match.status
        if new_status not in MATCH_STATUSES:
            raise InvalidRequestError(f"Invalid status '{new_status}'. Expected one of: {', '.join(MATCH_STATUSES)}")

        match.score1, match.score2 = _resolve_scores(new_status, score1, score2, (match.score1, match.score2))
        match.status = new_status
        if date is not None:
            match.date = date
        match.updated_at = datetime.utcnow()
        session.add(match)
        session.commit()
    except TournamentOperationError as e:
        session.rollback()
        return OperationResult.failed(e)

    logger.info("Match %d updated: status=%s score=%s-%s", match_id, match.status, match.score1, match.score2)
    return OperationResult.ok(f"Match {match_id} updated.", match_id=match_id)


def record_playoff_result(
    session: Session,
    fixture_id: int,
    status: Optional[str] = None,
    score1: Optional[int] = None,
    score2: Optional[int] = None,
    date: Optional[datetime] = None,
) -> OperationResult:
    """Update status / scores / date of a playoff fixture. Undetermined sides stay pending_teams."""
    try:
        fixture = session.get(PlayoffFixture, fixture_id)
        if fixture is None:
            raise NotFoundError(f"Playoff fixture {fixture_id} not found.")

        new_status = status or fixture.status
        if new_status not in PLAYOFF_STATUSES:
            raise InvalidRequestError(f"Invalid status '{new_status}'. Expected one of: {', '.join(PLAYOFF_STATUSES)}")
        if (fixture.team1_id is None or fixture.team2_id is None) and new_status != STATUS_PENDING_TEAMS:
            raise InvalidRequestError("Both teams must be determined before the fixture can be scheduled or played.")

        fixture.score1, fixture.score2 = _resolve_scores(new_status, score1, score2, (fixture.score1, fixture.score2))
        fixture.status = new_status
        if date is not None:
            fixture.date = date
        fixture.updated_at = datetime.utcnow()
        session.add(fixture)
        session.commit()
    except TournamentOperationError as e:
        session.rollback()
        return OperationResult.failed(e)

    logger.info("Playoff fixture %d updated: status=%s", fixture_id, fixture.status)
    return OperationResult.ok(f"Playoff fixture {fixture_id} updated.", fixture_id=fixture_id)
