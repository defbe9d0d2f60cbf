from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

# Fixture lifecycle
STATUS_PENDING_DATE = "pending_date"
STATUS_UPCOMING = "upcoming"
STATUS_LIVE = "live"
STATUS_COMPLETED = "completed"

MATCH_STATUSES = (STATUS_PENDING_DATE, STATUS_UPCOMING, STATUS_LIVE, STATUS_COMPLETED)


class Match(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    # Group-stage fixtures carry a zone and no round label.
    # Legacy playoff rows carry a round label and no zone.
    zone_id: Optional[str] = Field(default=None, foreign_key="zone.id", index=True)
    zone_name: Optional[str] = Field(default=None)
    round_name: Optional[str] = Field(default=None)
    matchday: Optional[int] = Field(default=None)

    team1_id: str = Field(foreign_key="team.id")  # home
    team2_id: str = Field(foreign_key="team.id")  # away

    status: str = Field(default=STATUS_PENDING_DATE, index=True)
    score1: Optional[int] = Field(default=None)
    score2: Optional[int] = Field(default=None)
    date: Optional[datetime] = Field(default=None)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow, sa_column_kwargs={"onupdate": datetime.utcnow})
