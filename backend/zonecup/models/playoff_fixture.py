from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

STATUS_PENDING_TEAMS = "pending_teams"


class PlayoffFixture(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    zone_id: str = Field(foreign_key="zone.id", index=True)
    round: str  # "Semifinal 1" | "Semifinal 1 - Vuelta" | ... | "Final - Vuelta"
    match_label: str
    bracket_order: int = Field(default=0)  # Display order within the zone bracket

    # Null until determined (Final legs)
    team1_id: Optional[str] = Field(default=None, foreign_key="team.id")
    team2_id: Optional[str] = Field(default=None, foreign_key="team.id")

    is_second_leg: bool = Field(default=False)
    status: str = Field(default=STATUS_PENDING_TEAMS)
    score1: Optional[int] = Field(default=None)
    score2: Optional[int] = Field(default=None)
    date: Optional[datetime] = Field(default=None)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow, sa_column_kwargs={"onupdate": datetime.utcnow})
