from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, String
from sqlmodel import Column, Field, SQLModel

RULES_ROW_ID = 1


class SeedingStage(str, Enum):
    unseeded = "unseeded"
    seeded = "seeded"


class TournamentRules(SQLModel, table=True):
    """Singleton row holding the tournament rules and the group-stage seed state."""

    id: int = Field(default=RULES_ROW_ID, primary_key=True)
    points_for_win: int = Field(default=3)
    points_for_draw: int = Field(default=1)
    points_for_loss: int = Field(default=0)
    round_robin_type: str = Field(default="one-way")
    tiebreakers: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    # Only changed through services.rules_store.transition_stage
    stage: SeedingStage = Field(default=SeedingStage.unseeded, sa_column=Column(String, nullable=False))
    groups_seeded_at: Optional[datetime] = Field(default=None)

    updated_at: datetime = Field(default_factory=datetime.utcnow, sa_column_kwargs={"onupdate": datetime.utcnow})

    @property
    def groups_seeded(self) -> bool:
        return self.stage == SeedingStage.seeded
