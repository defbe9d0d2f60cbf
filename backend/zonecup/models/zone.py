from datetime import datetime
from typing import List

from sqlalchemy import JSON
from sqlmodel import Column, Field, SQLModel


class Zone(SQLModel, table=True):
    id: str = Field(primary_key=True)  # "zona-a", "zona-b", ...
    name: str  # "Zona A", "Zona B", ...
    # Roster order is kept: a full-zone swap picks the first listed team.
    # Always assign a new list; in-place mutation is not tracked.
    team_ids: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow, sa_column_kwargs={"onupdate": datetime.utcnow})
