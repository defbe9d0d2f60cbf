from datetime import datetime
from typing import Optional
from uuid import uuid4

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, SQLModel


def _new_team_id() -> str:
    return uuid4().hex


class Team(SQLModel, table=True):
    __table_args__ = (SAUniqueConstraint("name", name="uq_team_name"),)

    # Opaque, stable identifier owned by the club-management side
    id: str = Field(default_factory=_new_team_id, primary_key=True)
    name: str
    logo_url: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=datetime.utcnow)
