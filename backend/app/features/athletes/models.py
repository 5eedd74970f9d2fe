"""
Athlete roster models.
"""

from sqlalchemy import Column, String

from app.models.base import Base


class Athlete(Base):
    """
    Roster entry mapping a display name to a team.

    `name` must match the "First Last" display name built at ingestion,
    otherwise the athlete's activities are not attributed to any team.
    """

    __tablename__ = "athletes"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False, index=True)
    team = Column(String(32), nullable=False)  # bulls / sharks
    event = Column(String(255), nullable=True)

    def __repr__(self):
        return f"<Athlete {self.name} ({self.team})>"
