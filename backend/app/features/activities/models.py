"""
Activity database models.
"""

from sqlalchemy import Column, String, Integer, BigInteger, Float

from app.models.base import Base, UTCDateTime


class BullSharkActivity(Base):
    """
    Club activity as stored for the challenge.

    `id` is the SHA-256 content hash built at ingestion; the unique primary
    key is what makes repeated ingestion of overlapping pages idempotent.
    `date` is when the activity was observed (the ingestion batch time),
    not when it was performed: the club feed carries no start date.
    """

    __tablename__ = "bullshark_activities"

    id = Column(String(64), primary_key=True)
    date = Column(UTCDateTime, nullable=False, index=True)

    athlete_name = Column(String(255), nullable=True)

    # Core metrics
    distance = Column(Float, nullable=True)  # meters
    moving_time = Column(BigInteger, nullable=True)  # seconds
    elapsed_time = Column(BigInteger, nullable=True)  # seconds
    sport_type = Column(String(50), nullable=True)  # Run, Ride, Walk, ...

    # Passthrough metadata
    resource_state = Column(Integer, nullable=True)
    name = Column(String(255), nullable=True)
    total_elevation_gain = Column(Float, nullable=True)
    workout_type = Column(Integer, nullable=True)
    device_name = Column(String(255), nullable=True)

    def __repr__(self):
        return f"<BullSharkActivity {self.id[:12]} {self.athlete_name} {self.sport_type} {self.distance}m>"
