from sqlalchemy import Column, String, Boolean, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from app.core.database import Base
import uuid


class Participant(Base):
    __tablename__ = "participants"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    trip_id = Column(Uuid, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    email = Column(String, nullable=False)
    is_confirmed = Column(Boolean, nullable=False, default=False)

    # An address can be invited to a trip only once
    __table_args__ = (
        UniqueConstraint('trip_id', 'email', name='uq_trip_participant_email'),
    )

    trip = relationship("Trip", back_populates="participants")
