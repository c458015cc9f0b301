from sqlalchemy import Column, String, Boolean, DateTime, CheckConstraint, Uuid, func
from sqlalchemy.orm import relationship
from app.core.database import Base
import uuid

class Trip(Base):
    __tablename__ = "trips"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    destination = Column(String, nullable=False)
    starts_at = Column(DateTime, nullable=False)
    ends_at = Column(DateTime, nullable=False)
    owner_name = Column(String, nullable=False)
    owner_email = Column(String, nullable=False)
    is_confirmed = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        CheckConstraint("starts_at <= ends_at", name="ck_trips_dates_ordered"),
    )

    participants = relationship("Participant", back_populates="trip", cascade="all, delete")
    activities = relationship("Activity", back_populates="trip", cascade="all, delete")
    links = relationship("Link", back_populates="trip", cascade="all, delete")

    def to_dict(self):
        """Convert Trip instance to dictionary for caching"""
        return {
            "id": str(self.id),
            "destination": self.destination,
            "starts_at": self.starts_at.isoformat(),
            "ends_at": self.ends_at.isoformat(),
            "is_confirmed": self.is_confirmed,
        }
