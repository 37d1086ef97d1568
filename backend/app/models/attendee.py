from sqlalchemy import Column, String, Integer, DateTime, ForeignKey
from app.db.base import Base, BaseModel

class EventAttendee(Base, BaseModel):
    __tablename__ = "event_attendees"

    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)

    # Soft delete marker: rows with a value here are hidden everywhere
    deleted_at = Column(DateTime, nullable=True)

    def __repr__(self):
        return f"<EventAttendee {self.first_name} {self.last_name} (event {self.event_id})>"
