from sqlalchemy import Column, String, Integer, DateTime, ForeignKey
from sqlalchemy.dialects.postgresql import JSONB
from app.db.base import Base, BaseModel

# Seat assignment / check-in record for an attendee
class AttendeeGuest(Base, BaseModel):
    __tablename__ = "attendee_guests"

    event_attendee_id = Column(Integer, ForeignKey("event_attendees.id"), nullable=False, index=True)
    seat_id = Column(String, nullable=True)
    seat_obj = Column(JSONB, nullable=True)  # {"components": [{"key", "label", "value"}]}
    checkin_timestamp = Column(DateTime, nullable=True)

    def __repr__(self):
        return f"<AttendeeGuest {self.id} seat={self.seat_id!r}>"
