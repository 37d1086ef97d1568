from sqlalchemy import Column, String, Integer, DateTime
from app.db.base import Base, BaseModel

class Event(Base, BaseModel):
    __tablename__ = "events"

    name = Column(String, nullable=False)
    start_at = Column(DateTime, nullable=True)  # stored as UTC, no zone
    user_id = Column(Integer, nullable=False, index=True)  # host account

    def __repr__(self):
        return f"<Event {self.id} {self.name!r}>"
