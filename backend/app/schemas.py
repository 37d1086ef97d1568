from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Any, Dict
from datetime import datetime

# ---------------------------------------------------------------------------
# Store records (what the repository hands back)
# ---------------------------------------------------------------------------

class EventSummary(BaseModel):
    id: int
    name: str
    start_at: Optional[datetime] = None
    attendee_count: int = 0
    start_display: str = "-"  # start_at formatted in the event time zone

    model_config = ConfigDict(from_attributes=True)

class RawAttendeeRow(BaseModel):
    """One attendee joined to at most one seat assignment"""
    attendee_id: int
    event_id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    guest_id: Optional[int] = None
    seat_id: Optional[str] = None
    seat_obj: Optional[Any] = None  # JSONB owned elsewhere; shape is not guaranteed
    checkin_timestamp: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    def without_seat(self) -> "RawAttendeeRow":
        return self.model_copy(
            update={"guest_id": None, "seat_id": None, "seat_obj": None, "checkin_timestamp": None}
        )

class FetchResult(BaseModel):
    rows: List[RawAttendeeRow] = []
    seat_assignments_included: bool = True
    strategy: Optional[str] = None  # which fetch strategy produced the rows

# ---------------------------------------------------------------------------
# API payloads
# ---------------------------------------------------------------------------

class AttendeeRow(BaseModel):
    event_id: Optional[int] = Field(default=None, alias="eventId")
    event_start_time: str = Field(default="-", alias="eventStartTime")
    attendee_name: str = Field(alias="attendeeName")
    seat_info: Optional[str] = Field(default=None, alias="seatInfo")
    validated_at: Optional[str] = Field(default=None, alias="validatedAt")

    model_config = ConfigDict(populate_by_name=True)

class AttendeeListMetadata(BaseModel):
    host_user_id: int = Field(alias="hostUserId")
    total: int
    # Left out entirely when no events qualified
    seat_assignments_included: Optional[bool] = Field(default=None, alias="seatAssignmentsIncluded")

    model_config = ConfigDict(populate_by_name=True)

class AttendeeListResponse(BaseModel):
    results: List[AttendeeRow]
    metadata: AttendeeListMetadata

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True) | {
            "metadata": self.metadata.model_dump(by_alias=True, exclude_none=True)
        }

class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None

# ---------------------------------------------------------------------------
# Presentation
# ---------------------------------------------------------------------------

class EventGroup(BaseModel):
    event_start_time: str
    event_ids: List[int] = []
    attendees: List[AttendeeRow]
