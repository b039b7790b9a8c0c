from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime
from enum import Enum


class AttendanceStatus(str, Enum):
    attending = "attending"
    notAttending = "notAttending"


class EventBase(BaseModel):
    title: str = Field(min_length=1)
    description: str = ""
    imageUrl: str = ""
    date: datetime
    city: str
    category: str
    price: Optional[float] = Field(default=None, ge=0)


class EventCreate(EventBase):
    pass


class EventUpdate(BaseModel):
    """Partial update; only fields that are set get applied.

    Counters, id and creator are not part of the schema, so any such keys in
    the payload are dropped.
    """

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    description: Optional[str] = None
    imageUrl: Optional[str] = None
    date: Optional[datetime] = None
    city: Optional[str] = None
    category: Optional[str] = None
    price: Optional[float] = None


class EventOut(EventBase):
    id: str
    likes: int = Field(default=0, ge=0)
    attendingCount: int = Field(default=0, ge=0)
    createdBy: Optional[str] = None


class EventView(EventOut):
    """An event as seen by one (possibly anonymous) user."""

    userLiked: bool = False
    userStatus: Optional[AttendanceStatus] = None


class AttendanceUpdate(BaseModel):
    status: Optional[AttendanceStatus] = None


class InteractionRecord(BaseModel):
    userId: str
    eventId: str
    liked: bool = False
    status: Optional[AttendanceStatus] = None
