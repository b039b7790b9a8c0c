from .user import UserBase, UserCreate, LoginRequest, UserOut, SessionOut
from .event import (
    AttendanceStatus,
    AttendanceUpdate,
    EventBase,
    EventCreate,
    EventOut,
    EventUpdate,
    EventView,
    InteractionRecord,
)

__all__ = [
    "UserBase",
    "UserCreate",
    "LoginRequest",
    "UserOut",
    "SessionOut",
    "AttendanceStatus",
    "AttendanceUpdate",
    "EventBase",
    "EventCreate",
    "EventOut",
    "EventUpdate",
    "EventView",
    "InteractionRecord",
]
