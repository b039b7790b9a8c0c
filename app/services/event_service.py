import logging
import threading
import uuid
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional, Tuple, Union

from app.errors import EventNotFoundError, PermissionDeniedError, UnauthenticatedError
from app.schemas.event import (
    AttendanceStatus,
    EventCreate,
    EventOut,
    EventUpdate,
    EventView,
    InteractionRecord,
)
from app.schemas.user import UserOut

logger = logging.getLogger(__name__)

EVENT_CATEGORIES = [
    "Concerts",
    "Exhibitions",
    "Festivals",
    "Sports",
    "Education",
    "Theatre",
    "Cinema",
    "Other",
]


class EventService:
    """In-memory event catalog with per-user likes and attendance.

    The service owns both collections. Every operation runs under a single
    lock and callers only ever get copies of the stored records, so the
    counters on an event always agree with its interaction records.
    """

    def __init__(self):
        # Dicts keep insertion order, which is the listing order
        self._events: Dict[str, EventOut] = {}
        self._interactions: Dict[Tuple[str, str], InteractionRecord] = {}
        self._lock = threading.RLock()

    # --- Queries -------------------------------------------------------------

    def list_events(
        self,
        filters: Optional[Dict[str, Any]] = None,
        current_user: Optional[UserOut] = None,
    ) -> List[EventView]:
        """
        Return events matching ALL given filters, annotated with the user's state.

        Supported filter keys: city, category, fromDate, toDate, searchQuery.
        Missing or blank filters impose no constraint.
        """
        filters = filters or {}

        with self._lock:
            events = [
                self._to_view(event, current_user)
                for event in self._events.values()
                if self._matches_all_filters(event, filters)
            ]

        logger.debug("Listed %d events for filters %s", len(events), filters)
        return events

    def get_event(
        self, event_id: str, current_user: Optional[UserOut] = None
    ) -> EventView:
        with self._lock:
            return self._to_view(self._get_or_raise(event_id), current_user)

    def get_interaction(
        self, event_id: str, user_id: str
    ) -> Optional[InteractionRecord]:
        """Return a copy of the user's interaction record for an event, if any"""
        with self._lock:
            record = self._interactions.get((user_id, event_id))
            return record.model_copy() if record else None

    def list_categories(self) -> List[str]:
        return list(EVENT_CATEGORIES)

    def list_cities(self) -> List[str]:
        """Distinct cities of stored events, first spelling wins"""
        cities: Dict[str, str] = {}
        with self._lock:
            for event in self._events.values():
                city = event.city.strip()
                if city:
                    cities.setdefault(city.lower(), city)
        return sorted(cities.values(), key=str.lower)

    # --- Admin commands ------------------------------------------------------

    def create_event(
        self,
        event_data: Union[EventCreate, Dict[str, Any]],
        current_user: Optional[UserOut],
    ) -> EventOut:
        """Create an event; counters start at zero and createdBy is the admin"""
        self._require_admin(current_user, "create")

        if not isinstance(event_data, EventCreate):
            event_data = EventCreate.model_validate(event_data)

        with self._lock:
            event_id = self._new_event_id()
            event = EventOut(
                **event_data.model_dump(),
                id=event_id,
                likes=0,
                attendingCount=0,
                createdBy=current_user.id,
            )
            self._events[event_id] = event

        logger.info("Event %s created by %s", event_id, current_user.id)
        return event.model_copy()

    def update_event(
        self,
        event_id: str,
        patch: Union[EventUpdate, Dict[str, Any]],
        current_user: Optional[UserOut],
    ) -> EventOut:
        """
        Apply the fields present in the patch.

        id, likes, attendingCount and createdBy are not part of EventUpdate and
        can never be overwritten here. The merged record is validated before
        it replaces the stored one.
        """
        self._require_admin(current_user, "edit")

        if not isinstance(patch, EventUpdate):
            patch = EventUpdate.model_validate(patch)
        changes = patch.model_dump(exclude_unset=True)

        with self._lock:
            current = self._get_or_raise(event_id)
            updated = EventOut.model_validate({**current.model_dump(), **changes})
            self._events[event_id] = updated

        logger.info(
            "Event %s updated by %s (fields: %s)",
            event_id,
            current_user.id,
            ", ".join(sorted(changes)) or "none",
        )
        return updated.model_copy()

    def delete_event(
        self, event_id: str, current_user: Optional[UserOut]
    ) -> Dict[str, bool]:
        """Delete an event together with every interaction record pointing at it"""
        self._require_admin(current_user, "delete")

        with self._lock:
            self._get_or_raise(event_id)
            del self._events[event_id]

            orphaned = [key for key in self._interactions if key[1] == event_id]
            for key in orphaned:
                del self._interactions[key]

        logger.info(
            "Event %s deleted by %s (%d interaction records removed)",
            event_id,
            current_user.id,
            len(orphaned),
        )
        return {"success": True}

    # --- User interactions ---------------------------------------------------

    def toggle_like(
        self, event_id: str, current_user: Optional[UserOut]
    ) -> EventView:
        """Flip the user's like and adjust the event's like counter"""
        if current_user is None:
            raise UnauthenticatedError()

        with self._lock:
            event = self._get_or_raise(event_id)
            record = self._get_or_create_interaction(current_user.id, event_id)

            record.liked = not record.liked
            if record.liked:
                event.likes += 1
            else:
                event.likes = max(0, event.likes - 1)

            view = self._to_view(event, current_user)

        logger.info(
            "User %s %s event %s",
            current_user.id,
            "liked" if view.userLiked else "unliked",
            event_id,
        )
        return view

    def set_attendance(
        self,
        event_id: str,
        status: Optional[Union[AttendanceStatus, str]],
        current_user: Optional[UserOut],
    ) -> EventView:
        """
        Set the user's attendance status (attending, notAttending or None).

        attendingCount only moves when the attending state is entered or left,
        so repeating the same status is a no-op on the counter.
        """
        if current_user is None:
            raise UnauthenticatedError()
        if status is not None:
            status = AttendanceStatus(status)

        with self._lock:
            event = self._get_or_raise(event_id)
            record = self._get_or_create_interaction(current_user.id, event_id)

            previous = record.status
            record.status = status

            if (
                previous == AttendanceStatus.attending
                and status != AttendanceStatus.attending
            ):
                event.attendingCount = max(0, event.attendingCount - 1)
            elif (
                previous != AttendanceStatus.attending
                and status == AttendanceStatus.attending
            ):
                event.attendingCount += 1

            view = self._to_view(event, current_user)

        logger.info(
            "User %s attendance for event %s: %s -> %s",
            current_user.id,
            event_id,
            previous.value if previous else None,
            status.value if status else None,
        )
        return view

    # --- Helpers -------------------------------------------------------------

    def _require_admin(self, current_user: Optional[UserOut], action: str) -> None:
        if current_user is None:
            logger.warning("Anonymous attempt to %s an event", action)
            raise UnauthenticatedError()
        if not current_user.isAdmin:
            logger.warning("User %s is not allowed to %s events", current_user.id, action)
            raise PermissionDeniedError(action)

    def _get_or_raise(self, event_id: str) -> EventOut:
        event = self._events.get(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def _get_or_create_interaction(
        self, user_id: str, event_id: str
    ) -> InteractionRecord:
        key = (user_id, event_id)
        record = self._interactions.get(key)
        if record is None:
            record = InteractionRecord(userId=user_id, eventId=event_id)
            self._interactions[key] = record
        return record

    def _new_event_id(self) -> str:
        event_id = str(uuid.uuid4())
        while event_id in self._events:
            event_id = str(uuid.uuid4())
        return event_id

    def _to_view(self, event: EventOut, current_user: Optional[UserOut]) -> EventView:
        """Copy an event and attach the user's like/attendance state"""
        record = None
        if current_user is not None:
            record = self._interactions.get((current_user.id, event.id))

        return EventView(
            **event.model_dump(),
            userLiked=record.liked if record else False,
            userStatus=record.status if record else None,
        )

    def _matches_all_filters(self, event: EventOut, filters: Dict[str, Any]) -> bool:
        """Check if event matches ALL filter criteria"""

        # City and category: case-insensitive exact match
        city = (filters.get("city") or "").strip()
        if city and event.city.strip().lower() != city.lower():
            return False

        category = (filters.get("category") or "").strip()
        if category and event.category.strip().lower() != category.lower():
            return False

        # Date range, both bounds inclusive
        from_date = filters.get("fromDate")
        if from_date is not None and not _on_or_after(event.date, from_date):
            return False

        to_date = filters.get("toDate")
        if to_date is not None and not _on_or_before(event.date, to_date):
            return False

        # Free text search over title and description
        query = (filters.get("searchQuery") or "").strip().lower()
        if query:
            if (
                query not in event.title.lower()
                and query not in event.description.lower()
            ):
                return False

        return True


def _as_utc(moment: datetime) -> datetime:
    # Naive datetimes are taken to be UTC so they compare with aware ones
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def _on_or_after(moment: datetime, bound: Union[date, datetime]) -> bool:
    if isinstance(bound, datetime):
        return _as_utc(moment) >= _as_utc(bound)
    return moment.date() >= bound


def _on_or_before(moment: datetime, bound: Union[date, datetime]) -> bool:
    if isinstance(bound, datetime):
        return _as_utc(moment) <= _as_utc(bound)
    return moment.date() <= bound
