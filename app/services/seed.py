"""Demo events loaded at startup when SEED_SAMPLE_EVENTS is enabled."""

import logging
from datetime import datetime
from typing import List, Optional

from app import config
from app.schemas.event import EventCreate, EventOut
from app.schemas.user import UserOut
from app.services.event_service import EventService

logger = logging.getLogger(__name__)

SAMPLE_EVENTS = [
    EventCreate(
        title="Philharmonic Orchestra Concert",
        description="The symphony orchestra performs works by Tchaikovsky and Beethoven",
        imageUrl="/placeholder.svg",
        date=datetime(2023, 10, 15, 19, 0),
        city="Chelyabinsk",
        category="Concerts",
    ),
    EventCreate(
        title="Local Artists Exhibition",
        description="Paintings by Kopeysk artists. Free admission.",
        imageUrl="/placeholder.svg",
        date=datetime(2023, 10, 20, 12, 0),
        city="Kopeysk",
        category="Exhibitions",
    ),
    EventCreate(
        title="Street Food Festival",
        description="Dishes from the best chefs in town on the central square",
        imageUrl="/placeholder.svg",
        date=datetime(2023, 10, 25, 10, 0),
        city="Chelyabinsk",
        category="Festivals",
        price=0,
    ),
]


def seed_sample_events(
    event_service: EventService, admin: Optional[UserOut] = None
) -> List[EventOut]:
    """Create the sample events through the regular admin command"""
    if admin is None:
        admin = UserOut(id="system", email=config.ADMIN_EMAIL, name="system", isAdmin=True)

    created = [event_service.create_event(event, admin) for event in SAMPLE_EVENTS]
    logger.info("Seeded %d sample events", len(created))
    return created
