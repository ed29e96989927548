"""Default values and dreams for a user who has none yet."""

import logging

from sqlmodel import Session

from lifedash.infrastructure.storage.repositories import OwnedRepository
from lifedash.infrastructure.storage.tables import Dream, Value

logger = logging.getLogger(__name__)

DEFAULT_VALUES: list[dict] = [
    {
        "title": "Continuous Growth",
        "description": "Commitment to lifelong learning and personal development",
    },
    {
        "title": "Family Connection",
        "description": "Maintaining strong relationships with loved ones",
    },
    {
        "title": "Health & Wellbeing",
        "description": "Prioritizing physical and mental health",
    },
    {
        "title": "Service & Contribution",
        "description": "Making a positive impact in the world",
    },
    {
        "title": "Integrity",
        "description": "Acting with honesty and adhering to moral principles",
    },
]

DEFAULT_DREAMS: list[dict] = [
    {
        "title": "Start My Own Business",
        "description": "Build a purpose-driven company that solves meaningful problems",
        "timeframe": "medium-term",
        "tags": ["career", "passion", "purpose"],
    },
    {
        "title": "Visit 30 Countries",
        "description": "Explore different cultures and expand my worldview",
        "timeframe": "long-term",
        "tags": ["travel", "adventure", "learning"],
    },
    {
        "title": "Run a Marathon",
        "description": "Train and complete a full marathon",
        "timeframe": "short-term",
        "tags": ["health", "fitness", "achievement"],
    },
]


def seed_values(session: Session, user_id: int) -> int:
    """Insert the default values when the user has none. Returns rows added."""
    repo = OwnedRepository(session, Value)
    existing = repo.list(user_id)
    if existing:
        logger.debug("User %s already has %d values, not seeding", user_id, len(existing))
        return 0
    for data in DEFAULT_VALUES:
        repo.add(Value(user_id=user_id, **data))
    logger.info("Seeded %d default values for user %s", len(DEFAULT_VALUES), user_id)
    return len(DEFAULT_VALUES)


def seed_dreams(session: Session, user_id: int) -> int:
    """Insert the default dreams when the user has none. Returns rows added."""
    repo = OwnedRepository(session, Dream)
    existing = repo.list(user_id)
    if existing:
        logger.debug("User %s already has %d dreams, not seeding", user_id, len(existing))
        return 0
    for data in DEFAULT_DREAMS:
        repo.add(Dream(user_id=user_id, **data))
    logger.info("Seeded %d default dreams for user %s", len(DEFAULT_DREAMS), user_id)
    return len(DEFAULT_DREAMS)


def seed_defaults(session: Session, user_id: int) -> tuple[int, int]:
    """Seed values and dreams; returns (values added, dreams added)."""
    return seed_values(session, user_id), seed_dreams(session, user_id)
