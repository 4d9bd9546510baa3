"""
Wolfi Practice - Subtopic Context Resolver
Looks up curricular metadata for the generation prompt. Never raises: a
missing subtopic and a failing store both give ``None``.
"""

import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.database import Subtopic
from backend.schemas import SubtopicContext

logger = logging.getLogger(__name__)


def _to_context(subtopic: Subtopic) -> SubtopicContext:
    topic = subtopic.topic
    return SubtopicContext(
        subtopic_name=subtopic.name,
        notes=subtopic.notes or None,
        topic_name=topic.name if topic else None,
        topic_year=topic.year if topic else None,
        topic_code=topic.code if topic else None,
    )


def resolve_subtopic_context(
    db: Optional[Session],
    subtopic_id: Optional[str] = None,
    subtopic_name: Optional[str] = None,
) -> Optional[SubtopicContext]:
    """
    Resolve by id first, then by approximate (case-insensitive substring) name.
    When several names match, the shortest one is taken as the closest.
    """
    if db is None or not (subtopic_id or subtopic_name):
        return None

    try:
        subtopic = None
        if subtopic_id:
            subtopic = db.get(Subtopic, subtopic_id)

        if subtopic is None and subtopic_name:
            subtopic = (
                db.query(Subtopic)
                .filter(Subtopic.name.icontains(subtopic_name, autoescape=True))
                .order_by(func.length(Subtopic.name), Subtopic.name)
                .first()
            )

        if subtopic is None:
            logger.info("No subtopic found (id=%s, name=%s).", subtopic_id, subtopic_name)
            return None

        return _to_context(subtopic)
    except SQLAlchemyError as e:
        logger.warning("Subtopic lookup failed, continuing without context: %s", e)
        return None
