"""
Wolfi Practice - Database Models
SQLAlchemy ORM models for the curriculum store read by the context resolver.

Only topics and subtopics live here; generated exercises and grades are not
persisted by this service.
"""

from sqlalchemy import (
    Column, Integer, String, Text, ForeignKey
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
import logging
import os
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

Base = declarative_base()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./practice.db")

engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False} if "sqlite" in DATABASE_URL else {}
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# ─────────────────────────────────────────────────────────
# Curriculum
# ─────────────────────────────────────────────────────────

class Topic(Base):
    __tablename__ = "topics"

    id    = Column(Integer, primary_key=True, index=True)
    name  = Column(String(200), nullable=False)
    year  = Column(Integer)            # school year, 10–12
    code  = Column(String(50))

    subtopics = relationship("Subtopic", back_populates="topic")


class Subtopic(Base):
    __tablename__ = "subtopics"

    id       = Column(String(64), primary_key=True)
    name     = Column(String(200), nullable=False, index=True)
    notes    = Column(Text)            # free-text curricular notes
    topic_id = Column(Integer, ForeignKey("topics.id"))

    topic = relationship("Topic", back_populates="subtopics")


# ─────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready (%s).", DATABASE_URL.split("://")[0])
