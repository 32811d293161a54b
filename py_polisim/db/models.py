"""Database models for saved campaigns and politicians."""

from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.orm import declarative_base
import uuid
from datetime import datetime

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class CampaignRecord(Base):
    """One saved campaign, stored as a JSON snapshot of its state."""

    __tablename__ = "campaigns"

    id = Column(String(64), primary_key=True, default=_new_id)
    seed = Column(String(100), nullable=False)
    name = Column(String(255), nullable=False)
    country_id = Column(String(8), nullable=False)
    months_elapsed = Column(Integer, default=0)
    snapshot_json = Column(Text, nullable=False)  # Campaign.model_dump_json()
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class SavedPolitician(Base):
    """A politician the player kept for reuse across campaigns."""

    __tablename__ = "saved_politicians"

    id = Column(String(64), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False)
    party_name = Column(String(255))
    data_json = Column(Text, nullable=False)  # Politician.model_dump_json()
    created_at = Column(DateTime, default=datetime.utcnow)
