"""
Database utilities and models.

This package provides:
- SQLAlchemy models for saved campaigns and politicians
- Database connection management
"""

from .connection import Database, db
from .models import Base, CampaignRecord, SavedPolitician

__all__ = [
    'Database', 'db',
    'Base', 'CampaignRecord', 'SavedPolitician',
]
