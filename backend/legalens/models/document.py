"""
Document Model
SQLAlchemy model for uploaded documents and their risk analysis.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, Integer, DateTime, JSON

from legalens.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


def isoformat(value: datetime | None) -> str | None:
    # SQLite hands back naive datetimes; every stored timestamp is UTC
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


class Document(Base):
    """A document submitted for analysis, owned by one user."""
    __tablename__ = 'documents'

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), nullable=False, index=True)
    title = Column(Text, nullable=False)
    content = Column(Text)
    status = Column(String(20), nullable=False, default='analyzing', index=True)
    risk_level = Column(String(10))
    risk_score = Column(Integer)
    findings = Column(JSON, default=list)
    recommendations = Column(Text)
    error = Column(Text)
    progress = Column(Integer)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f'<Document {self.id} ({self.status})>'

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'title': self.title,
            'content': self.content,
            'status': self.status,
            'risk_level': self.risk_level,
            'risk_score': self.risk_score,
            'findings': self.findings or [],
            'recommendations': self.recommendations,
            'error': self.error,
            'progress': self.progress,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }
