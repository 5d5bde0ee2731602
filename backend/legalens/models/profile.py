"""
Profile Model
SQLAlchemy model for app-owned user details, keyed by the identity id.
"""

from sqlalchemy import Column, String, Text, DateTime

from legalens.database import Base
from legalens.models.document import isoformat, utcnow


class Profile(Base):
    """Name and contact details for one authenticated user."""
    __tablename__ = 'profiles'

    id = Column(String(36), primary_key=True)
    first_name = Column(Text)
    last_name = Column(Text)
    email = Column(Text)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f'<Profile {self.id}>'

    def to_dict(self):
        return {
            'id': self.id,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'email': self.email,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }
