"""
Contract Model
SQLAlchemy model for drafted contracts saved by a user.
"""

from sqlalchemy import Column, String, Text, Integer, DateTime

from legalens.database import Base
from legalens.models.document import isoformat, new_id, utcnow


class Contract(Base):
    """A finalized contract, owned by one user."""
    __tablename__ = 'contracts'

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), nullable=False, index=True)
    title = Column(Text, nullable=False)
    contract_type = Column(Text, nullable=False)
    first_party_name = Column(Text, nullable=False)
    first_party_address = Column(Text)
    second_party_name = Column(Text, nullable=False)
    second_party_address = Column(Text)
    jurisdiction = Column(Text)
    description = Column(Text)
    key_terms = Column(Text)
    intensity = Column(String(8), default='50')
    risk_level = Column(String(10))
    risk_score = Column(Integer)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f'<Contract {self.id} ({self.contract_type})>'

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'title': self.title,
            'contract_type': self.contract_type,
            'first_party_name': self.first_party_name,
            'first_party_address': self.first_party_address,
            'second_party_name': self.second_party_name,
            'second_party_address': self.second_party_address,
            'jurisdiction': self.jurisdiction,
            'description': self.description,
            'key_terms': self.key_terms,
            'intensity': self.intensity,
            'risk_level': self.risk_level,
            'risk_score': self.risk_score,
            'content': self.content,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }
