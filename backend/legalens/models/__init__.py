"""
Database Models
Exports all SQLAlchemy models for the application.
"""

from legalens.models.document import Document
from legalens.models.contract import Contract
from legalens.models.profile import Profile

__all__ = [
    'Document',
    'Contract',
    'Profile'
]
