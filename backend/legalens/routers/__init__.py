"""
API Routers
All FastAPI routers for the application.
"""

from legalens.routers import auth, documents, contracts, profile

__all__ = ['auth', 'documents', 'contracts', 'profile']
