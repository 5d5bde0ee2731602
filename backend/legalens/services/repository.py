"""
Repositories
Owner-scoped create/read/update/delete over the documents and contracts
tables, plus the per-user profile row. Every query is filtered by the
authenticated user's id.
"""

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from legalens.errors import NotFoundError, PersistenceError
from legalens.models import Contract, Document, Profile


class UserRepository:
    """Session handling and field filtering for one model and one user."""

    model = None
    protected_fields = frozenset({'id', 'user_id', 'created_at', 'updated_at'})

    def __init__(self, session_factory: sessionmaker, user_id: str):
        if not user_id:
            raise ValueError("user_id is required")
        self.session_factory = session_factory
        self.user_id = str(user_id)
        self._columns = {column.key for column in self.model.__table__.columns}

    @property
    def entity(self) -> str:
        return self.model.__name__

    @contextmanager
    def _session(self):
        session: Session = self.session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise PersistenceError(f"{self.model.__tablename__}: {e}") from e
        finally:
            session.close()

    def _writable(self, values: Dict[str, Any]) -> Dict[str, Any]:
        unknown = set(values) - self._columns
        if unknown:
            raise ValueError(f"Unknown {self.entity} fields: {', '.join(sorted(unknown))}")
        return {k: v for k, v in values.items() if k not in self.protected_fields}


class OwnedRepository(UserRepository):
    """Rows carrying a user_id column; other users' rows are invisible."""

    def _owned(self, session: Session, entity_id: str):
        row = session.query(self.model).filter(
            self.model.id == entity_id,
            self.model.user_id == self.user_id
        ).first()
        if row is None:
            raise NotFoundError(f"{self.entity} {entity_id} not found")
        return row

    def create(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a row owned by the current user."""
        with self._session() as session:
            row = self.model(**self._writable(values), user_id=self.user_id)
            session.add(row)
            session.flush()
            return row.to_dict()

    def get_all(self) -> List[Dict[str, Any]]:
        """All rows owned by the current user, newest first."""
        with self._session() as session:
            rows = session.query(self.model).filter(
                self.model.user_id == self.user_id
            ).order_by(self.model.created_at.desc()).all()
            return [row.to_dict() for row in rows]

    def get_by_id(self, entity_id: str) -> Dict[str, Any]:
        with self._session() as session:
            return self._owned(session, entity_id).to_dict()

    def update(self, entity_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        """Partial, unconditional overwrite of the given fields."""
        with self._session() as session:
            row = self._owned(session, entity_id)
            for key, value in self._writable(changes).items():
                setattr(row, key, value)
            session.flush()
            return row.to_dict()

    def delete(self, entity_id: str) -> None:
        """Hard delete."""
        with self._session() as session:
            session.delete(self._owned(session, entity_id))


class DocumentRepository(OwnedRepository):
    model = Document

    def get_content(self, document_id: str) -> Optional[str]:
        return self.get_by_id(document_id).get('content')


class ContractRepository(OwnedRepository):
    model = Contract


class ProfileRepository(UserRepository):
    """The single profile row whose id is the user's id."""

    model = Profile
    protected_fields = frozenset({'id', 'created_at', 'updated_at'})

    def _own_row(self, session: Session, defaults: Dict[str, Any]):
        row = session.get(Profile, self.user_id)
        if row is None:
            row = Profile(**self._writable(defaults), id=self.user_id)
            session.add(row)
            session.flush()
        return row

    def get_or_create(self, defaults: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Return the user's profile, creating it from defaults on first access."""
        with self._session() as session:
            return self._own_row(session, defaults or {}).to_dict()

    def update(self, changes: Dict[str, Any], defaults: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        with self._session() as session:
            row = self._own_row(session, defaults or {})
            for key, value in self._writable(changes).items():
                setattr(row, key, value)
            session.flush()
            return row.to_dict()
