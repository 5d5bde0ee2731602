"""
Stale Analysis Reconciler
Moves documents left in the analyzing state by a crashed process to error
so they can be retried.
"""

import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from legalens.errors import PersistenceError
from legalens.models import Document


logger = logging.getLogger(__name__)


STALE_ANALYSIS_MESSAGE = "Analysis did not finish; please retry"


def reconcile_stale_analyses(session_factory: sessionmaker, max_age: timedelta) -> int:
    """
    Mark documents analyzing for longer than max_age as failed.

    Runs across all owners; only meant for startup, when no task in this
    process can still be working on them. Returns the number of rows fixed.
    """
    cutoff = datetime.now(timezone.utc) - max_age
    session = session_factory()
    try:
        stale = session.query(Document).filter(
            Document.status == 'analyzing',
            Document.updated_at < cutoff
        ).all()
        for document in stale:
            document.status = 'error'
            document.error = STALE_ANALYSIS_MESSAGE
            document.progress = None
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        raise PersistenceError(f"documents: {e}") from e
    finally:
        session.close()

    if stale:
        logger.warning(f"Reconciled {len(stale)} documents stuck in analyzing")
    return len(stale)
