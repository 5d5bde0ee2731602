from datetime import timedelta

from conftest import ALICE, BOB
from legalens.models import Document
from legalens.models.document import utcnow
from legalens.services.reconciler import STALE_ANALYSIS_MESSAGE, reconcile_stale_analyses
from legalens.services.repository import DocumentRepository


def _insert(session_factory, user_id, status, age):
    with session_factory() as session:
        document = Document(user_id=user_id, title="NDA", content="Body", status=status,
                            progress=10, updated_at=utcnow() - age)
        session.add(document)
        session.commit()
        return document.id


def test_stale_analyses_are_failed(session_factory):
    stale_alice = _insert(session_factory, ALICE, "analyzing", timedelta(hours=2))
    stale_bob = _insert(session_factory, BOB, "analyzing", timedelta(minutes=45))
    fresh = _insert(session_factory, ALICE, "analyzing", timedelta(minutes=1))
    finished = _insert(session_factory, ALICE, "completed", timedelta(days=3))

    fixed = reconcile_stale_analyses(session_factory, max_age=timedelta(minutes=30))

    assert fixed == 2
    alice = DocumentRepository(session_factory, ALICE)
    bob = DocumentRepository(session_factory, BOB)

    for document in (alice.get_by_id(stale_alice), bob.get_by_id(stale_bob)):
        assert document["status"] == "error"
        assert document["error"] == STALE_ANALYSIS_MESSAGE
        assert document["progress"] is None

    assert alice.get_by_id(fresh)["status"] == "analyzing"
    assert alice.get_by_id(finished)["status"] == "completed"


def test_nothing_to_reconcile(session_factory):
    assert reconcile_stale_analyses(session_factory, max_age=timedelta(minutes=30)) == 0
