import time
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from conftest import ALICE, BOB, FakeProvider, auth_headers, make_ai_service, make_token
from legalens.config import get_settings
from legalens.main import app
from legalens.routers.common import get_ai_service


CONTRACT = {
    "contract_type": "Consulting Agreement",
    "first_party_name": "Acme Corp",
    "second_party_name": "Jane Doe",
    "jurisdiction": "California",
    "content": "CONSULTING AGREEMENT ...",
    "intensity": 60,
}

DRAFT_REQUEST = {
    "contract_type": "Consulting Agreement",
    "first_party_name": "Acme Corp",
    "second_party_name": "Jane Doe",
    "intensity": 20,
}


@pytest.fixture
def providers():
    return [FakeProvider("openai"), FakeProvider("gemini", replies=["GEMINI DRAFT"])]


@pytest.fixture
def client(providers):
    ai_service = make_ai_service(providers)
    app.dependency_overrides[get_ai_service] = lambda: ai_service
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


def wait_until_settled(client, document_id, user_id=ALICE, timeout=3.0):
    deadline = time.monotonic() + timeout
    while True:
        document = client.get(f"/api/documents/{document_id}", headers=auth_headers(user_id)).json()
        if document["status"] != "analyzing" or time.monotonic() > deadline:
            return document
        time.sleep(0.02)


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy", "version": "1.0.0"}


def test_missing_token(client):
    response = client.get("/api/documents")

    assert response.status_code == 401
    assert response.json()["detail"] == "Missing authorization header"


@pytest.mark.parametrize("token", [
    make_token(ALICE, secret="some-other-secret-with-enough-length"),
    make_token(ALICE, expires_in=timedelta(minutes=-5)),
    "not-a-jwt",
])
def test_rejected_tokens(client, token):
    response = client.get("/api/documents", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid or expired token"


def test_me(client):
    response = client.get("/api/auth/me", headers=auth_headers(BOB, email="bob@acmecorp.com"))

    assert response.json() == {"user_id": BOB, "email": "bob@acmecorp.com"}


def test_document_analysis_flow(client):
    response = client.post("/api/documents", json={"title": "NDA", "content": "This Agreement..."},
                           headers=auth_headers(ALICE))

    assert response.status_code == 201
    created = response.json()
    assert created["status"] == "analyzing"
    assert created["user_id"] == ALICE

    document = wait_until_settled(client, created["id"])

    assert document["status"] == "completed"
    assert document["risk_level"] == "high"
    assert document["risk_score"] == 82
    assert document["findings"][0] == {
        "text": "Termination clause is one-sided",
        "riskLevel": "high",
        "suggestions": ["Add mutual termination rights"],
    }
    assert document["findings"][1]["riskLevel"] == "medium"

    listed = client.get("/api/documents", headers=auth_headers(ALICE)).json()
    assert [d["id"] for d in listed] == [created["id"]]


def test_blank_content_is_unprocessable(client):
    response = client.post("/api/documents", json={"content": "   "}, headers=auth_headers(ALICE))

    assert response.status_code == 422
    assert client.get("/api/documents", headers=auth_headers(ALICE)).json() == []


def test_documents_are_private(client):
    created = client.post("/api/documents", json={"content": "Body"}, headers=auth_headers(ALICE)).json()
    wait_until_settled(client, created["id"])

    assert client.get("/api/documents", headers=auth_headers(BOB)).json() == []
    assert client.get(f"/api/documents/{created['id']}", headers=auth_headers(BOB)).status_code == 404
    assert client.post(f"/api/documents/{created['id']}/retry", headers=auth_headers(BOB)).status_code == 404
    assert client.delete(f"/api/documents/{created['id']}", headers=auth_headers(BOB)).status_code == 404

    assert client.delete(f"/api/documents/{created['id']}", headers=auth_headers(ALICE)).status_code == 204
    assert client.get(f"/api/documents/{created['id']}", headers=auth_headers(ALICE)).status_code == 404


@pytest.mark.parametrize("providers", [[FakeProvider("openai", replies=["No issues found.", "{}"])]])
def test_retry_after_parse_failure(client):
    created = client.post("/api/documents", json={"content": "Body"}, headers=auth_headers(ALICE)).json()

    failed = wait_until_settled(client, created["id"])
    assert failed["status"] == "error"
    assert failed["error"] == "Failed to parse analysis results: no JSON object found"

    response = client.post(f"/api/documents/{created['id']}/retry", headers=auth_headers(ALICE))

    assert response.status_code == 200
    retried = response.json()
    assert retried["status"] == "completed"
    assert retried["error"] is None
    assert retried["risk_level"] == "medium"
    assert retried["risk_score"] == 50
    assert retried["findings"] == []


def test_upload_text_file(client):
    response = client.post(
        "/api/documents/upload",
        files={"file": ("Master Services.txt", b"MASTER SERVICES AGREEMENT", "text/plain")},
        headers=auth_headers(ALICE),
    )

    assert response.status_code == 201
    assert response.json()["title"] == "Master Services"
    assert response.json()["content"] == "MASTER SERVICES AGREEMENT"
    wait_until_settled(client, response.json()["id"])


def test_upload_unsupported_file(client):
    response = client.post(
        "/api/documents/upload",
        files={"file": ("photo.png", b"\x89PNG", "image/png")},
        headers=auth_headers(ALICE),
    )

    assert response.status_code == 422
    assert "Unsupported file type" in response.json()["detail"]


def test_upload_too_large(client, monkeypatch):
    monkeypatch.setenv("MAX_UPLOAD_MB", "0")
    get_settings.cache_clear()

    response = client.post(
        "/api/documents/upload",
        files={"file": ("nda.txt", b"text", "text/plain")},
        headers=auth_headers(ALICE),
    )

    assert response.status_code == 413


def test_catalog_is_public(client):
    catalog = client.get("/api/contracts/catalog").json()

    assert "Non-Disclosure Agreement (NDA)" in catalog["contract_types"]
    assert "Delaware" in catalog["jurisdictions"]
    assert [p["id"] for p in catalog["providers"]] == ["openai", "gemini"]


def test_contract_crud(client):
    response = client.post("/api/contracts", json=CONTRACT, headers=auth_headers(ALICE))

    assert response.status_code == 201
    contract = response.json()
    assert contract["title"] == "Consulting Agreement between Acme Corp and Jane Doe"
    assert contract["intensity"] == "60"

    response = client.patch(f"/api/contracts/{contract['id']}", json={"title": "Renamed", "risk_level": "low"},
                            headers=auth_headers(ALICE))
    assert response.status_code == 200
    assert response.json()["title"] == "Renamed"
    assert response.json()["risk_level"] == "low"
    assert response.json()["content"] == CONTRACT["content"]

    assert client.get(f"/api/contracts/{contract['id']}", headers=auth_headers(BOB)).status_code == 404
    assert [c["id"] for c in client.get("/api/contracts", headers=auth_headers(ALICE)).json()] == [contract["id"]]

    assert client.delete(f"/api/contracts/{contract['id']}", headers=auth_headers(ALICE)).status_code == 204
    assert client.get("/api/contracts", headers=auth_headers(ALICE)).json() == []


def test_contract_rejects_bad_intensity(client):
    response = client.post("/api/contracts", json={**CONTRACT, "intensity": "loud"}, headers=auth_headers(ALICE))

    assert response.status_code == 422


def test_drafts_from_both_providers(client):
    response = client.post("/api/contracts/drafts", json=DRAFT_REQUEST, headers=auth_headers(ALICE))

    assert response.status_code == 200
    drafts = response.json()
    assert set(drafts["drafts"]) == {"openai", "gemini"}
    assert drafts["drafts"]["gemini"] == "GEMINI DRAFT"
    assert drafts["errors"] == {}


@pytest.mark.parametrize("providers", [[FakeProvider("openai"), FakeProvider("gemini", error=TimeoutError())]])
def test_drafts_fail_when_one_provider_fails(client):
    response = client.post("/api/contracts/drafts", json=DRAFT_REQUEST, headers=auth_headers(ALICE))

    assert response.status_code == 502
    assert "gemini" in response.json()["detail"]


def test_draft_with_single_provider(client):
    response = client.post("/api/contracts/drafts/gemini", json=DRAFT_REQUEST, headers=auth_headers(ALICE))

    assert response.json() == {"provider": "gemini", "content": "GEMINI DRAFT"}


def test_draft_with_unknown_or_unconfigured_provider(client):
    assert client.post("/api/contracts/drafts/grok", json=DRAFT_REQUEST,
                       headers=auth_headers(ALICE)).status_code == 400
    assert client.post("/api/contracts/drafts/anthropic", json=DRAFT_REQUEST,
                       headers=auth_headers(ALICE)).status_code == 502
