"""
Tests for interaction and catalog endpoints.
"""

from fastapi.testclient import TestClient

from conftest import FakeReferenceStore, drug_named
from prescriber.core.exceptions import StoreQueryError, StoreTimeoutError
from prescriber.dependencies import get_interaction_engine
from prescriber.main import app
from prescriber.services.interaction_engine import DRUG, InteractionEngine


def _request(drug: str, *prescribed: str, allergies: list[dict] | None = None) -> dict:
    return {
        "drug": drug_named(drug).model_dump(),
        "patient": {
            "drugs": [drug_named(name).model_dump() for name in prescribed],
            "allergies": allergies or [],
        },
    }


def test_interactions_requires_auth(test_client: TestClient):
    """Test interaction endpoint requires API key."""
    response = test_client.post(
        "/api/v1/interactions",
        json=_request("PRENATAL/POSTPARTUM VIT/MIN", "CARDIOQUIN 275MG TABLET")
    )

    assert response.status_code == 401


def test_invalid_api_key(test_client: TestClient):
    """Test endpoint rejects invalid API key."""
    response = test_client.post(
        "/api/v1/interactions",
        json=_request("PRENATAL/POSTPARTUM VIT/MIN"),
        headers={"X-API-Key": "invalid-key"}
    )

    assert response.status_code == 403


def test_find_interactions(test_client: TestClient, api_key_headers: dict):
    """Test all three kinds are returned and counted."""
    body = _request(
        "PRENATAL/POSTPARTUM VIT/MIN",
        "APO-QUIN-G 325 MG TABLET",
        "BIO BALANCED CALC/MAG TAB",
        allergies=[{"id": 900, "name": "Quinidine Analogs"}]
    )

    response = test_client.post("/api/v1/interactions", json=body, headers=api_key_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["drug_id"] == 2243011
    assert data["total"] == 4
    assert data["counts_by_kind"] == {"drug_drug": 3, "drug_food": 1, "drug_allergy": 0}
    drug_drug = [i["description"] for i in data["interactions"] if i["kind"] == "drug_drug"]
    assert drug_drug[-1] == (
        "PRENATAL/POSTPARTUM VIT/MIN Mixed effects of the latter drug APO-QUIN-G 325 MG TABLET"
    )


def test_drug_interactions_only(test_client: TestClient, api_key_headers: dict):
    response = test_client.post(
        "/api/v1/interactions/drug",
        json=_request("PRENATAL/POSTPARTUM VIT/MIN", "CARDIOQUIN 275MG TABLET"),
        headers=api_key_headers
    )

    assert response.status_code == 200
    assert response.json()["counts_by_kind"]["drug_drug"] == 1


def test_allergy_interactions_only(test_client: TestClient, api_key_headers: dict):
    response = test_client.post(
        "/api/v1/interactions/allergy",
        json=_request("CARDIOQUIN 275MG TABLET", allergies=[{"id": 900, "name": "Quinidine Analogs"}]),
        headers=api_key_headers
    )

    assert response.status_code == 200
    interactions = response.json()["interactions"]
    assert [i["allergy"]["id"] for i in interactions] == [900]


def test_food_interactions_only(test_client: TestClient, api_key_headers: dict):
    response = test_client.post(
        "/api/v1/interactions/food",
        json=_request("CARDIOQUIN 275MG TABLET"),
        headers=api_key_headers
    )

    assert response.status_code == 200
    assert [i["food"] for i in response.json()["interactions"]] == ["Alcohol", "Grapefruit Juice"]


def test_store_failure_is_sanitized(test_client: TestClient, api_key_headers: dict):
    """Test a query failure maps to 503 naming the category but not the driver error."""
    store = FakeReferenceStore(failures={DRUG: StoreQueryError(DRUG, "42P01", "relation does not exist")})
    app.dependency_overrides[get_interaction_engine] = lambda: InteractionEngine(store, 5.0)

    response = test_client.post(
        "/api/v1/interactions",
        json=_request("PRENATAL/POSTPARTUM VIT/MIN", "CARDIOQUIN 275MG TABLET"),
        headers=api_key_headers
    )

    assert response.status_code == 503
    assert DRUG in response.json()["detail"]
    assert "relation" not in response.json()["detail"]


def test_timeout_maps_to_504(test_client: TestClient, api_key_headers: dict):
    store = FakeReferenceStore(failures={DRUG: StoreTimeoutError(DRUG, 10.0)})
    app.dependency_overrides[get_interaction_engine] = lambda: InteractionEngine(store, 5.0)

    response = test_client.post(
        "/api/v1/interactions",
        json=_request("PRENATAL/POSTPARTUM VIT/MIN", "CARDIOQUIN 275MG TABLET"),
        headers=api_key_headers
    )

    assert response.status_code == 504


def test_search_drugs(test_client: TestClient, api_key_headers: dict):
    response = test_client.get("/api/v1/drugs", params={"pattern": "QUIN"}, headers=api_key_headers)

    assert response.status_code == 200
    data = response.json()
    assert [d["name"] for d in data["drugs"]] == ["APO-QUIN-G 325 MG TABLET", "CARDIOQUIN 275MG TABLET"]
    assert data["page"] is None


def test_search_drugs_paged(test_client: TestClient, api_key_headers: dict):
    response = test_client.get(
        "/api/v1/drugs",
        params={"pattern": "A", "page": 0},
        headers=api_key_headers
    )

    assert response.status_code == 200
    data = response.json()
    assert data["page_size"] == 2
    assert len(data["drugs"]) == 2


def test_search_allergies(test_client: TestClient, api_key_headers: dict):
    response = test_client.get("/api/v1/allergies", params={"prefix": "Opioid"}, headers=api_key_headers)

    assert response.status_code == 200
    assert response.json()["allergies"] == [{"id": 117, "name": "Opioid Analgesics"}]
