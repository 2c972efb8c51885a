"""
Tests for the REST API.

Tests cover:
- Member and provider CRUD status codes
- Advanced search envelopes over HTTP
- Request validation mapped to 400
- Store failures mapped to a generic 500
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from main import app
from utils.dependencies import get_member_service, get_provider_service

MEMBER_PAYLOAD = {
    "member_number": "M100",
    "first_name": "Ravi",
    "last_name": "Kumar",
    "dob": "1980-05-01",
    "gender": "male",
    "address": "12 Park Lane",
    "phone": "+1 (555) 010-0100",
    "email": "ravi@example.com",
}

PROVIDER_PAYLOAD = {
    "provider_number": "P100",
    "name": "Dr. Ana Ortiz",
    "npi": "1234567890",
    "address": "1 Main St",
    "phone": "555-0100",
    "email": "ana@example.com",
    "specialty": "Cardiology",
}


class TestHealth:
    """Tests for GET /health"""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "service": "pharmacy-service",
            "database": "ok",
        }


class TestMemberEndpoints:
    """Member CRUD over HTTP."""

    def test_member_lifecycle(self, client):
        created = client.post("/api/members", json=MEMBER_PAYLOAD)
        assert created.status_code == 201
        body = created.json()
        assert body["gender"] == "Male"
        assert body["dob"] == "1980-05-01"
        member_id = body["id"]

        fetched = client.get(f"/api/members/{member_id}")
        assert fetched.status_code == 200
        assert fetched.json()["member_number"] == "M100"

        update = {k: v for k, v in MEMBER_PAYLOAD.items() if k != "member_number"}
        update["last_name"] = "Kumaran"
        updated = client.put(f"/api/members/{member_id}", json=update)
        assert updated.status_code == 200
        assert updated.json()["last_name"] == "Kumaran"

        assert client.delete(f"/api/members/{member_id}").status_code == 204
        assert client.get(f"/api/members/{member_id}").status_code == 404
        assert client.delete(f"/api/members/{member_id}").status_code == 404

    def test_duplicate_member_number(self, client):
        assert client.post("/api/members", json=MEMBER_PAYLOAD).status_code == 201

        response = client.post("/api/members", json=MEMBER_PAYLOAD)

        assert response.status_code == 400
        assert "already exists" in response.json()["detail"]

    def test_lookups(self, client):
        client.post("/api/members", json=MEMBER_PAYLOAD)

        assert client.get("/api/members/by-number/M100").status_code == 200
        assert client.get("/api/members/by-number/NOPE").status_code == 404
        assert client.get("/api/members/exists/M100").json() == {"exists": True}
        assert client.get("/api/members/exists/NOPE").json() == {"exists": False}
        assert len(client.get("/api/members/by-gender/MALE").json()) == 1
        assert len(client.get("/api/members").json()) == 1
        assert len(client.get("/api/members/search", params={"search_term": "ravi"}).json()) == 1

    def test_empty_search_term(self, client):
        response = client.get("/api/members/search", params={"search_term": " "})

        assert response.status_code == 400

    @pytest.mark.parametrize(
        "field,value",
        [
            ("gender", "Unknown"),
            ("first_name", "R4vi"),
            ("phone", "call me"),
            ("email", "not-an-email"),
            ("member_number", "M 100"),
            ("dob", "2099-01-01"),
        ],
    )
    def test_invalid_member_payload(self, client, field, value):
        response = client.post("/api/members", json={**MEMBER_PAYLOAD, field: value})

        assert response.status_code == 400

    def test_non_numeric_id(self, client):
        assert client.get("/api/members/abc").status_code == 400


class TestMemberAdvancedSearch:
    """POST /api/members/advanced-search"""

    def test_last_name_first_page(self, client, seed_members):
        response = client.post(
            "/api/members/advanced-search",
            json={"last_name": "kumar", "page_number": 1, "page_size": 2},
        )

        assert response.status_code == 200
        body = response.json()
        assert len(body["members"]) == 2
        assert body["total_count"] == 3
        assert body["total_pages"] == 2
        assert body["has_next_page"] is True
        assert body["has_previous_page"] is False

    def test_defaults(self, client, seed_members):
        body = client.post("/api/members/advanced-search", json={}).json()

        assert body["page_number"] == 1
        assert body["page_size"] == 10
        assert body["total_count"] == 25
        assert len(body["members"]) == 10

    def test_empty_store(self, client):
        body = client.post(
            "/api/members/advanced-search", json={"first_name": "nobody"}
        ).json()

        assert body["members"] == []
        assert body["total_count"] == 0
        assert body["total_pages"] == 0
        assert body["has_next_page"] is False

    @pytest.mark.parametrize(
        "criteria",
        [
            {"page_number": 0},
            {"page_number": -3},
            {"page_size": 0},
            {"page_size": 101},
            {"age_from": 40, "age_to": 30},
            {"age_from": 151},
            {"date_of_birth_from": "1990-01-01", "date_of_birth_to": "1980-01-01"},
            {"gender": "robot"},
        ],
    )
    def test_invalid_criteria(self, client, criteria):
        response = client.post("/api/members/advanced-search", json=criteria)

        assert response.status_code == 400

    def test_unknown_sort_field_is_accepted(self, client, seed_members):
        response = client.post(
            "/api/members/advanced-search",
            json={"sort_by": "shoeSize", "sort_descending": True, "page_size": 3},
        )

        assert response.status_code == 200
        ids = [m["id"] for m in response.json()["members"]]
        assert ids == sorted(ids, reverse=True)


class TestProviderEndpoints:
    """Provider CRUD and search over HTTP."""

    def test_provider_lifecycle(self, client):
        created = client.post("/api/providers", json=PROVIDER_PAYLOAD)
        assert created.status_code == 201
        provider_id = created.json()["id"]

        assert client.get(f"/api/providers/{provider_id}").status_code == 200
        assert client.get("/api/providers/by-npi/1234567890").status_code == 200
        assert client.get("/api/providers/by-number/P100").status_code == 200
        assert len(client.get("/api/providers/by-specialty/cardiology").json()) == 1
        assert client.get("/api/providers/exists/npi/1234567890").json() == {"exists": True}
        assert client.get("/api/providers/exists/provider-number/P999").json() == {
            "exists": False
        }

        update = {k: v for k, v in PROVIDER_PAYLOAD.items() if k != "provider_number"}
        update["specialty"] = "Oncology"
        updated = client.put(f"/api/providers/{provider_id}", json=update)
        assert updated.status_code == 200
        assert updated.json()["specialty"] == "Oncology"

        assert client.delete(f"/api/providers/{provider_id}").status_code == 204
        assert client.get(f"/api/providers/{provider_id}").status_code == 404

    def test_duplicate_npi(self, client):
        client.post("/api/providers", json=PROVIDER_PAYLOAD)

        response = client.post(
            "/api/providers", json={**PROVIDER_PAYLOAD, "provider_number": "P101"}
        )

        assert response.status_code == 400
        assert "NPI" in response.json()["detail"]

    @pytest.mark.parametrize("npi", ["123456789", "12345678901", "12345abcde"])
    def test_npi_must_be_ten_digits(self, client, npi):
        response = client.post("/api/providers", json={**PROVIDER_PAYLOAD, "npi": npi})

        assert response.status_code == 400

    def test_advanced_search_by_specialty(self, client, seed_providers):
        response = client.post(
            "/api/providers/advanced-search",
            json={
                "specialty": "cardiology",
                "page_number": 1,
                "page_size": 10,
                "sort_by": "name",
                "sort_descending": False,
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert [p["name"] for p in body["providers"]] == [
            "Dr. Baker",
            "Dr. Evans",
            "Dr. Fischer",
            "Dr. Novak",
            "Dr. Zhang",
        ]
        assert body["total_count"] == 5
        assert body["total_pages"] == 1
        assert body["has_previous_page"] is False
        assert body["has_next_page"] is False

    def test_advanced_search_rejects_page_zero(self, client):
        response = client.post("/api/providers/advanced-search", json={"page_number": 0})

        assert response.status_code == 400


class TestStoreFailures:
    """Unexpected failures become a generic 500 without internal detail."""

    def test_member_search_failure(self, client):
        failing_service = MagicMock()
        failing_service.advanced_search = AsyncMock(
            side_effect=RuntimeError("connection refused on 10.0.0.5")
        )
        app.dependency_overrides[get_member_service] = lambda: failing_service

        response = client.post("/api/members/advanced-search", json={})

        assert response.status_code == 500
        assert response.json()["detail"] == "Internal server error"

    def test_provider_list_failure(self, client):
        failing_service = MagicMock()
        failing_service.get_all_providers = AsyncMock(side_effect=RuntimeError("boom"))
        app.dependency_overrides[get_provider_service] = lambda: failing_service

        response = client.get("/api/providers")

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}
