"""Tests for the guarded example app.

Run from this directory: ``pytest test_app.py``.
"""

import pytest

pytest.importorskip("fastapi")

from fastapi.testclient import TestClient  # noqa: E402

from app.main import app  # noqa: E402

client = TestClient(app)


def graphql_query(query: str, token: str | None = None) -> dict:
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    response = client.post("/graphql/", json={"query": query}, headers=headers)
    assert response.status_code == 200
    return response.json()


def test_me_with_token():
    result = graphql_query("{ me { id name email } }", "admin-token")

    assert result == {
        "data": {"me": {"id": "1", "name": "Ada", "email": "ada@example.com"}}
    }


def test_me_requires_auth():
    result = graphql_query("{ me { id } }")

    assert result["data"] == {"me": None}
    assert result["errors"][0]["extensions"]["code"] == "UNAUTHENTICATED"


def test_member_sees_masked_email():
    result = graphql_query("{ users { name email } }", "member-token")

    assert result["data"]["users"][1] == {"name": "Grace", "email": "g****@example.com"}


def test_member_cannot_read_role():
    result = graphql_query("{ users { role } }", "member-token")

    assert result["data"] == {"users": [{"role": None}, {"role": None}]}
    assert {error["extensions"]["code"] for error in result["errors"]} == {"FORBIDDEN"}


def test_search_term_is_trimmed():
    result = graphql_query('{ searchUsers(term: "  ad ") { name } }', "member-token")

    assert result == {"data": {"searchUsers": [{"name": "Ada"}]}}
