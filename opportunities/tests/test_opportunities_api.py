"""
API tests for the opportunities app.
"""
import pytest

from categories.models import Category
from opportunities.models import Opportunity


def payload(category, **overrides):
    data = {
        "title": "Field officer",
        "description": "Six month contract",
        "location": "Kisumu",
        "deadline": "2025-06-30",
        "category": category.id,
        "organization": "Lake Basin Trust",
        "application_link": "https://jobs.example.org/field-officer",
    }
    data.update(overrides)
    return data


@pytest.mark.django_db
def test_opportunity_crud(auth_client, user, opportunity_category):
    resp = auth_client.post("/api/opportunities/", payload(opportunity_category), content_type="application/json")
    assert resp.status_code == 201
    body = resp.json()
    assert body["unique_id"].startswith("OPP-")
    assert body["user_id"] == user.id
    assert body["category_name"] == "Jobs"

    url = f"/api/opportunities/{body['unique_id']}/"
    resp = auth_client.patch(url, {"deadline": "2025-07-15"}, content_type="application/json")
    assert resp.status_code == 200
    assert resp.json()["deadline"] == "2025-07-15"

    assert auth_client.delete(url).status_code == 204
    assert not Opportunity.objects.exists()


@pytest.mark.django_db
def test_application_link_must_be_a_url(auth_client, opportunity_category):
    resp = auth_client.post(
        "/api/opportunities/",
        payload(opportunity_category, application_link="apply at the office"),
        content_type="application/json",
    )
    assert resp.status_code == 400
    assert "application_link" in resp.json()


@pytest.mark.django_db
def test_filter_by_category_and_mine(auth_client, other_client, opportunity_category):
    tenders = Category.objects.create(name="Tenders", type=Category.OPPORTUNITY)
    auth_client.post("/api/opportunities/", payload(opportunity_category), content_type="application/json")
    other_client.post("/api/opportunities/", payload(tenders, title="Supply tender"), content_type="application/json")

    filtered = auth_client.get("/api/opportunities/", {"category": tenders.id}).json()
    assert [o["title"] for o in filtered["results"]] == ["Supply tender"]

    mine = other_client.get("/api/opportunities/mine/").json()
    assert [o["title"] for o in mine["results"]] == ["Supply tender"]


@pytest.mark.django_db
def test_non_owner_cannot_delete(auth_client, other_client, opportunity_category):
    unique_id = auth_client.post(
        "/api/opportunities/", payload(opportunity_category), content_type="application/json"
    ).json()["unique_id"]

    assert other_client.delete(f"/api/opportunities/{unique_id}/").status_code == 403
