"""Integration tests for API endpoints"""

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from revelation_gateway.api.dependencies import get_insights_service, get_market_client
from revelation_gateway.infrastructure.clients.market import MarketClient
from revelation_gateway.services.insights import InsightsService

pytestmark = pytest.mark.integration

USER = {"X-User-ID": "user_good"}
OTHER_USER = {"X-User-ID": "user_other"}


def _days_ago(days: int) -> str:
    return (date.today() - timedelta(days=days)).isoformat()


@pytest.fixture
def seeded(client: TestClient):
    """Food spending doubled month over month, a salary and a nearly finished goal"""
    rows = [
        {"date": _days_ago(45), "amount": 100, "category": "food", "type": "expense"},
        {"date": _days_ago(5), "amount": -200, "category": "food"},
        {"date": _days_ago(10), "amount": 3000, "category": "salary", "type": "income"},
    ]
    for row in rows:
        assert client.post("/v1/transactions", json=row, headers=USER).status_code == 201

    goal = client.post("/v1/goals", json={"title": "Emergency fund", "targetAmount": 1000}, headers=USER).json()
    client.patch(f"/v1/goals/{goal['id']}", json={"currentAmount": 900}, headers=USER)
    return goal


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "revelation-gateway"}


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "revelation_overall_score" in response.text


def test_request_id_is_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_missing_user_header_is_rejected(client: TestClient):
    assert client.get("/v1/insights/score").status_code == 422
    assert client.get("/v1/transactions").status_code == 422


# Transactions


def test_transaction_crud(client: TestClient):
    created = client.post(
        "/v1/transactions",
        json={"date": _days_ago(1), "amount": 12.5, "category": "coffee", "type": "expense"},
        headers=USER,
    )
    assert created.status_code == 201
    body = created.json()
    assert body["amount"] == -12.5
    assert body["source"] == "manual"

    listed = client.get("/v1/transactions", params={"from": _days_ago(7)}, headers=USER).json()
    assert [t["id"] for t in listed] == [body["id"]]
    assert client.get("/v1/transactions", headers=OTHER_USER).json() == []

    assert client.delete(f"/v1/transactions/{body['id']}", headers=OTHER_USER).status_code == 404
    assert client.delete(f"/v1/transactions/{body['id']}", headers=USER).status_code == 204
    assert client.get("/v1/transactions", headers=USER).json() == []


def test_zero_amount_transaction_is_rejected(client: TestClient):
    response = client.post(
        "/v1/transactions",
        json={"date": _days_ago(1), "amount": 0, "category": "food"},
        headers=USER,
    )
    assert response.status_code == 422


# Goals, emotions, notifications


def test_goal_crud(client: TestClient):
    created = client.post(
        "/v1/goals",
        json={"title": "Trip", "targetAmount": 2000, "deadline": (date.today() + timedelta(days=180)).isoformat()},
        headers=USER,
    )
    assert created.status_code == 201
    goal = created.json()
    assert goal["currentAmount"] == 0
    assert goal["status"] == "active"

    updated = client.patch(f"/v1/goals/{goal['id']}", json={"currentAmount": 500}, headers=USER)
    assert updated.json()["currentAmount"] == 500

    assert client.get(f"/v1/goals/{goal['id']}", headers=OTHER_USER).status_code == 404
    assert client.delete(f"/v1/goals/{goal['id']}", headers=USER).status_code == 204
    assert client.get(f"/v1/goals/{goal['id']}", headers=USER).status_code == 404


def test_emotion_crud(client: TestClient):
    created = client.post("/v1/emotions", json={"mood": "stressed", "note": "Deadline"}, headers=USER)
    assert created.status_code == 201
    emotion = created.json()
    assert emotion["date"] == date.today().isoformat()

    updated = client.patch(f"/v1/emotions/{emotion['id']}", json={"mood": "calm"}, headers=USER)
    assert updated.json()["mood"] == "calm"

    assert client.post("/v1/emotions", json={"mood": "hangry"}, headers=USER).status_code == 422
    assert client.delete(f"/v1/emotions/{emotion['id']}", headers=USER).status_code == 204


def test_notification_read_flow(client: TestClient):
    created = client.post("/v1/notifications", json={"type": "goals", "message": "Goal reached"}, headers=USER)
    assert created.status_code == 201
    notification = created.json()
    assert notification["read"] is False

    read = client.post(f"/v1/notifications/{notification['id']}/read", headers=USER)
    assert read.json()["read"] is True
    assert read.json()["readAt"] is not None

    assert client.get("/v1/notifications", params={"unread_only": True}, headers=USER).json() == []
    assert client.delete(f"/v1/notifications/{notification['id']}", headers=USER).status_code == 204


# Insights


def test_revelation_insights(client: TestClient, seeded):
    response = client.get("/v1/insights/revelation", headers=USER)

    assert response.status_code == 200
    insights = response.json()["insights"]
    assert insights[0]["id"] == "spending-food"
    assert insights[0]["severity"] == "warning"
    assert insights[0]["comparison"]["change"] == 100
    assert any(i["id"] == f"goal-{seeded['id']}" and i["severity"] == "positive" for i in insights)
    assert all(i["psychologicalFact"] for i in insights)


def test_empty_user_gets_empty_insights(client: TestClient):
    response = client.get("/v1/insights/revelation", headers=OTHER_USER)

    assert response.status_code == 200
    assert response.json() == {"insights": []}


def test_revelation_score(client: TestClient, seeded):
    response = client.get("/v1/insights/score", headers=USER)

    assert response.status_code == 200
    score = response.json()
    assert score["goalProgress"] == 90
    assert score["breakdown"]["goal_achievement"] == 90
    for key in ("overall", "financialHealth", "behavioralDiscipline", "goalProgress"):
        assert 0 <= score[key] <= 100


def test_score_is_cached_until_data_changes(client: TestClient, seeded):
    first = client.get("/v1/insights/score", headers=USER).json()

    client.patch(f"/v1/goals/{seeded['id']}", json={"currentAmount": 100}, headers=USER)
    second = client.get("/v1/insights/score", headers=USER).json()

    assert first["goalProgress"] == 90
    assert second["goalProgress"] == 10


def test_complete_revelation_pushes_notification(client: TestClient, notifier, seeded):
    response = client.get("/v1/insights/complete", headers=USER)

    assert response.status_code == 200
    body = response.json()
    assert body["nextUpdateIn"] == "24h"
    assert [i["id"] for i in body["insights"]["warning"]] == ["spending-food"]
    assert body["stats"]["totalInsights"] == 2
    assert body["stats"]["improvementPotential"] == 25
    assert body["priorities"][-1]["level"] == "opportunity"

    notifier.push.assert_awaited_once()
    user_id, payload = notifier.push.await_args.args
    assert user_id == "user_good"
    assert payload["event"] == "INSIGHTS_READY"
    assert payload["overall_score"] == body["score"]["overall"]

    stored = client.get("/v1/notifications", headers=USER).json()
    assert [n["type"] for n in stored] == ["insights"]


def test_complete_revelation_without_warnings_stays_quiet(client: TestClient, notifier):
    response = client.get("/v1/insights/complete", headers=OTHER_USER)

    assert response.status_code == 200
    assert response.json()["stats"]["totalInsights"] == 0
    notifier.push.assert_not_called()


def test_data_store_failure_returns_503(client: TestClient, fake_store_factory):
    client.app.dependency_overrides[get_insights_service] = lambda: InsightsService(
        store=fake_store_factory(fail=True)
    )

    for path in ("/v1/insights/revelation", "/v1/insights/score", "/v1/insights/complete"):
        response = client.get(path, headers=USER)
        assert response.status_code == 503
        assert response.json()["detail"] == "Data store unavailable"


# Supporting content


def test_psychology_facts(client: TestClient):
    by_category = client.get("/v1/insights/psychology-facts", params={"category": "spending"}).json()
    assert [f["relevance"] for f in by_category["facts"]] == [9, 8]

    random_facts = client.get("/v1/insights/psychology-facts").json()
    assert len(random_facts["facts"]) == 3


def test_bias_lookup(client: TestClient):
    response = client.get("/v1/insights/biases/status_quo")
    assert response.status_code == 200
    assert response.json()["psychologicalFact"]

    assert client.get("/v1/insights/biases/unknown").status_code == 404


def test_market_sentiment_neutral_without_api_key(client: TestClient):
    client.app.dependency_overrides[get_market_client] = lambda: MarketClient(api_key="")

    response = client.get("/v1/insights/market-sentiment")

    assert response.status_code == 200
    assert response.json()["sentiment"] == "neutral"
    assert response.json()["confidence"] == 0.7


# Validation


@pytest.mark.parametrize("amount", ["inf", "-inf", "nan"])
def test_non_finite_transaction_amount_is_rejected(client: TestClient, amount):
    response = client.post(
        "/v1/transactions",
        json={"date": _days_ago(1), "amount": amount, "category": "food"},
        headers=USER,
    )

    assert response.status_code == 422
    assert client.get("/v1/transactions", headers=USER).json() == []
    assert client.get("/v1/insights/score", headers=USER).status_code == 200


def test_non_finite_goal_amounts_are_rejected(client: TestClient):
    assert client.post("/v1/goals", json={"title": "Moon", "targetAmount": "inf"}, headers=USER).status_code == 422

    goal = client.post("/v1/goals", json={"title": "Trip", "targetAmount": 1000}, headers=USER).json()
    for field in ("targetAmount", "currentAmount"):
        response = client.patch(f"/v1/goals/{goal['id']}", json={field: "nan"}, headers=USER)
        assert response.status_code == 422


@pytest.mark.parametrize("field", ["title", "targetAmount", "currentAmount", "status"])
def test_goal_patch_with_null_required_field_is_rejected(client: TestClient, field):
    goal = client.post("/v1/goals", json={"title": "Trip", "targetAmount": 1000}, headers=USER).json()

    response = client.patch(f"/v1/goals/{goal['id']}", json={field: None}, headers=USER)

    assert response.status_code == 422
    assert client.get(f"/v1/goals/{goal['id']}", headers=USER).json()["title"] == "Trip"


def test_goal_patch_can_clear_deadline(client: TestClient):
    deadline = (date.today() + timedelta(days=90)).isoformat()
    goal = client.post(
        "/v1/goals", json={"title": "Trip", "targetAmount": 1000, "deadline": deadline}, headers=USER
    ).json()

    response = client.patch(f"/v1/goals/{goal['id']}", json={"deadline": None}, headers=USER)

    assert response.status_code == 200
    assert response.json()["deadline"] is None


def test_emotion_patch_with_null_mood_is_rejected(client: TestClient):
    emotion = client.post("/v1/emotions", json={"mood": "calm", "note": "Quiet day"}, headers=USER).json()

    assert client.patch(f"/v1/emotions/{emotion['id']}", json={"mood": None}, headers=USER).status_code == 422
    cleared = client.patch(f"/v1/emotions/{emotion['id']}", json={"note": None}, headers=USER)
    assert cleared.status_code == 200
    assert cleared.json() == {**emotion, "note": None}
