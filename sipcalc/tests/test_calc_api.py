from __future__ import annotations

import csv
import io
from math import isclose

from flask.testing import FlaskClient


def fixed_plan(**overrides) -> dict:
    plan = {"kind": "fixed", "contributionAmount": 10000, "periodCount": 120, "category": "mid"}
    plan.update(overrides)
    return plan


def test_fixed_projection_endpoint(client: FlaskClient):
    resp = client.post("/api/calc", json={"plan": fixed_plan()})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["kind"] == "fixed"
    assert body["totalContributed"] == 1_200_000
    assert isclose(body["finalValue"], 10000 * ((1.01**120 - 1) / 0.01) * 1.01, rel_tol=1e-9)
    assert len(body["timeline"]) == 10
    assert body["timeline"][-1]["periodsElapsed"] == 120


def test_freeform_endpoint_accepts_messy_entries(client: FlaskClient):
    plan = {"kind": "freeform", "contributions": ["1000", "", "oops", 1000, 0, None]}
    resp = client.post("/api/calc", json={"plan": plan})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["totalContributed"] == 2000
    assert body["periodCount"] == 6


def test_goal_endpoint(client: FlaskClient):
    plan = {"kind": "goal", "targetValue": 1_000_000, "periodCount": 120, "category": "small"}
    resp = client.post("/api/calc", json={"plan": plan})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["kind"] == "goal"
    assert body["category"] == "small"
    assert 0 < body["requiredContribution"] < 1_000_000 / 120


def test_invalid_plan_returns_422(client: FlaskClient):
    resp = client.post("/api/calc", json={"plan": fixed_plan(contributionAmount=10)})

    assert resp.status_code == 422
    body = resp.get_json()
    assert "detail" in body
    assert body["detail"][0]["loc"][-1] == "contributionAmount"


def test_freeform_validation_message_reaches_client(client: FlaskClient):
    resp = client.post("/api/calc", json={"plan": {"kind": "freeform", "contributions": [0] * 12}})

    assert resp.status_code == 422
    assert "positive" in resp.get_json()["detail"][0]["msg"]


def test_compare_endpoint(client: FlaskClient):
    resp = client.post("/api/calc/compare", json={"amount": 5000, "years": 10})

    assert resp.status_code == 200
    labels = [result["label"] for result in resp.get_json()]
    assert labels == ["Large Cap", "Mid Cap", "Small Cap", "10% annual increase", "Custom amounts"]


def test_tax_endpoint(client: FlaskClient):
    resp = client.post("/api/calc/tax", json={"growth": 500_000, "years": 10})

    assert resp.status_code == 200
    assert isclose(resp.get_json()["taxAmount"], 40_000)


def test_rates_endpoint(client: FlaskClient):
    body = client.get("/api/rates").get_json()
    assert body["categories"] == {"large": 0.10, "mid": 0.12, "small": 0.15}
    assert body["escalating"] == 0.15
    assert body["freeform"] == 0.12


def test_csv_export(client: FlaskClient):
    resp = client.post("/api/calc/export.csv", json={"plan": fixed_plan(periodCount=36)})

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    rows = list(csv.reader(io.StringIO(resp.get_data(as_text=True))))
    assert len(rows) == 4


def test_csv_export_rejects_goal_plans(client: FlaskClient):
    plan = {"kind": "goal", "targetValue": 100_000, "periodCount": 24}
    resp = client.post("/api/calc/export.csv", json={"plan": plan})
    assert resp.status_code == 400
