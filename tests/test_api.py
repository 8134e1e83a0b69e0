"""API tests — jurisdiction listing, question lookup, generation, PDF tokens."""

import os
import sys

# Ensure the project package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from fastapi.testclient import TestClient
from jose import jwt

from controlkit.main import app
from controlkit.services.token_utils import create_pdf_token, decode_pdf_token

client = TestClient(app)


def _generate(jurisdictions=None, answers=None, **extra):
    body = {"jurisdictions": jurisdictions, "answers": answers, **extra}
    return client.post("/api/generate", json={k: v for k, v in body.items() if v is not None})


# ===================================================================== #
#  General                                                                #
# ===================================================================== #

class TestGeneral:
    def test_health(self):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "healthy"

    def test_root_lists_endpoints(self):
        resp = client.get("/")
        assert resp.status_code == 200
        assert "generate" in resp.json()["endpoints"]


# ===================================================================== #
#  Jurisdictions and questions                                            #
# ===================================================================== #

class TestJurisdictionRoutes:
    def test_list(self):
        resp = client.get("/api/jurisdictions")
        assert resp.status_code == 200
        data = resp.json()["jurisdictions"]
        assert [j["id"] for j in data] == ["eu", "usa", "uk", "brazil", "china", "australia", "canada"]
        assert set(data[0]) == {"id", "name", "regulation", "icon", "questionCount"}

    def test_questions(self):
        resp = client.get("/api/questions/eu")
        assert resp.status_code == 200
        data = resp.json()
        assert data["jurisdiction"] == "eu"
        assert len(data["questions"]) == 12

        by_id = {q["id"]: q for q in data["questions"]}
        assert by_id["generates_synthetic"]["dependsOn"] == {
            "field": "ai_purpose",
            "equals": "content_generation",
        }
        assert "options" not in by_id["interacts_with_people"]
        assert by_id["ai_purpose"]["options"][0] == {
            "value": "biometric_id",
            "label": "Biometric identification (facial recognition, etc.)",
        }

    def test_unknown_jurisdiction_404(self):
        resp = client.get("/api/questions/mars")
        assert resp.status_code == 404
        assert "mars" in resp.json()["detail"]


# ===================================================================== #
#  Generation                                                             #
# ===================================================================== #

class TestGenerate:
    def test_generate_eu_employment(self):
        resp = _generate(["eu"], {"eu": {"ai_purpose": "employment"}}, sessionId="abc123")
        assert resp.status_code == 200
        data = resp.json()

        policy = data["policy"]
        assert "generatedAt" in policy
        block = policy["sections"][0]
        assert block["jurisdiction"] == "eu"
        assert block["title"] == "European Union — EU AI Act"
        risk = next(s for s in block["content"] if s["heading"] == "Risk Classification")
        assert risk["body"].startswith("High-Risk System.")
        assert isinstance(data["pdfToken"], str)

    def test_order_preserved_and_unknown_skipped(self):
        resp = _generate(["usa", "mars", "eu"], {})
        assert resp.status_code == 200
        assert [b["jurisdiction"] for b in resp.json()["policy"]["sections"]] == ["usa", "eu"]

    def test_empty_selection_400(self):
        resp = _generate([], {})
        assert resp.status_code == 400
        assert resp.json()["detail"] == "At least one jurisdiction must be selected"

    def test_missing_selection_400(self):
        resp = _generate(answers={})
        assert resp.status_code == 400

    def test_non_list_selection_400(self):
        resp = client.post("/api/generate", json={"jurisdictions": "eu", "answers": {}})
        assert resp.status_code == 400

    def test_missing_answers_400(self):
        resp = _generate(["eu"])
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Answers are required"

    def test_non_object_answers_400(self):
        resp = client.post("/api/generate", json={"jurisdictions": ["eu"], "answers": ["yes"]})
        assert resp.status_code == 400

    def test_malformed_purpose_still_generates(self):
        resp = _generate(["canada"], {"canada": {"ai_purpose": {"x": 1}, "significant_impact": True}})
        assert resp.status_code == 200
        block = resp.json()["policy"]["sections"][0]
        impact = next(s for s in block["content"] if s["heading"] == "AIDA High-Impact Classification")
        assert "HIGH-IMPACT" in impact["body"]

    def test_null_answer_map_generates_from_empty(self):
        resp = _generate(["eu"], {"eu": None})
        assert resp.status_code == 200
        risk = next(
            s for s in resp.json()["policy"]["sections"][0]["content"]
            if s["heading"] == "Risk Classification"
        )
        assert risk["body"].startswith("Minimal Risk System.")

    def test_missing_body_400(self):
        resp = client.post("/api/generate")
        assert resp.status_code == 400

    def test_analytics_failure_is_non_blocking(self):
        with patch("controlkit.routes.policy.track_generation", side_effect=RuntimeError("down")):
            resp = _generate(["uk"], {})
        assert resp.status_code == 200

    def test_token_failure_returns_null_token(self):
        with patch("controlkit.routes.policy.create_pdf_token", side_effect=RuntimeError("no key")):
            resp = _generate(["uk"], {})
        assert resp.status_code == 200
        assert resp.json()["pdfToken"] is None


# ===================================================================== #
#  PDF tokens                                                             #
# ===================================================================== #

class TestPdfTokens:
    def test_round_trip(self):
        generated = _generate(["canada", "eu"], {"canada": {"province": "quebec"}}).json()
        resp = client.get("/api/pdf", params={"token": generated["pdfToken"]})
        assert resp.status_code == 200
        data = resp.json()
        assert data["message"] == "Use client-side PDF generation with this data"
        assert data["policy"] == generated["policy"]

    def test_missing_token_400(self):
        resp = client.get("/api/pdf")
        assert resp.status_code == 400

    def test_garbage_token_401(self):
        resp = client.get("/api/pdf", params={"token": "not.a.token"})
        assert resp.status_code == 401

    def test_expired_token_401(self):
        token = create_pdf_token(["eu"], {}, datetime.now(timezone.utc), expires_in=-10)
        assert decode_pdf_token(token) is None
        resp = client.get("/api/pdf", params={"token": token})
        assert resp.status_code == 401

    def test_wrong_secret_401(self):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"selectedIds": ["eu"], "answers": {}, "exp": now + timedelta(minutes=5)},
            "some-other-secret",
            algorithm="HS256",
        )
        resp = client.get("/api/pdf", params={"token": token})
        assert resp.status_code == 401

    def test_claims(self):
        now = datetime.now(timezone.utc)
        payload = decode_pdf_token(create_pdf_token(["uk"], {"uk": {"risk_assessment": True}}, now))
        assert payload["selectedIds"] == ["uk"]
        assert payload["answers"] == {"uk": {"risk_assessment": True}}
        assert payload["generatedAt"] == now.isoformat()
        assert payload["exp"] > payload["iat"]
