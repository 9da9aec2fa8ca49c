"""
HTTP API tests
"""
import json

from fastapi import FastAPI
from fastapi.testclient import TestClient

from config import Settings
from cors_config import add_cors
from main import create_app
from store import DemoStore


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["timestamp"]


class TestLogin:

    def test_login_creates_user(self, client):
        response = client.post("/api/auth/login", json={"email": "doc@x.com", "password": "password"})
        assert response.status_code == 200
        user = response.json()["user"]
        assert user["email"] == "doc@x.com"
        assert user["id"]

    def test_login_returns_existing_user(self, client):
        first = client.post("/api/auth/login", json={"email": "doc@x.com", "password": "password"}).json()
        second = client.post("/api/auth/login", json={"email": "doc@x.com", "password": "password"}).json()
        assert first["user"]["id"] == second["user"]["id"]

    def test_login_in_demo_mode(self, demo_client):
        response = demo_client.post("/api/auth/login", json={"email": "doc@x.com", "password": "password"})
        assert response.json() == {"user": {"id": "demo-user", "email": "doc@x.com"}}

    def test_login_without_email_is_rejected(self, client):
        response = client.post("/api/auth/login", json={"password": "password"})
        assert response.status_code == 422
        assert response.json()["error"] == "Invalid request body"


class TestCasesAndHistory:

    def test_case_then_history(self, client):
        response = client.post("/api/cases", json={
            "user_id": "u1", "complaint": "fever", "symptoms": "cough", "vitals": "", "labs": ""
        })
        assert response.status_code == 200
        case_id = response.json()["id"]
        assert case_id

        history = client.get("/api/history/u1").json()
        assert [entry["complaint"] for entry in history] == ["fever"]
        assert history[0]["id"] == case_id
        assert history[0]["report"] is None

    def test_output_pairs_report_with_case(self, client, sample_report):
        case_id = client.post("/api/cases", json={"user_id": "u1", "complaint": "fever"}).json()["id"]
        response = client.post("/api/outputs", json={"case_id": case_id, "content": sample_report})
        assert response.status_code == 200
        assert response.json()["id"]

        entry = client.get("/api/history/u1").json()[0]
        assert entry["complaint"] == "fever"
        assert json.loads(entry["report"]) == sample_report

    def test_output_for_unknown_case_returns_store_message(self, client, sample_report):
        response = client.post("/api/outputs", json={"case_id": "missing", "content": sample_report})
        assert response.status_code == 500
        assert "FOREIGN KEY" in response.json()["error"]

    def test_output_with_partial_report_is_rejected(self, client, sample_report):
        case_id = client.post("/api/cases", json={"user_id": "u1", "complaint": "fever"}).json()["id"]
        del sample_report["workup"]
        response = client.post("/api/outputs", json={"case_id": case_id, "content": sample_report})
        assert response.status_code == 422

    def test_history_does_not_leak_other_users(self, client):
        client.post("/api/cases", json={"user_id": "u1", "complaint": "fever"})
        client.post("/api/cases", json={"user_id": "u2", "complaint": "rash"})

        history = client.get("/api/history/u2").json()
        assert [entry["user_id"] for entry in history] == ["u2"]

    def test_replayed_case_create_makes_new_case(self, client):
        body = {"user_id": "u1", "complaint": "fever"}
        first = client.post("/api/cases", json=body).json()["id"]
        second = client.post("/api/cases", json=body).json()["id"]
        assert first != second
        assert len(client.get("/api/history/u1").json()) == 2

    def test_demo_user_history_is_empty(self, client):
        client.post("/api/cases", json={"user_id": "demo-user", "complaint": "fever"})
        assert client.get("/api/history/demo-user").json() == []


class TestDemoMode:

    def test_case_and_output_return_synthetic_ids(self, demo_client, sample_report):
        case_id = demo_client.post("/api/cases", json={"user_id": "u1", "complaint": "fever"}).json()["id"]
        output = demo_client.post("/api/outputs", json={"case_id": case_id, "content": sample_report})

        assert case_id.startswith("demo-case-")
        assert output.status_code == 200
        assert output.json()["id"].startswith("demo-output-")

    def test_history_is_empty(self, demo_client):
        demo_client.post("/api/cases", json={"user_id": "u1", "complaint": "fever"})
        assert demo_client.get("/api/history/u1").json() == []


class TestReports:

    def test_generate_report(self, client, sample_report):
        response = client.post("/api/reports", json={"complaint": "fever", "symptoms": "cough", "language": "en"})
        assert response.status_code == 200
        assert response.json() == sample_report

    def test_generate_report_failure(self, client, groq_client):
        groq_client.chat.completions.create.side_effect = RuntimeError("model overloaded")
        response = client.post("/api/reports", json={"complaint": "fever"})
        assert response.status_code == 500
        assert "model overloaded" in response.json()["error"]

    def test_generate_report_without_key(self, sql_store):
        app = create_app(settings=Settings(), store=sql_store)
        response = TestClient(app).post("/api/reports", json={"complaint": "fever"})
        assert response.status_code == 500
        assert "not configured" in response.json()["error"]

    def test_consultation_saves_case_and_report(self, client, sample_report):
        response = client.post("/api/consultations", json={
            "user_id": "u1", "complaint": "fever", "symptoms": "cough", "language": "ar"
        })
        assert response.status_code == 200
        body = response.json()
        assert body["report"] == sample_report

        entry = client.get("/api/history/u1").json()[0]
        assert entry["id"] == body["case_id"]
        assert json.loads(entry["report"]) == sample_report

    def test_failed_consultation_saves_nothing(self, client, groq_client):
        groq_client.chat.completions.create.return_value.choices[0].message.content = ""
        response = client.post("/api/consultations", json={"user_id": "u1", "complaint": "fever"})
        assert response.status_code == 500
        assert client.get("/api/history/u1").json() == []


class TestFrontend:

    def test_spa_fallback_in_production(self, tmp_path):
        (tmp_path / "index.html").write_text("<html>shell</html>")
        (tmp_path / "app.js").write_text("console.log('app')")
        settings = Settings(app_env="production", static_dir=str(tmp_path))
        client = TestClient(create_app(settings=settings, store=DemoStore()))

        assert "shell" in client.get("/history/anything").text
        assert "console.log" in client.get("/app.js").text
        assert client.get("/api/health").json()["status"] == "ok"

    def test_no_spa_in_development(self, client):
        assert client.get("/some/page").status_code == 404


def test_cors_defaults_to_any_origin():
    app = FastAPI()
    add_cors(app)

    @app.get("/ping")
    def ping():
        return {"pong": True}

    response = TestClient(app).get("/ping", headers={"Origin": "http://clinic.test"})
    assert response.headers["access-control-allow-origin"] == "*"
