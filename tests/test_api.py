import io
from datetime import datetime, timezone

import openpyxl
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import get_db
from main import app
from routers.history import get_aggregator
from services import HistoryAggregator
from services.workout_log import WorkoutLogRepository


def _seed(db):
    repo = WorkoutLogRepository(db)
    at = lambda day, hour: datetime(2024, 1, day, hour, 0, tzinfo=timezone.utc)
    repo.insert("bench", 100, 5, at(15, 9))
    repo.insert("bench", 100, 10, at(15, 9))
    repo.insert("squat", 140, 3, at(15, 10))
    repo.insert("Lunge", 20, 12, at(15, 11))
    repo.insert("deadlift", 180, 3, at(20, 18))
    repo.insert("Bench", 60, 10, at(31, 8))


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


def test_root_lists_endpoints(client):
    body = client.get("/").json()
    assert "history" in body["endpoints"]
    assert "workouts" in body["endpoints"]


def test_recording_defaults(client):
    body = client.get("/workouts/assistance-exercises").json()
    assert body["assistance_exercises"][0] == "Dumbbell Press"
    assert "Lunge" in body["assistance_exercises"]
    assert body["lifts"] == ["bench", "squat", "deadlift"]
    assert body["lift_defaults"] == {"weight": 60, "reps": 10, "weight_step": 2.5}
    assert body["assistance_defaults"] == {"weight": 20, "reps": 10, "weight_step": 1}


def test_record_lift_and_read_history(client):
    resp = client.post("/workouts/bench", json={"weight": 100, "reps": 5})
    assert resp.status_code == 201
    created = resp.json()
    assert created["exercise_name"] == "bench"

    client.post("/workouts/bench", json={"weight": 100, "reps": 10})
    client.post("/workouts", json={"exercise": "Lunge", "weight": 20, "reps": 12})

    body = client.get("/history").json()
    assert body["policy"] == "top_n"
    assert body["slots"] == 3
    assert body["days"] == 1
    day = body["history"][0]
    assert [s["strength_index"] for s in day["bench"]] == [133, 117]
    assert day["squat"] == []
    assert day["others"][0]["name"] == "Lunge"


def test_list_get_update_delete(client):
    entry_id = client.post("/workouts", json={"exercise": "squat", "weight": 140, "reps": 3}).json()["id"]

    assert [e["id"] for e in client.get("/workouts").json()] == [entry_id]
    assert client.get(f"/workouts/{entry_id}").json()["weight"] == 140

    resp = client.patch(f"/workouts/{entry_id}", json={"weight": 142.5, "reps": 2})
    assert resp.status_code == 200
    assert resp.json()["weight"] == 142.5
    assert resp.json()["reps"] == 2

    resp = client.delete(f"/workouts/{entry_id}")
    assert resp.status_code == 204
    assert client.get("/workouts").json() == []


def test_missing_entry_is_404(client):
    assert client.get("/workouts/42").status_code == 404
    assert client.patch("/workouts/42", json={"weight": 1, "reps": 1}).status_code == 404
    assert client.delete("/workouts/42").status_code == 404


@pytest.mark.parametrize("payload", [
    {"exercise": "   ", "weight": 20, "reps": 10},
    {"exercise": "Dip", "weight": -2.5, "reps": 10},
    {"exercise": "Dip", "weight": 20, "reps": -1},
    {"weight": 20, "reps": 10},
])
def test_invalid_entries_are_rejected(client, payload):
    assert client.post("/workouts", json=payload).status_code == 422


def test_unknown_lift_path_is_rejected(client):
    assert client.post("/workouts/curl", json={"weight": 20, "reps": 10}).status_code == 422


def test_history_range_filter(client, db):
    _seed(db)

    body = client.get("/history", params={"start": "2024-01-16", "end": "2024-01-31"}).json()
    assert [d["date"] for d in body["history"]] == ["2024/01/31", "2024/01/20"]
    assert body["history"][0]["others"][0]["name"] == "Bench"

    body = client.get("/history", params={"end": "2024-01-15"}).json()
    assert [d["date"] for d in body["history"]] == ["2024/01/15"]


def test_history_invalid_date_is_422(client):
    assert client.get("/history", params={"start": "last week"}).status_code == 422


def test_best_of_day_policy(client, db):
    _seed(db)
    app.dependency_overrides[get_aggregator] = lambda: HistoryAggregator(policy="best_of_day")

    body = client.get("/history").json()

    assert body["slots"] == 1
    day = [d for d in body["history"] if d["date"] == "2024/01/15"][0]
    assert [s["strength_index"] for s in day["bench"]] == [133]


def test_export_csv(client, db):
    _seed(db)

    resp = client.get("/history/export", params={"format": "csv"})

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert "attachment" in resp.headers["content-disposition"]
    assert resp.content.startswith(b"\xef\xbb\xbf")
    lines = resp.content.decode("utf-8-sig").splitlines()
    assert lines[0].startswith("Date,Bench1_kg,Bench1_rep,Bench1_PV")
    assert [line.split(",")[0] for line in lines[1:]] == ["2024/01/31", "2024/01/20", "2024/01/15"]


def test_export_xlsx(client, db):
    _seed(db)

    resp = client.get("/history/export", params={"format": "xlsx", "start": "2024-01-15", "end": "2024-01-15"})

    assert resp.status_code == 200
    assert ".xlsx" in resp.headers["content-disposition"]
    sheet = openpyxl.load_workbook(io.BytesIO(resp.content)).active
    assert sheet["A1"].value == "Date"
    assert sheet["A2"].value == "2024/01/15"
    assert sheet["D2"].value == 133
    assert sheet.max_row == 2


def test_export_empty_range_is_404(client, db):
    _seed(db)

    resp = client.get("/history/export", params={"start": "2025-01-01"})

    assert resp.status_code == 404
    assert resp.json()["detail"] == "No data for range"


def test_export_with_no_entries_is_404(client):
    assert client.get("/history/export").status_code == 404


def test_export_unknown_format_is_422(client):
    assert client.get("/history/export", params={"format": "pdf"}).status_code == 422


def test_store_failure_is_503():
    # No tables created on this engine
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Session = sessionmaker(bind=engine)

    def broken_db():
        session = Session()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = broken_db
    try:
        client = TestClient(app)
        assert client.get("/history").status_code == 503
        assert client.get("/workouts").status_code == 503
        assert client.post("/workouts/bench", json={"weight": 100, "reps": 5}).status_code == 503
    finally:
        app.dependency_overrides.clear()
        engine.dispose()
