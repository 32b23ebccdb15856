from __future__ import annotations

import io

from src.operator_tracking.operator_tracking.core.exceptions import StoreUnavailableError


def test_departments_roundtrip(client):
    created = client.post("/api/departments", json={"name": "Packaging", "description": "Boxes"})
    assert created.status_code == 201
    assert created.get_json() == {"id": 3, "name": "Packaging", "description": "Boxes"}

    names = [d["name"] for d in client.get("/api/departments").get_json()]
    assert names == ["Assembly", "Packaging", "Quality Control"]


def test_validation_error_is_400(client):
    resp = client.post("/api/departments", json={"name": ""})

    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Department name is required"}


def test_conflict_is_409(client):
    resp = client.post("/api/departments", json={"name": "assembly"})

    assert resp.status_code == 409
    assert resp.get_json()["error"] == "Department name already exists"


def test_operator_crud(client):
    resp = client.post(
        "/api/operators",
        json={"name": "Ann Smith", "email": "ann@example.com", "department_id": 1, "skill_level": "expert"},
    )
    assert resp.status_code == 201
    operator = resp.get_json()
    assert operator["skill_level"] == "expert"
    assert operator["status"] == "offline"

    resp = client.put(f"/api/operators/{operator['id']}", json={"employee_id": "E-7"})
    assert resp.get_json()["employee_id"] == "E-7"
    assert resp.get_json()["name"] == "Ann Smith"

    resp = client.post(f"/api/operators/{operator['id']}/status", json={"status": "on_break"})
    assert resp.get_json()["status"] == "on_break"

    assert client.delete(f"/api/operators/{operator['id']}").status_code == 200
    assert client.get(f"/api/operators/{operator['id']}").status_code == 404


def test_clock_in_and_out(client, repos):
    ann = repos.operators.add("Ann", "ann@example.com")

    resp = client.post("/api/attendance/clock-in", json={"operator_id": ann.id, "shift_id": 1})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["message"] == "Clocked in successfully"
    assert body["record"]["status"] == "present"
    assert body["record"]["clock_out"] is None

    again = client.post("/api/attendance/clock-in", json={"operator_id": ann.id})
    assert again.status_code == 409
    assert again.get_json() == {"error": "Already clocked in today"}

    resp = client.post("/api/attendance/clock-out", json={"operator_id": ann.id})
    assert resp.status_code == 200
    assert "totalHours" in resp.get_json()

    assert client.post("/api/attendance/clock-out", json={"operator_id": ann.id}).status_code == 404
    assert len(client.get(f"/api/attendance?operator_id={ann.id}").get_json()) == 1


def test_assignments(client, repos):
    ann = repos.operators.add("Ann", "ann@example.com")
    bob = repos.operators.add("Bob", "bob@example.com")

    resp = client.post(
        "/api/shift-assignments",
        json={"shift_id": 1, "operator_id": ann.id, "station_id": 1, "assigned_date": "2026-03-02"},
    )
    assert resp.status_code == 201
    assignment = resp.get_json()
    assert assignment["assigned_date"] == "2026-03-02"

    taken = client.post(
        "/api/shift-assignments",
        json={"shift_id": 1, "operator_id": bob.id, "station_id": 1, "assigned_date": "2026-03-02"},
    )
    assert taken.status_code == 409

    listed = client.get("/api/shift-assignments?date=2026-03-02").get_json()
    assert [a["operator_id"] for a in listed] == [ann.id]

    assert client.delete(f"/api/shift-assignments/{assignment['id']}").status_code == 200
    assert client.delete(f"/api/shift-assignments/{assignment['id']}").status_code == 404


def test_shifts_serialise_times_as_iso(client):
    shifts = client.get("/api/shifts").get_json()
    assert shifts[0]["start_time"] == "06:00:00"

    resp = client.post(
        "/api/shifts",
        json={"name": "Afternoon", "start_time": "14:00", "end_time": "22:00", "department_id": 1, "capacity": 6},
    )
    assert resp.status_code == 201
    assert client.put(f"/api/shifts/{resp.get_json()['id']}", json={"capacity": 0}).status_code == 400


def test_stations_and_performance(client):
    assert [s["name"] for s in client.get("/api/stations?line_id=1").get_json()] == ["Press", "Weld"]
    assert client.get("/api/production-lines").get_json()[0]["name"] == "Line A"

    resp = client.put("/api/stations/1/efficiency", json={"efficiency_percentage": 90})
    assert resp.get_json()["efficiency_percentage"] == 90.0
    assert client.put("/api/stations/1/efficiency", json={}).status_code == 400

    resp = client.post("/api/stations/2/performance", json={"units_produced": 40, "work_date": "2026-03-02"})
    assert resp.status_code == 201
    rows = client.get("/api/stations/2/performance").get_json()
    assert [r["units_produced"] for r in rows] == [40]
    assert client.get("/api/stations/99/performance").status_code == 404


def test_import_operators_upload(client, repos):
    data = b"name,email,department_name\nAnn,ann@example.com,Assembly\nBob,,Assembly\n"

    resp = client.post(
        "/api/import/operators",
        data={"file": (io.BytesIO(data), "operators.csv")},
        content_type="multipart/form-data",
    )

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["message"] == "Import completed. 1 operators imported."
    assert body["imported"] == 1
    assert body["errors"] == ["Row 3 skipped: missing name or email"]
    assert repos.operators.get_by_email("ann@example.com").department_id == 1


def test_import_handles_utf8_bom(client):
    data = "\ufeffname,email\nAnn,ann@example.com\n".encode("utf-8")

    resp = client.post(
        "/api/import/operators",
        data={"file": (io.BytesIO(data), "operators.csv")},
        content_type="multipart/form-data",
    )

    assert resp.get_json()["imported"] == 1
    assert resp.get_json()["errors"] is None


def test_import_without_file_is_400(client):
    resp = client.post("/api/import/operators", data={}, content_type="multipart/form-data")

    assert resp.status_code == 400
    assert resp.get_json() == {"error": "No file uploaded"}


def test_import_template(client):
    resp = client.get("/api/import/operators/template")

    assert resp.mimetype == "text/csv"
    assert resp.get_data(as_text=True).strip() == "name,email,employee_id,department_name,skill_level"


def test_dashboard_stats(client, repos):
    repos.dashboard.operator_counts = {"online": 2}

    body = client.get("/api/dashboard/stats").get_json()

    assert body["operators_by_status"] == {"online": 2}
    assert body["lines"] == []


def test_health(client, repos):
    ok = client.get("/api/health")
    assert ok.status_code == 200
    assert ok.get_json() == {"status": "OK", "database": "Connected", "timestamp": "2026-03-02T08:00:00"}

    repos.dashboard.down = True
    down = client.get("/api/health")
    assert down.status_code == 503
    assert down.get_json() == {"status": "ERROR", "database": "Disconnected"}


def test_store_outage_is_503(client, repos, monkeypatch):
    def unavailable():
        raise StoreUnavailableError("Database is unavailable")

    monkeypatch.setattr(repos.departments, "list_all", unavailable)

    resp = client.get("/api/departments")
    assert resp.status_code == 503
    assert resp.get_json() == {"error": "Database is unavailable"}


def test_unexpected_error_is_generic_500(client, repos, monkeypatch):
    def boom():
        raise RuntimeError("secret internals")

    monkeypatch.setattr(repos.departments, "list_all", boom)

    resp = client.get("/api/departments")
    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Internal server error"}


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/nope")

    assert resp.status_code == 404
    assert "error" in resp.get_json()


def test_department_detail(client):
    assert client.get("/api/departments/1").get_json()["name"] == "Assembly"
    assert client.get("/api/departments/9").status_code == 404


def test_today_attendance_for_operator(client, repos):
    ann = repos.operators.add("Ann", "ann@example.com")

    assert client.get(f"/api/operators/{ann.id}/attendance/today").get_json() == {"operator_id": ann.id, "record": None}

    client.post("/api/attendance/clock-in", json={"operator_id": ann.id})
    record = client.get(f"/api/operators/{ann.id}/attendance/today").get_json()["record"]
    assert record["status"] == "present"
    assert client.get("/api/operators/99/attendance/today").status_code == 404
