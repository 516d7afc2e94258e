from datetime import date, timedelta

from arogya.models import Patient
from tests.conftest import OTHER_DOCTOR_ID, auth_header

new_patient_data = {
    "full_name": "Ravi Sharma",
    "age": 34,
    "gender": "Male",
    "phone": "9876543210",
    "village": "Nabha",
    "conditions": "Diabetes, , Hypertension ",
    "notes": "Prefers morning visits",
}


def test_create_patient_appears_once(client, doctor_headers, db_session):
    response = client.post("/api/v1/patients", json=new_patient_data, headers=doctor_headers)
    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "Patient added successfully"

    created = [p for p in data["patients"] if p["full_name"] == "Ravi Sharma"]
    assert len(created) == 1
    patient = created[0]
    assert patient["conditions"] == ["Diabetes", "Hypertension"]
    assert patient["status"] == "active"
    assert patient["total_visits"] == 0
    assert patient["initials"] == "RS"
    assert db_session.query(Patient).count() == 1


def test_short_name_is_not_stored(client, doctor_headers, db_session):
    data = {**new_patient_data, "full_name": "R"}
    response = client.post("/api/v1/patients", json=data, headers=doctor_headers)
    assert response.status_code == 422
    assert response.json()["errors"]["full_name"] == "Name must be at least 2 characters"
    assert db_session.query(Patient).count() == 0


def test_list_orders_by_last_visit(client, doctor_headers, make_patient):
    make_patient(full_name="Older Visit", last_visit_date=date.today() - timedelta(days=30))
    make_patient(full_name="Recent Visit", last_visit_date=date.today() - timedelta(days=1))

    response = client.get("/api/v1/patients", headers=doctor_headers)
    assert response.status_code == 200
    names = [p["full_name"] for p in response.json()["patients"]]
    assert names == ["Recent Visit", "Older Visit"]


def test_search_and_stats(client, doctor_headers, make_patient):
    make_patient(full_name="Ravi Sharma", conditions=["Diabetes"])
    make_patient(full_name="Harjit Kaur", village="Sharmapur")
    make_patient(full_name="Baldev Singh", conditions=["Arthritis"], status="inactive")

    response = client.get("/api/v1/patients", params={"search": "sharma"}, headers=doctor_headers)
    data = response.json()
    assert sorted(p["full_name"] for p in data["patients"]) == ["Harjit Kaur", "Ravi Sharma"]
    assert data["shown"] == 2
    # Stats are over the whole list, not the filtered view
    assert data["stats"] == {"total": 3, "active": 2, "follow_up": 1}


def test_search_by_condition(client, doctor_headers, make_patient):
    make_patient(full_name="Ravi Sharma", conditions=["Hypertension"])
    make_patient(full_name="Harjit Kaur")

    response = client.get("/api/v1/patients", params={"search": "HYPER"}, headers=doctor_headers)
    assert [p["full_name"] for p in response.json()["patients"]] == ["Ravi Sharma"]


def test_update_patient(client, doctor_headers, make_patient):
    patient = make_patient()
    response = client.patch(
        f"/api/v1/patients/{patient.id}",
        json={"village": "Patiala", "conditions": "Asthma", "status": "inactive"},
        headers=doctor_headers,
    )
    assert response.status_code == 200
    updated = response.json()["patients"][0]
    assert updated["village"] == "Patiala"
    assert updated["conditions"] == ["Asthma"]
    assert updated["status"] == "inactive"
    assert updated["full_name"] == "Harjit Kaur"


def test_record_visit(client, doctor_headers, make_patient):
    patient = make_patient(total_visits=2)
    response = client.post(f"/api/v1/patients/{patient.id}/visits", headers=doctor_headers)
    assert response.status_code == 200
    visited = response.json()["patients"][0]
    assert visited["total_visits"] == 3
    assert visited["last_visit_date"] == date.today().isoformat()


def test_delete_patient(client, doctor_headers, make_patient):
    patient = make_patient()
    response = client.delete(f"/api/v1/patients/{patient.id}", headers=doctor_headers)
    assert response.status_code == 200
    assert response.json()["patients"] == []
    assert response.json()["message"] == "Patient deleted successfully"


def test_other_doctor_cannot_see_or_change_patients(client, doctor, other_doctor, make_patient):
    patient = make_patient()
    headers = auth_header(OTHER_DOCTOR_ID)

    response = client.get("/api/v1/patients", headers=headers)
    assert response.json()["patients"] == []

    response = client.patch(f"/api/v1/patients/{patient.id}", json={"village": "Elsewhere"}, headers=headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Patient not found"

    response = client.delete(f"/api/v1/patients/{patient.id}", headers=headers)
    assert response.status_code == 404


def test_dashboard(client, doctor_headers, make_patient):
    make_patient()
    response = client.get("/api/v1/dashboard", headers=doctor_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["doctor_name"] == "Sharma"
    assert data["greeting"] in ("Good Morning", "Good Afternoon", "Good Evening")
    assert data["stats"]["total_patients"] == 1
    assert data["stats"]["total_appointments"] == 0
