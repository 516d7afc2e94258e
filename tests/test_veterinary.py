from datetime import date, timedelta

from tests.conftest import OTHER_PATIENT_ID, auth_header

animal_data = {
    "animal_id": "NBH-BUF-002",
    "species": "Buffalo",
    "breed": "Murrah",
    "age": "6",
    "last_vaccination": "",
    "current_treatment": "",
}


def test_add_animal_record(client, patient_headers):
    response = client.post("/api/v1/animal-records", json=animal_data, headers=patient_headers)
    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "Animal record added successfully"
    assert len(data["animals"]) == 1
    animal = data["animals"][0]
    assert animal["age"] == 6
    assert animal["last_vaccination"] is None
    assert animal["current_treatment"] is None


def test_animal_record_requires_species(client, patient_headers):
    response = client.post("/api/v1/animal-records", json={**animal_data, "species": ""}, headers=patient_headers)
    assert response.status_code == 422
    assert response.json()["errors"]["species"] == "Please fill required fields"


def test_update_and_delete_animal(client, patient_headers, animal):
    response = client.patch(
        f"/api/v1/animal-records/{animal.id}",
        json={"animal_id": "NBH-COW-001", "species": "Cow", "age": 5, "last_vaccination": "2024-03-01"},
        headers=patient_headers,
    )
    assert response.status_code == 200
    updated = response.json()["animals"][0]
    assert updated["age"] == 5
    assert updated["last_vaccination"] == "2024-03-01"
    assert updated["breed"] is None

    response = client.delete(f"/api/v1/animal-records/{animal.id}", headers=patient_headers)
    assert response.status_code == 200
    assert response.json()["animals"] == []


def test_animals_are_private(client, animal):
    headers = auth_header(OTHER_PATIENT_ID, metadata={"role": "patient"})
    assert client.get("/api/v1/animal-records", headers=headers).json()["animals"] == []
    response = client.delete(f"/api/v1/animal-records/{animal.id}", headers=headers)
    assert response.status_code == 404


def test_vet_view_lists_next_two_slots(client, patient_headers, vet, animal):
    response = client.get("/api/v1/veterinary-appointments", headers=patient_headers)
    assert response.status_code == 200
    data = response.json()
    assert len(data["vets"]) == 1
    assert data["vets"][0]["next_slots"] == [
        {"date": "2030-05-01", "time": "10:00"},
        {"date": "2030-05-01", "time": "11:00"},
    ]
    assert data["animals"] == [{"id": animal.id, "animal_id": "NBH-COW-001", "species": "Cow"}]


def test_book_and_cancel_vet_appointment(client, patient_headers, vet, animal):
    day = (date.today() + timedelta(days=2)).isoformat()
    response = client.post(
        "/api/v1/veterinary-appointments",
        json={"vet_id": vet.id, "animal_id": animal.id, "appointment_date": day,
              "appointment_time": "09:30", "notes": "Not eating"},
        headers=patient_headers,
    )
    assert response.status_code == 201
    booked = response.json()["appointments"][0]
    assert booked["status"] == "pending"
    assert booked["appointment_time"] == "09:30"
    assert booked["vet_name"] == "Dr. Manpreet Gill"
    assert booked["animal_tag"] == "NBH-COW-001"

    response = client.post(f"/api/v1/veterinary-appointments/{booked['id']}/cancel", headers=patient_headers)
    assert response.status_code == 200
    assert response.json()["appointments"][0]["status"] == "cancelled"


def test_cannot_book_for_someone_elses_animal(client, vet, animal):
    headers = auth_header(OTHER_PATIENT_ID, metadata={"role": "patient"})
    response = client.post(
        "/api/v1/veterinary-appointments",
        json={"vet_id": vet.id, "animal_id": animal.id, "appointment_date": date.today().isoformat(),
              "appointment_time": "09:30"},
        headers=headers,
    )
    assert response.status_code == 404
    assert response.json()["message"] == "Animal record not found"


def test_emergency_help(client, patient_headers):
    response = client.get("/api/v1/veterinary-emergency", headers=patient_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["call_link"] == "tel:+91-9876543210"
    assert data["whatsapp_link"] == "https://wa.me/919876543210?text=Emergency%20Vet%20Help%20Needed"
    assert len(data["warning_signs"]) == 8


def test_knowledge_corner(client, patient_headers):
    response = client.get("/api/v1/veterinary-knowledge", headers=patient_headers)
    assert response.status_code == 200
    titles = [s["title"] for s in response.json()["sections"]]
    assert "Mastitis" in titles
    assert "When to Call a Vet" in titles
    assert response.json()["footer"].startswith("Prevention is better than cure")
