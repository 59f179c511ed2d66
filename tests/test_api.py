"""End-to-end tests through the HTTP API."""

import uuid
from datetime import date, timedelta
from decimal import Decimal

import pytest

API = "/api/v1"


@pytest.fixture
def property_id(client):
    response = client.post(f"{API}/properties/", json={
        "name": "Quiet Reading Room",
        "address": "12 Library Road",
        "total_seats": 50,
    })
    assert response.status_code == 201
    return response.json()["id"]


@pytest.fixture
def headers(property_id):
    return {"X-Property-Id": property_id}


@pytest.fixture
def seated(client, property_id, headers):
    layout = client.post(f"{API}/layouts/{property_id}/generate")
    assert layout.status_code == 201
    created = client.post(f"{API}/seats/bulk", json={}, headers=headers)
    assert created.status_code == 201
    return created.json()


@pytest.fixture
def shift_id(client, headers):
    response = client.post(f"{API}/shifts/", json={
        "name": "Morning",
        "start_time": "08:00",
        "end_time": "14:00",
        "fee": 500,
    }, headers=headers)
    assert response.status_code == 201
    return response.json()["id"]


def book(client, headers, shift_id, seat_no="seat-1", email="asha@example.com", **extra):
    data = {
        "firstName": "Asha",
        "lastName": "Verma",
        "email": email,
        "phone": "9800000001",
        "seatNo": seat_no,
        "shift": shift_id,
        "moveInDate": date.today().isoformat(),
        **extra,
    }
    return client.post(f"{API}/bookings/", data=data, headers=headers)


class TestSetupFlow:
    """A property from creation to its first booking."""

    def test_layout_and_seats(self, client, property_id, seated):
        layout = client.get(f"{API}/layouts/{property_id}").json()
        assert (layout["rows"], layout["columns"]) == (8, 7)
        assert len(seated) == 50
        assert seated[0]["seat_number"] == "seat-1"
        assert seated[0]["status"] == "available"

    def test_save_layout_create_then_update(self, client, property_id):
        body = {"rows": 1, "columns": 2, "layout": [[True, False]]}
        assert client.post(f"{API}/layouts/{property_id}", json=body).status_code == 201
        assert client.post(f"{API}/layouts/{property_id}", json=body).status_code == 200

    def test_booking_creates_student_assignment_and_payment(
        self, client, property_id, headers, seated, shift_id
    ):
        response = book(client, headers, shift_id)
        assert response.status_code == 201
        booking = response.json()
        assert booking["assignment"]["status"] == "active"
        assert Decimal(booking["balance_amount"]) == Decimal("500")

        status = client.get(f"{API}/students/{booking['student_id']}/payment-status").json()
        assert status["status"] == "pending"
        assert Decimal(status["amount"]) == Decimal("500")

        occupancy = client.get(f"{API}/properties/{property_id}/occupancy").json()
        assert occupancy == {
            "total": 50, "available": 49, "occupied": 1, "prebooked": 0, "maintenance": 0,
        }

        detail = client.get(f"{API}/students/{booking['student_id']}").json()
        assert detail["current_assignments"][0]["seat"]["seat_number"] == "seat-1"
        assert detail["current_assignments"][0]["shift"]["name"] == "Morning"
        assert detail["current_assignments"][0]["payment_id"] == booking["payment_id"]
        assert detail["payment_status"]["status"] == "pending"

    def test_booking_accepts_bare_seat_number_and_documents(self, client, headers, seated, shift_id):
        response = client.post(
            f"{API}/bookings/",
            data={
                "firstName": "Ravi",
                "email": "ravi@example.com",
                "phone": "9800000002",
                "seatNo": "7",
                "shift": shift_id,
                "moveInDate": date.today().isoformat(),
            },
            files={"profilePhoto": ("ravi.png", b"\x89PNG", "image/png")},
            headers=headers,
        )
        assert response.status_code == 201

        detail = client.get(f"{API}/students/{response.json()['student_id']}").json()
        assert detail["current_assignments"][0]["seat"]["seat_number"] == "seat-7"
        assert [d["type"] for d in detail["documents"]] == ["profile_photo"]

    def test_future_booking_prebooks(self, client, headers, seated, shift_id, property_id):
        move_in = (date.today() + timedelta(days=10)).isoformat()
        assert book(client, headers, shift_id, moveInDate=move_in).status_code == 201

        prebooked = client.get(f"{API}/seats/", params={"status": "prebooked"}, headers=headers).json()
        assert [s["seat_number"] for s in prebooked] == ["seat-1"]


class TestAssignmentFlow:
    """Release, transfer and payments over HTTP."""

    def test_release_and_transfer(self, client, headers, seated, shift_id):
        booking = book(client, headers, shift_id).json()
        assignment_id = booking["assignment"]["id"]
        seat_2 = next(s for s in seated if s["seat_number"] == "seat-2")

        moved = client.post(f"{API}/assignments/{assignment_id}/transfer", json={"new_seat_id": seat_2["id"]})
        assert moved.status_code == 200
        assert moved.json()["seat_id"] == seat_2["id"]

        released = client.post(f"{API}/assignments/{assignment_id}/release", json={})
        assert released.status_code == 200
        assert released.json()["status"] == "completed"

        history = client.get(f"{API}/seats/{seat_2['id']}/history").json()
        assert [h["id"] for h in history] == [assignment_id]
        seats = client.get(f"{API}/seats/", params={"status": "available"}, headers=headers).json()
        assert len(seats) == 50

    def test_transfer_onto_reset_seat_is_seat_unavailable(self, client, headers, seated, shift_id):
        book(client, headers, shift_id)
        moving = book(client, headers, shift_id, seat_no="seat-2", email="ravi@example.com").json()
        seat_1 = seated[0]
        client.put(f"{API}/seats/{seat_1['id']}/status", json={"status": "available"})

        response = client.post(
            f"{API}/assignments/{moving['assignment']['id']}/transfer", json={"new_seat_id": seat_1["id"]}
        )

        assert response.status_code == 409
        body = response.json()
        assert body["error"] == "seat_unavailable"
        assert body["details"] == [{"seat_id": seat_1["id"]}]

    def test_one_seat_per_shift_per_student(self, client, headers, seated, shift_id):
        assert book(client, headers, shift_id).status_code == 201

        response = book(client, headers, shift_id, seat_no="seat-2")

        assert response.status_code == 409
        assert response.json()["error"] == "conflict"

    def test_collect_and_stats(self, client, headers, seated, shift_id):
        booking = book(client, headers, shift_id).json()
        payment_id = booking["payment_id"]

        collected = client.post(f"{API}/payments/{payment_id}/collect", json={"amount": 200, "payment_method": "cash"})
        assert collected.status_code == 200
        assert collected.json()["status"] == "partial"

        stats = client.get(f"{API}/payments/stats", headers=headers).json()
        assert stats["by_status"]["partial"]["count"] == 1

        assert client.get(f"{API}/payments/overdue", headers=headers).json() == []
        assert client.put(f"{API}/payments/{payment_id}/complete", json={}).json()["status"] == "completed"

        listed = client.get(f"{API}/students/", headers=headers).json()
        assert listed[0]["payment_status"]["status"] == "paid"


class TestErrorEnvelope:
    """Every failure uses the same {error, message} body."""

    def test_double_booking_is_seat_unavailable(self, client, headers, seated, shift_id):
        assert book(client, headers, shift_id).status_code == 201

        response = book(client, headers, shift_id, email="other@example.com")

        assert response.status_code == 409
        body = response.json()
        assert body["error"] == "seat_unavailable"
        assert "seat-1" in body["message"]
        assert len(client.get(f"{API}/assignments/", headers=headers).json()) == 1

    def test_not_found(self, client):
        response = client.get(f"{API}/students/{uuid.uuid4()}")
        assert response.status_code == 404
        assert response.json() == {"error": "not_found", "message": "Student not found"}

    def test_unknown_route(self, client):
        response = client.get(f"{API}/nowhere")
        assert response.status_code == 404
        assert response.json() == {"error": "not_found", "message": "Not Found"}

    def test_missing_booking_field(self, client, headers, seated, shift_id):
        response = client.post(f"{API}/bookings/", data={
            "firstName": "Asha", "email": "asha@example.com", "phone": "1", "shift": shift_id,
        }, headers=headers)
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
        assert "seatNo" in response.json()["message"]

    def test_request_validation(self, client, property_id):
        response = client.post(f"{API}/layouts/{property_id}", json={"rows": 2, "columns": 2, "layout": [[True]]})
        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "validation_error"
        assert isinstance(body["details"], list)

    def test_seats_need_a_property(self, client):
        response = client.get(f"{API}/seats/")
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_overpayment_rejected(self, client, headers, seated, shift_id):
        payment_id = book(client, headers, shift_id).json()["payment_id"]
        response = client.post(f"{API}/payments/{payment_id}/collect", json={"amount": 900})
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_clear_seats_conflicts_with_assignments(self, client, property_id, headers, seated, shift_id):
        book(client, headers, shift_id)
        response = client.delete(f"{API}/properties/{property_id}/seats")
        assert response.status_code == 409
        assert response.json()["error"] == "conflict"


class TestResourceEdits:
    """Updates and guarded deletes on properties, seats, shifts and students."""

    def test_patch_property(self, client, property_id):
        response = client.patch(f"{API}/properties/{property_id}", json={"opening_hours": "06:00-22:00"})
        assert response.status_code == 200
        assert response.json()["opening_hours"] == "06:00-22:00"
        assert response.json()["total_seats"] == 50

    def test_seat_section_and_status(self, client, headers, seated):
        seat_id = seated[0]["id"]
        assert client.patch(f"{API}/seats/{seat_id}", json={"section": "A"}).json()["section"] == "A"
        assert client.put(f"{API}/seats/{seat_id}/status", json={"status": "maintenance"}).json()["status"] == "maintenance"

        in_a = client.get(f"{API}/seats/", params={"section": "A"}, headers=headers).json()
        assert [s["id"] for s in in_a] == [seat_id]
        occupancy = client.get(f"{API}/properties/{headers['X-Property-Id']}/occupancy").json()
        assert occupancy["maintenance"] == 1
        assert occupancy["total"] == 49

    def test_delete_unused_seat(self, client, headers, seated):
        seat_id = seated[-1]["id"]
        response = client.delete(f"{API}/seats/{seat_id}")
        assert response.json() == {"id": seat_id, "deleted": True}
        assert len(client.get(f"{API}/seats/", headers=headers).json()) == 49

    def test_shift_update_and_guarded_delete(self, client, headers, seated, shift_id):
        updated = client.put(f"{API}/shifts/{shift_id}", json={"fee": 650})
        assert Decimal(updated.json()["fee"]) == Decimal("650")

        book(client, headers, shift_id)
        response = client.delete(f"{API}/shifts/{shift_id}")
        assert response.status_code == 409

        spare = client.post(f"{API}/shifts/", json={
            "name": "Night", "start_time": "20:00", "end_time": "23:00", "fee": 300,
        }, headers=headers).json()
        assert client.delete(f"{API}/shifts/{spare['id']}").status_code == 200
        assert [s["name"] for s in client.get(f"{API}/shifts/", headers=headers).json()] == ["Morning"]

    def test_shift_time_format(self, client, headers):
        response = client.post(f"{API}/shifts/", json={
            "name": "Bad", "start_time": "8am", "end_time": "14:00", "fee": 100,
        }, headers=headers)
        assert response.status_code == 422

    def test_patch_student(self, client, headers, seated, shift_id):
        student_id = book(client, headers, shift_id).json()["student_id"]
        response = client.patch(f"{API}/students/{student_id}", json={"course": "UPSC", "email": "Asha.V@Example.com"})
        assert response.status_code == 200
        assert response.json()["course"] == "UPSC"
        assert response.json()["email"] == "asha.v@example.com"

    def test_bulk_seat_update(self, client, headers, seated):
        first, second = seated[0]["id"], seated[1]["id"]

        response = client.patch(f"{API}/seats/bulk", json=[
            {"id": first, "section": "A"},
            {"id": second, "status": "maintenance", "notes": "broken lamp"},
        ])

        assert response.status_code == 200
        assert [(s["section"], s["status"]) for s in response.json()] == [
            ("A", "available"), (None, "maintenance"),
        ]
        in_a = client.get(f"{API}/seats/", params={"section": "A"}, headers=headers).json()
        assert [s["id"] for s in in_a] == [first]

    def test_bulk_seat_update_unknown_seat(self, client, seated):
        response = client.patch(f"{API}/seats/bulk", json=[{"id": str(uuid.uuid4()), "section": "A"}])
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_student_stats(self, client, headers, seated, shift_id):
        payment_id = book(client, headers, shift_id).json()["payment_id"]
        book(client, headers, shift_id, seat_no="seat-2", email="ravi@example.com")
        client.post(f"{API}/payments/{payment_id}/collect", json={"amount": 500})

        stats = client.get(f"{API}/students/stats", headers=headers).json()

        assert stats["total_students"] == 2
        assert stats["students_with_pending_payments"] == 1
        assert Decimal(stats["payment_summary"]["total_due"]) == Decimal("1000")
        assert Decimal(stats["payment_summary"]["outstanding_balance"]) == Decimal("500")
