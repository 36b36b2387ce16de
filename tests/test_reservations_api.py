"""
HTTP tests for availability, booking, staff management, settings and auth.
"""

from app.services.user.user_service import UserService

from conftest import MONDAY, SUNDAY, booking


# ============================================================================
# Availability
# ============================================================================

def test_available_slots_use_camel_case_keys(client, morning_hours):
    response = client.get(f"/api/reservations/available-slots/{MONDAY}")

    assert response.status_code == 200
    assert response.json() == {
        "availableSlots": ["09:00", "10:15", "11:30"],
        "businessHours": {"open": "09:00", "close": "12:00"},
    }


def test_closed_day_has_no_slots_and_null_hours(client, morning_hours):
    response = client.get(f"/api/reservations/available-slots/{SUNDAY}")

    assert response.status_code == 200
    assert response.json() == {"availableSlots": [], "businessHours": None}


def test_booked_slot_disappears_from_availability(client, morning_hours):
    assert client.post("/api/reservations", json=booking(timeSlot="10:15")).status_code == 201

    response = client.get(f"/api/reservations/available-slots/{MONDAY}")

    assert response.json()["availableSlots"] == ["09:00", "11:30"]


def test_malformed_date_is_a_bad_request(client, morning_hours):
    response = client.get("/api/reservations/available-slots/2025-13-45")

    assert response.status_code == 400
    assert "message" in response.json()


# ============================================================================
# Booking
# ============================================================================

def test_create_reservation(client, morning_hours):
    response = client.post("/api/reservations", json=booking())

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Ana López"
    assert body["date"] == MONDAY
    assert body["timeSlot"] == "10:15"
    assert body["status"] == "pending"
    assert body["duration"] == 60
    assert body["userId"] is None
    assert body["id"]


def test_public_booking_cannot_choose_status_or_duration(client, morning_hours):
    response = client.post("/api/reservations", json=booking(status="confirmed", duration=15))

    assert response.status_code == 201
    assert response.json()["status"] == "pending"
    assert response.json()["duration"] == 60


def test_staff_booking_may_set_status_and_duration(client, morning_hours, auth_headers):
    response = client.post(
        "/api/reservations",
        json=booking(status="confirmed", duration=30),
        headers=auth_headers("staff"),
    )

    assert response.status_code == 201
    assert response.json()["status"] == "confirmed"
    assert response.json()["duration"] == 30


def test_double_booking_is_rejected(client, morning_hours):
    assert client.post("/api/reservations", json=booking()).status_code == 201

    response = client.post("/api/reservations", json=booking(name="Luis"))

    assert response.status_code == 400
    assert response.json() == {"message": "Time slot not available"}


def test_booking_on_closed_day_is_rejected(client, morning_hours):
    response = client.post("/api/reservations", json=booking(date=SUNDAY))

    assert response.status_code == 400
    assert response.json() == {"message": "Service not available on this day"}


def test_booking_with_malformed_slot_is_a_bad_request(client, morning_hours):
    response = client.post("/api/reservations", json=booking(timeSlot="25:00"))

    assert response.status_code == 400
    assert response.json()["message"]


def test_signed_in_booking_is_linked_to_the_account(client, morning_hours, make_user, auth_headers):
    user = make_user("cliente")
    headers = auth_headers(user=user)

    created = client.post("/api/reservations", json=booking(), headers=headers)
    assert created.status_code == 201
    assert created.json()["userId"] == str(user.id)

    mine = client.get("/api/reservations/mine", headers=headers)
    assert mine.status_code == 200
    assert [r["id"] for r in mine.json()] == [created.json()["id"]]


def test_invalid_token_on_public_booking_is_treated_as_anonymous(client, morning_hours):
    response = client.post(
        "/api/reservations",
        json=booking(),
        headers={"Authorization": "Bearer not-a-token"},
    )

    assert response.status_code == 201
    assert response.json()["userId"] is None


# ============================================================================
# Staff management
# ============================================================================

def test_listing_requires_staff(client, morning_hours, auth_headers):
    client.post("/api/reservations", json=booking())

    assert client.get("/api/reservations").status_code in (401, 403)
    assert client.get("/api/reservations", headers=auth_headers("cliente")).status_code == 403

    response = client.get("/api/reservations", headers=auth_headers("staff"))
    assert response.status_code == 200
    assert len(response.json()) == 1


def test_get_single_reservation(client, morning_hours, auth_headers):
    created = client.post("/api/reservations", json=booking()).json()
    headers = auth_headers("admin")

    response = client.get(f"/api/reservations/{created['id']}", headers=headers)
    assert response.status_code == 200
    assert response.json()["timeSlot"] == "10:15"

    missing = client.get("/api/reservations/not-a-uuid", headers=headers)
    assert missing.status_code == 404
    assert missing.json() == {"message": "Reservation not found"}


def test_update_ignores_fields_outside_the_allow_list(client, morning_hours, auth_headers):
    created = client.post("/api/reservations", json=booking()).json()

    response = client.put(
        f"/api/reservations/{created['id']}",
        json={"id": "x", "createdAt": "2030-01-01T00:00:00", "name": "New Name"},
        headers=auth_headers("staff"),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "New Name"
    assert body["id"] == created["id"]
    assert body["createdAt"] == created["createdAt"]
    assert body["email"] == created["email"]
    assert body["timeSlot"] == created["timeSlot"]


def test_update_onto_taken_slot_is_rejected(client, morning_hours, auth_headers):
    client.post("/api/reservations", json=booking(timeSlot="09:00"))
    other = client.post("/api/reservations", json=booking(name="Luis", timeSlot="11:30")).json()

    response = client.put(
        f"/api/reservations/{other['id']}",
        json={"timeSlot": "09:00"},
        headers=auth_headers("staff"),
    )

    assert response.status_code == 400
    assert response.json() == {"message": "Time slot not available"}


def test_update_unknown_reservation_is_not_found(client, morning_hours, auth_headers):
    response = client.put(
        "/api/reservations/00000000-0000-0000-0000-000000000000",
        json={"name": "Nobody"},
        headers=auth_headers("staff"),
    )

    assert response.status_code == 404


def test_delete_requires_admin(client, morning_hours, auth_headers):
    created = client.post("/api/reservations", json=booking()).json()
    url = f"/api/reservations/{created['id']}"

    assert client.delete(url, headers=auth_headers("staff")).status_code == 403

    admin = auth_headers("admin")
    response = client.delete(url, headers=admin)
    assert response.status_code == 200
    assert response.json() == {"message": "Reservation deleted successfully"}

    again = client.delete(url, headers=admin)
    assert again.status_code == 404
    assert again.json() == {"message": "Reservation not found"}


# ============================================================================
# Settings
# ============================================================================

def test_settings_are_public_and_created_on_first_read(client):
    response = client.get("/api/reservation-settings")

    assert response.status_code == 200
    body = response.json()
    assert body["defaultDuration"] == 60
    assert body["bufferTime"] == 15
    assert body["maxAdvanceDays"] == 30
    assert body["businessHours"]["monday"] == {"enabled": True, "open": "09:00", "close": "17:00"}
    assert body["businessHours"]["sunday"]["enabled"] is False

    assert client.get("/api/reservation-settings").json()["id"] == body["id"]


def test_settings_update_requires_staff(client, auth_headers):
    payload = {"bufferTime": 0}

    assert client.put("/api/reservation-settings", json=payload).status_code in (401, 403)
    assert client.put(
        "/api/reservation-settings", json=payload, headers=auth_headers("cliente")
    ).status_code == 403

    response = client.put("/api/reservation-settings", json=payload, headers=auth_headers("staff"))
    assert response.status_code == 200
    assert response.json()["bufferTime"] == 0
    assert response.json()["defaultDuration"] == 60


def test_settings_update_changes_availability(client, auth_headers):
    response = client.put(
        "/api/reservation-settings",
        json={"businessHours": {"sunday": {"enabled": True, "open": "10:00", "close": "12:00"}},
              "defaultDuration": 30, "bufferTime": 0},
        headers=auth_headers("admin"),
    )
    assert response.status_code == 200
    assert response.json()["businessHours"]["monday"]["enabled"] is True

    slots = client.get(f"/api/reservations/available-slots/{SUNDAY}").json()
    assert slots["availableSlots"] == ["10:00", "10:30", "11:00", "11:30"]


def test_invalid_settings_are_rejected(client, auth_headers):
    response = client.put(
        "/api/reservation-settings",
        json={"businessHours": {"monday": {"enabled": True, "open": "17:00", "close": "09:00"}}},
        headers=auth_headers("staff"),
    )

    assert response.status_code == 400
    assert response.json()["message"]


# ============================================================================
# Auth and health
# ============================================================================

def test_login_and_me(client, db):
    UserService.create_user(db, "recepcion", "recepcion@correo.mx", "SecurePass123!", role="staff")

    response = client.post("/api/auth/login", json={"username": "recepcion", "password": "SecurePass123!"})
    assert response.status_code == 200
    token = response.json()["access_token"]
    assert response.json()["user"]["role"] == "staff"

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["username"] == "recepcion"


def test_login_with_wrong_password(client, db):
    UserService.create_user(db, "recepcion", "recepcion@correo.mx", "SecurePass123!")

    response = client.post("/api/auth/login", json={"username": "recepcion@correo.mx", "password": "nope"})

    assert response.status_code == 401
    assert response.json() == {"message": "Invalid credentials"}


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"

    detailed = client.get("/health/detailed").json()
    assert detailed["database"] == "healthy"
    assert detailed["overall"] == "healthy"


def test_responses_carry_a_correlation_id(client):
    response = client.get("/health", headers={"X-Correlation-ID": "abc-123"})

    assert response.headers["X-Correlation-ID"] == "abc-123"


# ============================================================================
# Slot grid and input cleanup
# ============================================================================

def test_booking_off_the_slot_grid_is_rejected(client, morning_hours):
    for time_slot in ("10:00", "23:59"):
        response = client.post("/api/reservations", json=booking(timeSlot=time_slot))
        assert response.status_code == 400
        assert response.json() == {"message": "Time slot not offered on this day"}

    slots = client.get(f"/api/reservations/available-slots/{MONDAY}").json()
    assert slots["availableSlots"] == ["09:00", "10:15", "11:30"]


def test_blank_name_is_a_bad_request(client, morning_hours):
    response = client.post("/api/reservations", json=booking(name="   "))

    assert response.status_code == 400


def test_update_off_the_slot_grid_is_rejected(client, morning_hours, auth_headers):
    created = client.post("/api/reservations", json=booking()).json()
    headers = auth_headers("staff")

    response = client.put(f"/api/reservations/{created['id']}", json={"timeSlot": "10:00"}, headers=headers)
    assert response.status_code == 400

    moved = client.put(f"/api/reservations/{created['id']}", json={"date": SUNDAY}, headers=headers)
    assert moved.status_code == 400
    assert moved.json() == {"message": "Service not available on this day"}
