import pytest


def _act(client, ride_id, action, **extra):
    return client.patch("/api/rides", json={"ride_id": ride_id, "action": action, **extra})


def test_request_ride_sets_defaults_and_fare(make_ride):
    ride = make_ride()

    assert ride["ride_id"].startswith("ride_")
    assert ride["status"] == "requested"
    assert ride["driver_id"] is None
    assert ride["pickup_at"] is None
    assert ride["completed_at"] is None
    assert ride["commission_rate"] == 0.15
    assert ride["fare_amount"] == pytest.approx(14.0875)
    assert ride["fare_display"] == "$14.09"


def test_request_ride_with_custom_commission(make_ride):
    ride = make_ride(commission_rate=0.05)
    assert ride["commission_rate"] == 0.05
    assert ride["fare_amount"] == pytest.approx(12.25 * 1.05)


def test_request_ride_rejects_commission_outside_band(client):
    resp = client.post(
        "/api/rides",
        json={
            "requester_id": "rider-1",
            "pickup_location": "A",
            "dropoff_location": "B",
            "commission_rate": 0.3,
        },
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": "Commission rate must be between 5% and 25%"}


@pytest.mark.parametrize("raw_rate", ["NaN", "Infinity"])
def test_request_ride_rejects_non_finite_commission(client, raw_rate):
    body = (
        '{"requester_id": "rider-1", "pickup_location": "A", '
        f'"dropoff_location": "B", "commission_rate": {raw_rate}}}'
    )
    resp = client.post(
        "/api/rides", content=body, headers={"content-type": "application/json"}
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": "Commission rate must be between 5% and 25%"}
    assert client.get("/api/rides").json() == []


def test_request_ride_commission_must_be_a_number(client):
    resp = client.post(
        "/api/rides",
        json={
            "requester_id": "rider-1",
            "pickup_location": "A",
            "dropoff_location": "B",
            "commission_rate": "0.1",
        },
    )
    assert resp.status_code == 400
    assert "commission_rate" in resp.json()["error"]


def test_request_ride_requires_locations(client):
    resp = client.post("/api/rides", json={"requester_id": "rider-1"})
    assert resp.status_code == 400
    error = resp.json()["error"]
    assert "pickup_location" in error
    assert "dropoff_location" in error


def test_list_rides_filters_combine(client, make_ride):
    first = make_ride(requester_id="alice")
    make_ride(requester_id="bob")
    third = make_ride(requester_id="alice")
    _act(client, third["ride_id"], "accept", driver_id="driver-9")

    all_rides = client.get("/api/rides").json()
    assert [r["requester_id"] for r in all_rides] == ["alice", "bob", "alice"]

    alice = client.get("/api/rides", params={"requester_id": "alice"}).json()
    assert [r["ride_id"] for r in alice] == [first["ride_id"], third["ride_id"]]

    alice_requested = client.get(
        "/api/rides", params={"requester_id": "alice", "status": "requested"}
    ).json()
    assert [r["ride_id"] for r in alice_requested] == [first["ride_id"]]

    by_driver = client.get("/api/rides", params={"driver_id": "driver-9"}).json()
    assert [r["ride_id"] for r in by_driver] == [third["ride_id"]]


def test_filter_with_no_matches_returns_empty_list(client, make_ride):
    make_ride()
    resp = client.get("/api/rides", params={"status": "completed"})
    assert resp.status_code == 200
    assert resp.json() == []


def test_unknown_status_filter_is_a_validation_error(client):
    resp = client.get("/api/rides", params={"status": "teleported"})
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_full_lifecycle(client, make_ride):
    ride = make_ride()
    ride_id = ride["ride_id"]

    accepted = _act(client, ride_id, "accept", driver_id="driver-1").json()
    assert accepted["status"] == "accepted"
    assert accepted["driver_id"] == "driver-1"
    assert accepted["pickup_at"] is None

    started = _act(client, ride_id, "start").json()
    assert started["status"] == "in_progress"
    assert started["pickup_at"] is not None
    assert started["completed_at"] is None

    completed = _act(client, ride_id, "complete").json()
    assert completed["status"] == "completed"
    assert completed["completed_at"] is not None
    # Fare is fixed at request time
    assert completed["fare_amount"] == pytest.approx(ride["fare_amount"])


def test_start_requires_accepted(client, make_ride):
    ride = make_ride()
    resp = _act(client, ride["ride_id"], "start")
    assert resp.status_code == 400
    assert resp.json() == {"error": "Ride must be accepted before starting"}

    listed = client.get("/api/rides").json()
    assert listed[0]["status"] == "requested"
    assert listed[0]["pickup_at"] is None


def test_complete_requires_in_progress(client, make_ride):
    ride = make_ride()
    _act(client, ride["ride_id"], "accept", driver_id="driver-1")

    resp = _act(client, ride["ride_id"], "complete")
    assert resp.status_code == 400
    assert resp.json() == {"error": "Ride must be in progress before completing"}


@pytest.mark.parametrize("steps", [[], ["accept"], ["accept", "start"]])
def test_cancel_from_every_open_state(client, make_ride, steps):
    ride = make_ride()
    for step in steps:
        resp = _act(client, ride["ride_id"], step, driver_id="driver-1")
        assert resp.status_code == 200

    resp = _act(client, ride["ride_id"], "cancel")
    assert resp.status_code == 200
    assert resp.json()["status"] == "cancelled"


def test_accept_does_not_check_prior_state(client, make_ride):
    ride = make_ride()
    _act(client, ride["ride_id"], "accept", driver_id="driver-1")

    reassigned = _act(client, ride["ride_id"], "accept", driver_id="driver-2")
    assert reassigned.status_code == 200
    assert reassigned.json()["driver_id"] == "driver-2"


def test_accept_requires_driver(client, make_ride):
    ride = make_ride()
    resp = _act(client, ride["ride_id"], "accept")
    assert resp.status_code == 400
    assert resp.json() == {"error": "driver_id is required for accept action"}


def test_unknown_action_is_rejected(client, make_ride):
    ride = make_ride()
    resp = _act(client, ride["ride_id"], "teleport")
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid action"}


def test_action_on_unknown_ride(client):
    resp = _act(client, "ride_missing", "cancel")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Ride not found"}


def test_update_overwrites_allowed_fields(client, make_ride):
    ride = make_ride()
    resp = client.put(
        "/api/rides",
        json={"ride_id": ride["ride_id"], "dropoff_location": "Wall Street, New York"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["dropoff_location"] == "Wall Street, New York"
    assert body["pickup_location"] == ride["pickup_location"]
    assert body["fare_amount"] == pytest.approx(ride["fare_amount"])


def test_update_cannot_touch_status(client, make_ride):
    ride = make_ride()
    resp = client.put(
        "/api/rides", json={"ride_id": ride["ride_id"], "status": "completed"}
    )
    assert resp.status_code == 400
    assert "status" in resp.json()["error"]

    listed = client.get("/api/rides").json()
    assert listed[0]["status"] == "requested"


def test_update_unknown_ride(client):
    resp = client.put("/api/rides", json={"ride_id": "ride_missing", "pickup_location": "X"})
    assert resp.status_code == 404


def test_update_requires_ride_id(client):
    resp = client.put("/api/rides", json={"pickup_location": "X"})
    assert resp.status_code == 400
    assert "ride_id" in resp.json()["error"]
