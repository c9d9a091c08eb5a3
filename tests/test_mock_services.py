import re

import pytest

from rideshift.services.maps_service import haversine_km, estimate_travel_minutes

TX_HASH = re.compile(r"^0x[0-9a-f]{64}$")

TIMES_SQUARE = {"lat": 40.7580, "lng": -73.9855}
CENTRAL_PARK = {"lat": 40.7829, "lng": -73.9654}


def test_payment_returns_transaction(client):
    resp = client.post(
        "/api/payments",
        json={"ride_id": "ride_1", "amount": 14.09, "from_address": "0xa", "to_address": "0xb"},
    )
    assert resp.status_code == 201
    body = resp.json()
    assert TX_HASH.match(body["transaction_hash"])
    assert body["status"] == "completed"
    assert body["gas_used"] == "21000"
    assert body["gas_price"] == "20000000000"


@pytest.mark.parametrize("amount", [0, -5])
def test_payment_amount_must_be_positive(client, amount):
    resp = client.post(
        "/api/payments",
        json={"ride_id": "ride_1", "amount": amount, "from_address": "0xa", "to_address": "0xb"},
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": "Amount must be greater than 0"}


def test_payment_status_requires_hash(client):
    resp = client.get("/api/payments")
    assert resp.status_code == 400

    resp = client.get("/api/payments", params={"transaction_hash": "0xabc"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "confirmed"
    assert 1 <= body["confirmations"] <= 12
    assert body["block_number"] >= 18_500_000


def test_gas_estimate(client):
    resp = client.put("/api/payments", json={"amount": 10, "to_address": "0xb"})
    assert resp.status_code == 200
    assert resp.json()["estimated_cost"] == str(21000 * 20_000_000_000)


def test_mint_driver_nft(client):
    resp = client.post(
        "/api/nft",
        json={
            "user_id": "driver-1",
            "driver_profile": {"vehicle_details": "2020 Toyota Camry", "license_number": "DL1"},
        },
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["status"] == "minted"
    assert TX_HASH.match(body["transaction_hash"])
    traits = {a["trait_type"]: a["value"] for a in body["metadata"]["attributes"]}
    assert traits["Vehicle"] == "2020 Toyota Camry"
    assert traits["License"] == "DL1"


def test_mint_requires_driver_profile(client):
    resp = client.post("/api/nft", json={"user_id": "driver-1"})
    assert resp.status_code == 400


def test_nft_metadata_and_transfer(client):
    assert client.get("/api/nft").status_code == 400

    metadata = client.get("/api/nft", params={"token_id": "42"}).json()
    assert metadata["name"] == "RideShift Driver #42"

    resp = client.put(
        "/api/nft", json={"token_id": 42, "from_address": "0xa", "to_address": "0xb"}
    )
    assert resp.status_code == 200
    assert resp.json()["status"] == "transferred"


def test_haversine_between_landmarks():
    distance = haversine_km(TIMES_SQUARE, CENTRAL_PARK)
    assert distance == pytest.approx(3.25, abs=0.05)
    assert estimate_travel_minutes(distance) == 6
    assert haversine_km(TIMES_SQUARE, TIMES_SQUARE) == 0


def test_route_between_known_addresses(client):
    resp = client.get(
        "/api/maps",
        params={
            "action": "route",
            "pickup": "Times Square, New York",
            "destination": "Central Park, New York",
        },
    )
    assert resp.status_code == 200
    route = resp.json()["route"]
    assert route["distance"] == pytest.approx(3.25, abs=0.05)
    assert route["duration"] == 6
    assert route["waypoints"] == [TIMES_SQUARE, CENTRAL_PARK]


def test_unknown_address_geocodes_to_city_centre(client):
    resp = client.get("/api/maps", params={"action": "geocode", "address": "Nowhere"})
    assert resp.json()["coordinates"] == {"lat": 40.7128, "lng": -74.0060}


def test_nearby_drivers_respect_radius(client):
    resp = client.get("/api/maps", params={"action": "nearby", "lat": 40.75, "lng": -73.98, "radius": 2.5})
    assert [d["id"] for d in resp.json()["drivers"]] == ["driver1", "driver2"]

    default_radius = client.get("/api/maps", params={"action": "nearby", "lat": 40.75, "lng": -73.98})
    assert len(default_radius.json()["drivers"]) == 3


def test_maps_validation(client):
    assert client.get("/api/maps", params={"action": "geocode"}).status_code == 400
    assert client.get("/api/maps", params={"action": "route", "pickup": "A"}).status_code == 400
    assert client.get("/api/maps", params={"action": "nearby"}).status_code == 400
    assert client.get("/api/maps", params={"action": "fly"}).status_code == 400


def test_batch_geocode(client):
    resp = client.post(
        "/api/maps",
        json={"action": "batch-geocode", "addresses": ["Wall Street, New York", "Elsewhere"]},
    )
    assert resp.status_code == 200
    results = resp.json()["results"]
    assert [r["address"] for r in results] == ["Wall Street, New York", "Elsewhere"]
    assert results[0]["coordinates"] == {"lat": 40.7060, "lng": -74.0088}

    assert client.post("/api/maps", json={"action": "batch-geocode"}).status_code == 400
    assert client.post("/api/maps", json={"action": "route"}).status_code == 400


def test_ride_updates_poll_lists_open_rides(client, make_ride):
    open_ride = make_ride(requester_id="rider-7")
    done = make_ride(requester_id="rider-7")
    client.patch("/api/rides", json={"ride_id": done["ride_id"], "action": "cancel"})

    resp = client.get("/api/ws", params={"action": "ride-updates", "user_id": "rider-7"})
    assert resp.status_code == 200
    assert resp.headers["cache-control"] == "no-cache"
    body = resp.json()
    assert body["type"] == "ride_update"
    assert [r["ride_id"] for r in body["rides"]] == [open_ride["ride_id"]]


def test_governance_poll_reports_pending_tallies(client, make_proposal):
    proposal = make_proposal()
    client.patch(
        "/api/governance",
        json={"proposal_id": proposal["proposal_id"], "voter_id": "v", "action": "support"},
    )

    body = client.get("/api/ws", params={"action": "governance-updates", "user_id": "u"}).json()
    assert body["proposals"] == [
        {"proposal_id": proposal["proposal_id"], "vote_count": 1, "status": "pending"}
    ]


def test_realtime_messages(client):
    sub = client.post("/api/ws", json={"action": "subscribe", "user_id": "u"}).json()
    assert sub["channels"] == ["rides", "drivers", "governance"]

    pong = client.post("/api/ws", json={"action": "ping", "user_id": "u"}).json()
    assert pong["type"] == "pong"

    assert client.post("/api/ws", json={"action": "shout", "user_id": "u"}).status_code == 400
    assert client.get("/api/ws", params={"action": "ride-updates"}).status_code == 400
