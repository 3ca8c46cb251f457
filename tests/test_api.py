import uuid
from datetime import timedelta
from decimal import Decimal

import pytest

API = "/api/v1"


@pytest.fixture
def studio(client, long_ago):
    """Location with one room and two providers, created over HTTP."""
    location = client.post(f"{API}/admin/locations/", json={"name": "Main"}).json()
    room = client.post(
        f"{API}/admin/locations/{location['id']}/rooms/",
        json={"name": "Studio A", "hourly_rate": "60.00", "price_valid_from": long_ago.isoformat()},
    ).json()
    anna = client.post(f"{API}/admin/locations/{location['id']}/providers/", json={"name": "Anna"}).json()
    ben = client.post(f"{API}/admin/locations/{location['id']}/providers/", json={"name": "Ben"}).json()
    return {"location": location, "room": room, "anna": anna, "ben": ben}


def post_booking(client, room_id, provider_id, start, minutes, **extra):
    return client.post(
        f"{API}/bookings/",
        json={
            "room_id": room_id,
            "provider_id": provider_id,
            "start_time": start.isoformat(),
            "duration_minutes": minutes,
            **extra,
        },
    )


def test_booking_scenario(client, studio, base_time):
    room_id, anna = studio["room"]["id"], studio["anna"]["id"]

    first = post_booking(client, room_id, anna, base_time, 60)
    assert first.status_code == 201
    assert first.json()["end_time"] == (base_time + timedelta(minutes=60)).isoformat()

    second = post_booking(client, room_id, anna, base_time + timedelta(minutes=90), 30)
    assert second.status_code == 201

    clash = post_booking(client, room_id, anna, base_time + timedelta(minutes=30), 30)
    assert clash.status_code == 409
    body = clash.json()
    assert body["error"] == "conflict"
    assert body["booking_ids"] == [first.json()["id"]]


def test_booking_crud(client, studio, base_time):
    room_id, anna = studio["room"]["id"], studio["anna"]["id"]
    booking = post_booking(client, room_id, anna, base_time, 60, client_alias="Mia").json()

    fetched = client.get(f"{API}/bookings/{booking['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["client_alias"] == "Mia"

    updated = client.put(
        f"{API}/bookings/{booking['id']}",
        json={
            "room_id": room_id,
            "provider_id": anna,
            "start_time": (base_time + timedelta(minutes=30)).isoformat(),
            "duration_minutes": 60,
            "resting_time_minutes": 15,
        },
    )
    assert updated.status_code == 200
    assert updated.json()["blocked_until"] == (base_time + timedelta(minutes=105)).isoformat()

    assert client.delete(f"{API}/bookings/{booking['id']}").status_code == 204
    missing = client.get(f"{API}/bookings/{booking['id']}")
    assert missing.status_code == 404
    assert missing.json()["error"] == "not_found"


def test_request_shape_errors_stay_fastapi_422(client, studio):
    response = client.post(f"{API}/bookings/", json={"room_id": studio["room"]["id"]})
    assert response.status_code == 422
    assert "detail" in response.json()


def test_invalid_range_maps_to_422(client, studio, base_time):
    response = post_booking(client, studio["room"]["id"], studio["anna"]["id"], base_time, 0)
    assert response.status_code == 422
    assert response.json()["error"] == "invalid_range"


def test_list_bookings_with_estimate(client, studio, base_time):
    location_id = studio["location"]["id"]
    post_booking(client, studio["room"]["id"], studio["anna"]["id"], base_time, 90, client_alias="Mia")

    response = client.get(f"{API}/locations/{location_id}/bookings/", params={"status": "UPCOMING"})
    assert response.status_code == 200
    page = response.json()
    assert page["total"] == 1 and page["total_pages"] == 1
    item = page["data"][0]
    assert item["status"] == "UPCOMING"
    assert Decimal(item["total_price"]) == Decimal("90.00")
    assert item["room"]["name"] == "Studio A"
    assert item["provider"]["name"] == "Anna"
    assert item["is_billed"] is False


def test_prices_and_tiers(client, studio, base_time):
    room_id = studio["room"]["id"]
    current = client.get(f"{API}/admin/rooms/{room_id}/prices/current").json()
    assert Decimal(current["amount"]) == Decimal("60.00")

    tiers_url = f"{API}/admin/rooms/{room_id}/prices/{current['id']}/tiers/"
    replaced = client.put(
        tiers_url,
        json={"tiers": [
            {"from_minutes": 0, "to_minutes": 60, "price_type": "fixed", "price": "50"},
            {"from_minutes": 60, "to_minutes": None, "price_type": "Hourly", "price": "30"},
        ]},
    )
    assert replaced.status_code == 200
    assert [t["price_type"] for t in replaced.json()] == ["FIXED", "HOURLY"]

    bad_type = client.post(
        tiers_url,
        json={"from_minutes": 0, "to_minutes": 30, "price_type": "DAILY", "price": "10"},
    )
    assert bad_type.status_code == 409

    gap = client.put(
        tiers_url,
        json={"tiers": [{"from_minutes": 30, "to_minutes": None, "price_type": "HOURLY", "price": "30"}]},
    )
    assert gap.status_code == 422

    preview = client.get(f"{API}/admin/rooms/{room_id}/prices/{current['id']}/preview").json()
    assert preview["tiered"] is True
    prices = {p["duration_minutes"]: Decimal(p["price"]) for p in preview["prices"]}
    assert prices[90] == Decimal("65.00")

    new_price = client.post(
        f"{API}/admin/rooms/{room_id}/prices/",
        json={"amount": "80.00", "valid_from": base_time.isoformat()},
    )
    assert new_price.status_code == 201
    stale = client.post(
        f"{API}/admin/rooms/{room_id}/prices/",
        json={"amount": "90.00", "valid_from": base_time.isoformat()},
    )
    assert stale.status_code == 422

    history = client.get(f"{API}/admin/rooms/{room_id}/prices/").json()
    assert [Decimal(p["amount"]) for p in history] == [Decimal("80.00"), Decimal("60.00")]
    assert history[1]["valid_to"] == base_time.isoformat()

    at = client.get(
        f"{API}/admin/rooms/{room_id}/prices/at",
        params={"timestamp": (base_time - timedelta(minutes=1)).isoformat()},
    )
    assert Decimal(at.json()["amount"]) == Decimal("60.00")


def test_billing_flow(client, studio, base_time):
    room_id, anna, ben = studio["room"]["id"], studio["anna"]["id"], studio["ben"]["id"]
    a = post_booking(client, room_id, anna, base_time, 60).json()
    b = post_booking(client, room_id, ben, base_time + timedelta(hours=2), 30).json()
    period = {
        "period_start": (base_time - timedelta(days=1)).isoformat(),
        "period_end": (base_time + timedelta(days=1)).isoformat(),
    }

    created = client.post(f"{API}/admin/billings/", json={"booking_ids": [a["id"], b["id"]], **period})
    assert created.status_code == 201
    totals = {x["service_provider_id"]: Decimal(x["total_amount"]) for x in created.json()}
    assert totals == {anna: Decimal("60.00"), ben: Decimal("30.00")}

    again = client.post(f"{API}/admin/billings/", json={"booking_ids": [a["id"]], **period})
    assert again.status_code == 409
    assert again.json()["error"] == "already_billed"
    assert again.json()["booking_ids"] == [a["id"]]

    anna_billings = client.get(f"{API}/admin/billings/", params={"service_provider_id": anna}).json()
    assert len(anna_billings) == 1
    items = client.get(f"{API}/admin/billings/{anna_billings[0]['id']}/items").json()
    assert [i["booking_id"] for i in items] == [a["id"]]
    assert items[0]["frozen_room_name"] == "Studio A"

    frozen = client.delete(f"{API}/bookings/{a['id']}")
    assert frozen.status_code == 409

    assert client.get(f"{API}/admin/billings/{uuid.uuid4()}").status_code == 404


def test_failed_billing_run_leaves_no_billings(client, studio, base_time):
    location_id = studio["location"]["id"]
    late_room = client.post(
        f"{API}/admin/locations/{location_id}/rooms/",
        json={
            "name": "Late",
            "hourly_rate": "50.00",
            "price_valid_from": (base_time + timedelta(days=30)).isoformat(),
        },
    ).json()
    a = post_booking(client, studio["room"]["id"], studio["anna"]["id"], base_time, 60).json()
    b = post_booking(client, late_room["id"], studio["ben"]["id"], base_time + timedelta(hours=1), 60).json()

    response = client.post(
        f"{API}/admin/billings/",
        json={
            "booking_ids": [a["id"], b["id"]],
            "period_start": (base_time - timedelta(days=1)).isoformat(),
            "period_end": (base_time + timedelta(days=1)).isoformat(),
        },
    )
    assert response.status_code == 404
    assert client.get(f"{API}/admin/billings/").json() == []


def test_calendar(client, studio, base_time):
    location_id = studio["location"]["id"]
    booking = post_booking(client, studio["room"]["id"], studio["anna"]["id"], base_time, 60).json()

    response = client.get(
        f"{API}/locations/{location_id}/calendar/", params={"date": base_time.date().isoformat()}
    )
    assert response.status_code == 200
    day = response.json()
    assert day["day"] == base_time.date().isoformat()
    assert [b["id"] for b in day["rooms"][0]["bookings"]] == [booking["id"]]


def test_room_delete_over_http(client, studio):
    room_id = studio["room"]["id"]
    response = client.delete(f"{API}/admin/rooms/{room_id}")
    assert response.status_code == 200
    assert response.json() == {"id": room_id, "is_active": False, "deleted": True}
    assert client.get(f"{API}/admin/rooms/{room_id}").status_code == 404
