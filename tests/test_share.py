"""
Tests for the public share routes: availability, the email / password gate,
tracking and prospect comments.
"""

from datetime import datetime, timedelta, timezone

import pytest

from dealhub.services.share_service import detect_device

IPHONE_UA = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) "
    "AppleWebKit/605.1.15 (KHTML, like Gecko) Mobile/15E148"
)
IPAD_UA = "Mozilla/5.0 (iPad; CPU OS 17_0 like Mac OS X) AppleWebKit/605.1.15"
DESKTOP_UA = "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_0) AppleWebKit/605.1.15"


@pytest.mark.parametrize(
    "user_agent, expected",
    [
        (IPHONE_UA, "mobile"),
        (IPAD_UA, "tablet"),
        ("Mozilla/5.0 (Linux; Android 14; Tablet)", "tablet"),
        (DESKTOP_UA, "desktop"),
        (None, "unknown"),
        ("", "unknown"),
    ],
)
def test_detect_device(user_agent, expected):
    assert detect_device(user_agent) == expected


# ── Availability ──────────────────────────────────────────────────────────────

async def test_published_room_is_served(client, seller, published_room):
    room, asset_id = await published_room(seller, welcomeMessage="Hi there")

    resp = await client.get(f"/api/share/{room['shareToken']}")
    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == "Acme renewal"
    assert body["welcomeMessage"] == "Hi there"
    assert body["hasPassword"] is False
    assert body["durationBeaconSeconds"] == 30
    assert body["commentPollSeconds"] == 10
    assert [a["id"] for a in body["assets"]] == [asset_id]
    assert body["assets"][0]["file"]["fileName"] == "deck.pdf"
    assert "organizationId" not in body
    assert "passwordHash" not in body


async def test_unknown_token_is_not_found(client):
    resp = await client.get("/api/share/does-not-exist")
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Room not found"}


async def test_draft_room_is_not_available(client, seller, create_room):
    room = await create_room(seller)
    token = room["shareToken"]

    resp = await client.get(f"/api/share/{token}")
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Room not available"}
    assert "assets" not in resp.json()

    # Tracking and comments are refused as well
    assert (await client.post(f"/api/share/{token}/track", json={})).status_code == 404
    assert (
        await client.post(
            f"/api/share/{token}/comments", json={"authorName": "Pat", "message": "Hi"}
        )
    ).status_code == 404


async def test_archived_room_is_not_available(client, seller, published_room):
    room, _ = await published_room(seller)
    await client.put(
        f"/api/deal-rooms/{room['id']}", json={"status": "archived"}, headers=seller
    )
    assert (await client.get(f"/api/share/{room['shareToken']}")).status_code == 404


async def test_expired_room_is_gone(client, seller, published_room):
    room, _ = await published_room(seller)
    yesterday = datetime.now(timezone.utc) - timedelta(days=1)
    await client.put(
        f"/api/deal-rooms/{room['id']}",
        json={"expiresAt": yesterday.isoformat()},
        headers=seller,
    )

    resp = await client.get(f"/api/share/{room['shareToken']}")
    assert resp.status_code == 410
    assert resp.json() == {"detail": "Room has expired"}


async def test_future_expiry_is_still_served(client, seller, published_room):
    tomorrow = datetime.now(timezone.utc) + timedelta(days=1)
    room, _ = await published_room(seller, expiresAt=tomorrow.isoformat())
    assert (await client.get(f"/api/share/{room['shareToken']}")).status_code == 200


# ── Gate ──────────────────────────────────────────────────────────────────────

async def test_verify_without_gate_succeeds(client, seller, published_room):
    room, _ = await published_room(seller)
    resp = await client.post(f"/api/share/{room['shareToken']}/verify", json={})
    assert resp.status_code == 200
    assert resp.json() == {"success": True}


async def test_verify_password(client, seller, published_room):
    room, _ = await published_room(seller, password="s3cret")
    token = room["shareToken"]

    assert (await client.get(f"/api/share/{token}")).json()["hasPassword"] is True

    resp = await client.post(f"/api/share/{token}/verify", json={"password": "wrong"})
    assert resp.status_code == 401
    assert resp.json() == {"detail": "Invalid password"}

    resp = await client.post(f"/api/share/{token}/verify", json={})
    assert resp.status_code == 401

    resp = await client.post(f"/api/share/{token}/verify", json={"password": "s3cret"})
    assert resp.status_code == 200


async def test_verify_requires_email_when_configured(client, seller, published_room):
    room, _ = await published_room(seller, requireEmail=True, password="s3cret")
    token = room["shareToken"]

    resp = await client.post(f"/api/share/{token}/verify", json={"password": "s3cret"})
    assert resp.status_code == 400

    resp = await client.post(
        f"/api/share/{token}/verify", json={"password": "s3cret", "email": "  "}
    )
    assert resp.status_code == 400

    resp = await client.post(
        f"/api/share/{token}/verify",
        json={"password": "s3cret", "email": "pat@buyer.com", "name": "Pat"},
    )
    assert resp.status_code == 200


@pytest.mark.parametrize("email", ["pat@corp.local", "pat@buyer.test", "pat@acme", "pat"])
async def test_email_gate_accepts_any_non_blank_email(client, seller, published_room, email):
    room, _ = await published_room(seller, requireEmail=True)
    resp = await client.post(f"/api/share/{room['shareToken']}/verify", json={"email": email})
    assert resp.status_code == 200
    assert resp.json() == {"success": True}


async def test_password_room_ignores_unusual_email(client, seller, published_room):
    room, _ = await published_room(seller, password="s3cret")
    resp = await client.post(
        f"/api/share/{room['shareToken']}/verify",
        json={"password": "s3cret", "email": "pat@acme"},
    )
    assert resp.status_code == 200


@pytest.mark.parametrize(
    "shift, offset_hours, expected",
    [
        (timedelta(hours=-1), 5, 410),
        (timedelta(hours=1), -5, 200),
    ],
)
async def test_expiry_with_non_utc_offset(
    client, seller, published_room, shift, offset_hours, expected
):
    room, _ = await published_room(seller)
    instant = datetime.now(timezone.utc) + shift
    local = instant.astimezone(timezone(timedelta(hours=offset_hours)))
    resp = await client.put(
        f"/api/deal-rooms/{room['id']}", json={"expiresAt": local.isoformat()}, headers=seller
    )
    assert resp.status_code == 200

    resp = await client.get(f"/api/share/{room['shareToken']}")
    assert resp.status_code == expected


async def test_email_gate_then_track(client, seller, published_room):
    room, _ = await published_room(seller, requireEmail=True)
    token = room["shareToken"]

    resp = await client.post(
        f"/api/share/{token}/verify",
        json={"email": "pat@buyer.com", "name": "Pat", "company": "Buyer Inc"},
    )
    assert resp.status_code == 200

    resp = await client.post(
        f"/api/share/{token}/track",
        json={
            "visitorId": "visitor-1",
            "viewerEmail": "pat@buyer.com",
            "viewerName": "Pat",
            "viewerCompany": "Buyer Inc",
        },
    )
    view_id = resp.json()["viewId"]

    views = (await client.get(f"/api/deal-rooms/{room['id']}", headers=seller)).json()["views"]
    assert len(views) == 1
    assert views[0]["id"] == view_id
    assert views[0]["viewerEmail"] == "pat@buyer.com"
    assert views[0]["viewerCompany"] == "Buyer Inc"
    assert views[0]["visitorId"] == "visitor-1"


# ── Tracking ──────────────────────────────────────────────────────────────────

async def test_track_view_records_request_context(client, seller, published_room):
    room, _ = await published_room(seller)

    resp = await client.post(
        f"/api/share/{room['shareToken']}/track",
        json={},
        headers={"User-Agent": IPHONE_UA, "Referer": "https://mail.example.com/"},
    )
    assert resp.status_code == 200
    assert resp.json()["viewId"]

    view = (await client.get(f"/api/deal-rooms/{room['id']}", headers=seller)).json()["views"][0]
    assert view["device"] == "mobile"
    assert view["userAgent"] == IPHONE_UA
    assert view["referrer"] == "https://mail.example.com/"
    assert view["duration"] == 0
    assert view["visitorId"]


async def test_click_requires_asset_and_view(client, seller, published_room):
    room, asset_id = await published_room(seller)
    token = room["shareToken"]

    resp = await client.post(f"/api/share/{token}/click", json={"assetId": asset_id})
    assert resp.status_code == 400
    assert resp.json() == {"detail": "Missing assetId or viewId"}

    resp = await client.post(f"/api/share/{token}/click", json={"viewId": "v"})
    assert resp.status_code == 400


async def test_click_is_recorded(client, seller, published_room):
    room, asset_id = await published_room(seller)
    token = room["shareToken"]
    view_id = (await client.post(f"/api/share/{token}/track", json={})).json()["viewId"]

    resp = await client.post(
        f"/api/share/{token}/click", json={"assetId": asset_id, "viewId": view_id}
    )
    assert resp.status_code == 200
    click = resp.json()
    assert click["assetId"] == asset_id
    assert click["viewId"] == view_id
    assert click["duration"] == 0
    assert click["downloaded"] is False

    detail = (await client.get(f"/api/deal-rooms/{room['id']}", headers=seller)).json()
    assert detail["totalClicks"] == 1


async def test_click_with_foreign_ids_is_not_found(client, seller, published_room):
    room_a, asset_a = await published_room(seller)
    room_b, _ = await published_room(seller)
    view_b = (
        await client.post(f"/api/share/{room_b['shareToken']}/track", json={})
    ).json()["viewId"]

    resp = await client.post(
        f"/api/share/{room_a['shareToken']}/click",
        json={"assetId": asset_a, "viewId": view_b},
    )
    assert resp.status_code == 404


async def test_duration_overwrites(client, seller, published_room):
    room, _ = await published_room(seller)
    token = room["shareToken"]
    view_id = (await client.post(f"/api/share/{token}/track", json={})).json()["viewId"]

    for seconds in (30, 60, 45):
        resp = await client.post(
            f"/api/share/{token}/duration", json={"viewId": view_id, "duration": seconds}
        )
        assert resp.json() == {"success": True}

    view = (await client.get(f"/api/deal-rooms/{room['id']}", headers=seller)).json()["views"][0]
    assert view["duration"] == 45


async def test_duration_without_view_is_accepted(client, seller, published_room):
    room, _ = await published_room(seller)
    resp = await client.post(f"/api/share/{room['shareToken']}/duration", json={"duration": 5})
    assert resp.status_code == 200
    assert resp.json() == {"success": True}


async def test_duration_cannot_touch_other_rooms(client, seller, published_room):
    room_a, _ = await published_room(seller)
    room_b, _ = await published_room(seller)
    view_b = (
        await client.post(f"/api/share/{room_b['shareToken']}/track", json={})
    ).json()["viewId"]

    await client.post(
        f"/api/share/{room_a['shareToken']}/duration",
        json={"viewId": view_b, "duration": 999},
    )
    view = (await client.get(f"/api/deal-rooms/{room_b['id']}", headers=seller)).json()["views"][0]
    assert view["duration"] == 0


# ── Comments ──────────────────────────────────────────────────────────────────

async def test_prospect_comments(client, seller, published_room):
    room, _ = await published_room(seller)
    token = room["shareToken"]

    await client.post(
        f"/api/deal-rooms/{room['id']}/comments", json={"message": "Welcome"}, headers=seller
    )
    resp = await client.post(
        f"/api/share/{token}/comments",
        json={
            "authorName": "Pat",
            "authorEmail": "pat@buyer.com",
            "message": "Can we get a discount?",
            "authorRole": "seller",
        },
    )
    assert resp.status_code == 201
    assert resp.json()["authorRole"] == "prospect"
    assert resp.json()["authorUserId"] is None

    thread = (await client.get(f"/api/share/{token}/comments")).json()
    assert [(c["authorRole"], c["message"]) for c in thread] == [
        ("seller", "Welcome"),
        ("prospect", "Can we get a discount?"),
    ]


async def test_prospect_comment_keeps_free_form_email(client, seller, published_room):
    room, _ = await published_room(seller)
    resp = await client.post(
        f"/api/share/{room['shareToken']}/comments",
        json={"authorName": "Pat", "authorEmail": " pat@corp.local ", "message": "Hi"},
    )
    assert resp.status_code == 201
    assert resp.json()["authorEmail"] == "pat@corp.local"


@pytest.mark.parametrize(
    "body",
    [
        {"authorName": "", "message": "Hi"},
        {"authorName": "Pat", "message": "   "},
        {"message": "Hi"},
    ],
)
async def test_prospect_comment_requires_name_and_message(
    client, seller, published_room, body
):
    room, _ = await published_room(seller)
    resp = await client.post(f"/api/share/{room['shareToken']}/comments", json=body)
    assert resp.status_code == 400
