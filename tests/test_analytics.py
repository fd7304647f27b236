"""
Tests for the analytics overview and recent activity rollups.
"""

from datetime import timedelta

from dealhub.db.base import utcnow
from dealhub.models import DealRoomView
from dealhub.services.analytics_service import AnalyticsService


async def _seed_views(session_factory, room_id: str, offsets, device="desktop", anchor=None):
    """Insert one view per offset (a timedelta before `anchor`, default now)."""
    now = anchor or utcnow()
    async with session_factory() as session:
        for i, offset in enumerate(offsets):
            session.add(
                DealRoomView(
                    deal_room_id=room_id,
                    visitor_id=f"visitor-{i}",
                    device=device,
                    viewed_at=now - offset,
                )
            )
        await session.commit()


async def test_empty_organization(client, seller):
    resp = await client.get("/api/analytics/overview", headers=seller)
    assert resp.status_code == 200
    assert resp.json() == {
        "totalRooms": 0,
        "totalViews": 0,
        "totalClicks": 0,
        "viewsThisWeek": 0,
        "topRooms": [],
        "viewsByDay": [],
        "deviceBreakdown": [],
    }

    resp = await client.get("/api/analytics/recent-activity", headers=seller)
    assert resp.json() == []


async def test_totals_and_week(client, seller, published_room, create_room, session_factory):
    room, asset_id = await published_room(seller)
    await create_room(seller, name="Idle room")
    await _seed_views(
        session_factory,
        room["id"],
        [timedelta(hours=1), timedelta(days=3), timedelta(days=10), timedelta(days=30)],
    )
    view_id = (
        await client.post(f"/api/share/{room['shareToken']}/track", json={})
    ).json()["viewId"]
    await client.post(
        f"/api/share/{room['shareToken']}/click",
        json={"assetId": asset_id, "viewId": view_id},
    )

    body = (await client.get("/api/analytics/overview", headers=seller)).json()
    assert body["totalRooms"] == 2
    assert body["totalViews"] == 5
    assert body["viewsThisWeek"] == 3
    assert body["totalClicks"] == 1


async def test_views_by_day_ascending_and_capped(client, seller, create_room, session_factory):
    room = await create_room(seller)
    # 16 distinct days around noon, two views on the most recent one
    noon = utcnow().replace(hour=12, minute=0, second=0, microsecond=0)
    offsets = [timedelta(days=d) for d in range(1, 17)] + [timedelta(days=1, hours=1)]
    await _seed_views(session_factory, room["id"], offsets, anchor=noon)

    by_day = (await client.get("/api/analytics/overview", headers=seller)).json()["viewsByDay"]
    assert len(by_day) == 14
    dates = [d["date"] for d in by_day]
    assert dates == sorted(dates)
    assert by_day[-1]["views"] == 2
    assert all(d["views"] == 1 for d in by_day[:-1])
    assert all(len(d) == 10 for d in dates)


async def test_top_rooms(client, seller, create_room, session_factory):
    rooms = [await create_room(seller, name=f"Room {i}") for i in range(6)]
    for i, room in enumerate(rooms):
        await _seed_views(session_factory, room["id"], [timedelta(hours=1)] * i)

    top = (await client.get("/api/analytics/overview", headers=seller)).json()["topRooms"]
    assert [t["name"] for t in top] == ["Room 5", "Room 4", "Room 3", "Room 2", "Room 1"]
    assert [t["views"] for t in top] == [5, 4, 3, 2, 1]
    assert all(t["clicks"] == 0 for t in top)


async def test_device_breakdown_merges_unknown(client, seller, create_room, session_factory):
    room = await create_room(seller)
    await _seed_views(session_factory, room["id"], [timedelta(hours=1)] * 3, device="mobile")
    await _seed_views(session_factory, room["id"], [timedelta(hours=1)] * 2, device="desktop")
    await _seed_views(session_factory, room["id"], [timedelta(hours=1)], device=None)
    await _seed_views(session_factory, room["id"], [timedelta(hours=1)], device="unknown")

    breakdown = (
        await client.get("/api/analytics/overview", headers=seller)
    ).json()["deviceBreakdown"]
    counts = {d["device"]: d["count"] for d in breakdown}
    assert counts == {"mobile": 3, "desktop": 2, "unknown": 2}


async def test_overview_is_scoped_to_organization(
    client, seller, other_seller, create_room, session_factory
):
    theirs = await create_room(other_seller)
    await _seed_views(session_factory, theirs["id"], [timedelta(hours=1)] * 4)
    await create_room(seller)

    body = (await client.get("/api/analytics/overview", headers=seller)).json()
    assert body["totalRooms"] == 1
    assert body["totalViews"] == 0
    assert body["topRooms"][0]["views"] == 0


async def test_recent_activity_caps_per_room(client, seller, create_room, session_factory):
    busy = await create_room(seller, name="Busy")
    quiet = await create_room(seller, name="Quiet")
    await _seed_views(session_factory, busy["id"], [timedelta(minutes=m) for m in range(1, 9)])
    await _seed_views(session_factory, quiet["id"], [timedelta(hours=2), timedelta(hours=3)])

    activity = (await client.get("/api/analytics/recent-activity", headers=seller)).json()

    assert len(activity) == 7
    assert sum(1 for a in activity if a["dealRoomName"] == "Busy") == 5
    assert sum(1 for a in activity if a["dealRoomName"] == "Quiet") == 2
    stamps = [a["viewedAt"] for a in activity]
    assert stamps == sorted(stamps, reverse=True)


async def test_recent_activity_global_limit(session_factory, client, seller, create_room):
    rooms = [await create_room(seller, name=f"Room {i}") for i in range(4)]
    for room in rooms:
        await _seed_views(session_factory, room["id"], [timedelta(minutes=m) for m in range(1, 4)])
    org_id = rooms[0]["organizationId"]

    async with session_factory() as session:
        items = await AnalyticsService.get_recent_activity(session, org_id)
    assert len(items) == 10
    assert all(item.deal_room_name.startswith("Room ") for item in items)
