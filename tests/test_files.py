"""
Tests for the file library.
"""


async def test_create_and_get_file(client, seller, create_file):
    file = await create_file(seller, "deck.pdf")

    assert file["fileName"] == "deck.pdf"
    assert file["fileType"] == "pdf"
    assert file["fileSize"] == 2048
    assert file["uploadedById"] == "seller-1"

    resp = await client.get(f"/api/files/{file['id']}", headers=seller)
    assert resp.status_code == 200
    assert resp.json() == file


async def test_list_files_newest_first(client, seller, create_file):
    await create_file(seller, "first.pdf")
    await create_file(seller, "second.pdf")

    files = (await client.get("/api/files", headers=seller)).json()
    assert [f["fileName"] for f in files] == ["second.pdf", "first.pdf"]


async def test_files_are_scoped_to_organization(client, seller, other_seller, create_file):
    foreign = await create_file(other_seller)

    assert (await client.get("/api/files", headers=seller)).json() == []
    assert (await client.get(f"/api/files/{foreign['id']}", headers=seller)).status_code == 404
    assert (
        await client.delete(f"/api/files/{foreign['id']}", headers=seller)
    ).status_code == 404


async def test_create_file_validates_body(client, seller):
    resp = await client.post(
        "/api/files", json={"fileName": "deck.pdf", "fileSize": -1}, headers=seller
    )
    assert resp.status_code == 400


async def test_delete_unused_file(client, seller, create_file):
    file = await create_file(seller)

    resp = await client.delete(f"/api/files/{file['id']}", headers=seller)
    assert resp.status_code == 200
    assert resp.json() == {"success": True}
    assert (await client.get(f"/api/files/{file['id']}", headers=seller)).status_code == 404


async def test_file_in_use_cannot_be_deleted(client, seller, create_file, create_room):
    file = await create_file(seller)
    room = await create_room(seller, assets=[{"fileId": file["id"], "title": "Deck"}])

    resp = await client.delete(f"/api/files/{file['id']}", headers=seller)
    assert resp.status_code == 400
    assert resp.json() == {"detail": "File is used in active deal hubs"}

    # Once the room is gone the file is free again
    await client.delete(f"/api/deal-rooms/{room['id']}", headers=seller)
    resp = await client.delete(f"/api/files/{file['id']}", headers=seller)
    assert resp.status_code == 200
