from storage.repositories import TagRepository


async def _create_tag(client, name):
    return await client.post("/api/tags", json={"name": name})


async def test_create_and_list_tags(client):
    assert (await _create_tag(client, "web")).status_code == 201
    assert (await _create_tag(client, "mobile")).status_code == 201

    body = (await client.get("/api/tags")).json()

    assert body["total"] == 2
    assert [tag["name"] for tag in body["data"]] == ["web", "mobile"]


async def test_duplicate_tag_name(client):
    await _create_tag(client, "web")
    response = await _create_tag(client, "web")

    assert response.status_code == 422
    assert response.json()["errors"] == {"name": ["A tag with this name already exists."]}


async def test_empty_tag_name_rejected(client):
    assert (await _create_tag(client, "")).status_code == 422


async def test_rename_tag(client):
    tag_id = (await _create_tag(client, "web")).json()["data"]["id"]
    await _create_tag(client, "mobile")

    response = await client.put(f"/api/tags/{tag_id}", json={"name": "webapp"})
    assert response.status_code == 200
    assert response.json()["data"]["name"] == "webapp"

    response = await client.put(f"/api/tags/{tag_id}", json={"name": "mobile"})
    assert response.status_code == 422

    response = await client.put(f"/api/tags/{tag_id}", json={"name": "webapp"})
    assert response.status_code == 200


async def test_get_missing_tag(client):
    response = await client.get("/api/tags/9999")

    assert response.status_code == 404
    assert response.json()["error_code"] == "TAG_NOT_FOUND"


async def test_delete_tag_detaches_translations(client):
    tag_id = (await _create_tag(client, "web")).json()["data"]["id"]
    created = await client.post(
        "/api/translations",
        json={"key": "a", "locale": "en", "value": "A", "tags": [tag_id]}
    )
    translation_id = created.json()["data"]["id"]

    assert (await client.delete(f"/api/tags/{tag_id}")).status_code == 204
    assert (await client.get(f"/api/tags/{tag_id}")).status_code == 404

    response = await client.get(f"/api/translations/{translation_id}")
    assert response.status_code == 200
    assert response.json()["data"]["tags"] == []


async def test_duplicate_tag_caught_by_unique_constraint(client, monkeypatch):
    async def _not_found(self, name):
        return None

    web_id = (await _create_tag(client, "web")).json()["data"]["id"]
    mobile_id = (await _create_tag(client, "mobile")).json()["data"]["id"]
    monkeypatch.setattr(TagRepository, "get_by_name", _not_found)

    response = await _create_tag(client, "web")
    assert response.status_code == 422
    assert response.json()["error_code"] == "TAG_CONFLICT"
    assert response.json()["errors"] == {"name": ["A tag with this name already exists."]}

    response = await client.put(f"/api/tags/{mobile_id}", json={"name": "web"})
    assert response.status_code == 422

    body = (await client.get("/api/tags")).json()
    assert body["total"] == 2
    assert {tag["id"]: tag["name"] for tag in body["data"]} == {web_id: "web", mobile_id: "mobile"}
