import pytest

from routers.services.translation_service import TranslationService
from utils.exceptions import InvalidInputError, NotFoundError


@pytest.fixture
async def setup(session):
    service = TranslationService(session)
    tags = [await service.tag_repo.create(name=name) for name in ("web", "mobile", "api")]
    translation = await service.create_translation("auth.login", "en", "Login", [tags[0].id])
    return service, translation.id, [tag.id for tag in tags]


async def _current(service, translation_id):
    return await service.translation_tag_repo.get_tag_ids(translation_id)


async def test_sync_replaces_tag_set(setup):
    service, translation_id, (web, mobile, api) = setup

    await service.sync_tags(translation_id, [mobile, api])

    assert await _current(service, translation_id) == {mobile, api}


async def test_sync_is_idempotent(setup):
    service, translation_id, (web, mobile, _) = setup

    await service.sync_tags(translation_id, [web, mobile])
    added, removed = await service.translation_tag_repo.sync_tags(translation_id, [web, mobile])

    assert (added, removed) == (set(), set())
    assert await _current(service, translation_id) == {web, mobile}


async def test_sync_reports_diff(setup):
    service, translation_id, (web, mobile, api) = setup

    added, removed = await service.translation_tag_repo.sync_tags(translation_id, [mobile, api, api])

    assert added == {mobile, api}
    assert removed == {web}


async def test_sync_with_empty_list_clears_tags(setup):
    service, translation_id, _ = setup

    await service.sync_tags(translation_id, [])

    assert await _current(service, translation_id) == set()


async def test_sync_unknown_translation(setup):
    service, _, (web, _, _) = setup

    with pytest.raises(NotFoundError):
        await service.sync_tags(9999, [web])


async def test_sync_with_unknown_tag_leaves_links_untouched(setup):
    service, translation_id, (web, mobile, _) = setup

    with pytest.raises(InvalidInputError):
        await service.sync_tags(translation_id, [mobile, 9999])

    assert await _current(service, translation_id) == {web}


async def test_sync_endpoint_rolls_back_on_unknown_tag(client):
    web = (await client.post("/api/tags", json={"name": "web"})).json()["data"]["id"]
    created = await client.post(
        "/api/translations",
        json={"key": "auth.login", "locale": "en", "value": "Login", "tags": [web]}
    )
    translation_id = created.json()["data"]["id"]

    response = await client.put(f"/api/translations/{translation_id}/tags", json={"tags": [9999]})
    assert response.status_code == 422
    assert "tags" in response.json()["errors"]

    response = await client.get(f"/api/translations/{translation_id}")
    assert [tag["id"] for tag in response.json()["data"]["tags"]] == [web]


async def test_sync_endpoint_returns_synced_tags(client):
    web = (await client.post("/api/tags", json={"name": "web"})).json()["data"]["id"]
    api = (await client.post("/api/tags", json={"name": "api"})).json()["data"]["id"]
    created = await client.post("/api/translations", json={"key": "k", "locale": "en", "value": "v"})
    translation_id = created.json()["data"]["id"]

    for _ in range(2):
        response = await client.put(f"/api/translations/{translation_id}/tags", json={"tags": [api, web]})
        assert response.status_code == 200
        assert [tag["name"] for tag in response.json()["data"]["tags"]] == ["web", "api"]
