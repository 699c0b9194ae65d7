import pytest
from sqlalchemy.exc import IntegrityError

from storage.repositories.base import Page


async def test_create_and_get_translation(repos, session):
    translation_repo, _, _ = repos
    created = await translation_repo.create(key="common.welcome", locale="en", value="Welcome")

    fetched = await translation_repo.get_by_key_and_locale("common.welcome", "en")
    assert fetched.id == created.id
    assert fetched.value == "Welcome"
    assert fetched.created_at is not None


async def test_same_key_in_other_locale_is_allowed(repos):
    translation_repo, _, _ = repos
    await translation_repo.create(key="common.welcome", locale="en", value="Welcome")
    await translation_repo.create(key="common.welcome", locale="fr", value="Bienvenue")

    assert await translation_repo.count(key="common.welcome") == 2


async def test_duplicate_key_and_locale_violates_constraint(repos):
    translation_repo, _, _ = repos
    await translation_repo.create(key="common.welcome", locale="en", value="Welcome")

    with pytest.raises(IntegrityError):
        await translation_repo.create(key="common.welcome", locale="en", value="Hi")


async def test_update_by_id_returns_none_for_missing_row(repos):
    translation_repo, _, _ = repos
    assert await translation_repo.update_by_id(999, value="x") is None


async def test_update_by_id_refreshes_instance(repos):
    translation_repo, _, _ = repos
    created = await translation_repo.create(key="a", locale="en", value="old")

    updated = await translation_repo.update_by_id(created.id, value="new")
    assert updated.value == "new"


async def test_tag_get_or_create_is_idempotent(repos):
    _, tag_repo, _ = repos
    first = await tag_repo.get_or_create("mobile")
    second = await tag_repo.get_or_create("mobile")

    assert first.id == second.id
    assert await tag_repo.count() == 1


async def test_get_existing_ids_filters_unknown(repos):
    _, tag_repo, _ = repos
    web = await tag_repo.create(name="web")

    assert await tag_repo.get_existing_ids([web.id, 404]) == {web.id}
    assert await tag_repo.get_existing_ids([]) == set()


async def test_upsert_many_updates_existing_rows(repos, session):
    translation_repo, _, _ = repos
    await translation_repo.upsert_many([
        {"key": "a", "locale": "en", "value": "1"},
        {"key": "b", "locale": "en", "value": "2"},
    ])
    await translation_repo.upsert_many([{"key": "a", "locale": "en", "value": "changed"}])

    assert await translation_repo.count() == 2
    row = await translation_repo.get_by_key_and_locale("a", "en")
    await session.refresh(row)
    assert row.value == "changed"


async def test_insert_ignore_many_skips_existing_links(repos):
    translation_repo, tag_repo, link_repo = repos
    translation = await translation_repo.create(key="a", locale="en", value="1")
    tag = await tag_repo.create(name="web")

    await link_repo.insert_ignore_many([(translation.id, tag.id)])
    await link_repo.insert_ignore_many([(translation.id, tag.id), (translation.id, tag.id)])

    assert await link_repo.get_tag_ids(translation.id) == {tag.id}


async def test_deleting_translation_cascades_links(repos, session):
    translation_repo, tag_repo, link_repo = repos
    translation = await translation_repo.create(key="a", locale="en", value="1")
    tag = await tag_repo.create(name="web")
    await link_repo.add_links(translation.id, [tag.id])

    await translation_repo.delete_by_id(translation.id)

    assert await link_repo.count() == 0
    assert await tag_repo.exists(id=tag.id)


def test_page_last_page():
    assert Page(items=[], total=0, page=1, per_page=15).last_page == 1
    assert Page(items=[], total=15, page=1, per_page=15).last_page == 1
    assert Page(items=[], total=16, page=1, per_page=15).last_page == 2


async def test_link_repository_uses_composite_key(repos):
    translation_repo, tag_repo, link_repo = repos
    translation = await translation_repo.create(key="a", locale="en", value="1")
    web = await tag_repo.create(name="web")
    api = await tag_repo.create(name="api")
    await link_repo.add_links(translation.id, [api.id, web.id])

    links = await link_repo.get_all()
    assert [(link.translation_id, link.tag_id) for link in links] == [
        (translation.id, web.id),
        (translation.id, api.id),
    ]

    link = await link_repo.get_by_id((translation.id, api.id))
    assert link.tag_id == api.id

    assert await link_repo.delete_by_id((translation.id, web.id)) is True
    assert await link_repo.get_by_id((translation.id, web.id)) is None
    assert await link_repo.get_tag_ids(translation.id) == {api.id}


async def test_composite_key_requires_every_column(repos):
    _, _, link_repo = repos

    with pytest.raises(ValueError):
        await link_repo.get_by_id(1)
