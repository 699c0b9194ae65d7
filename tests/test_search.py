import pytest

from models import SearchFilters
from routers.services.translation_service import TranslationService


@pytest.fixture
async def catalog(session):
    """Five translations; web tagged on 1 and 3, mobile on 2 and 3."""
    service = TranslationService(session)
    web = await service.tag_repo.create(name="web")
    mobile = await service.tag_repo.create(name="mobile")
    desktop = await service.tag_repo.create(name="desktop")

    rows = [
        ("auth.login", "en", "Login", [web.id]),
        ("auth.logout", "en", "Logout", [mobile.id]),
        ("auth.login", "fr", "Connexion", [web.id, mobile.id]),
        ("buttons.save", "en", "Save", []),
        ("buttons.save_100%", "de", "Speichern", []),
    ]
    for key, locale, value, tag_ids in rows:
        await service.create_translation(key, locale, value, tag_ids)
    await session.commit()

    return {"service": service, "web": web.id, "mobile": mobile.id, "desktop": desktop.id}


def _keys(page):
    return [(item.key, item.locale) for item in page.items]


async def test_no_filters_returns_everything_in_id_order(catalog):
    page = await catalog["service"].search(SearchFilters())

    assert page.total == 5
    assert [item.id for item in page.items] == sorted(item.id for item in page.items)


async def test_key_substring_match(catalog):
    page = await catalog["service"].search(SearchFilters(key="log"))

    assert _keys(page) == [("auth.login", "en"), ("auth.logout", "en"), ("auth.login", "fr")]


async def test_locale_is_exact_match(catalog):
    page = await catalog["service"].search(SearchFilters(locale="e"))
    assert page.total == 0

    page = await catalog["service"].search(SearchFilters(locale="en"))
    assert page.total == 3
    assert all(item.locale == "en" for item in page.items)


async def test_content_substring_match(catalog):
    page = await catalog["service"].search(SearchFilters(content="Connex"))
    assert _keys(page) == [("auth.login", "fr")]


async def test_wildcards_in_needle_are_literal(catalog):
    page = await catalog["service"].search(SearchFilters(key="100%"))
    assert _keys(page) == [("buttons.save_100%", "de")]

    page = await catalog["service"].search(SearchFilters(key="save_"))
    assert _keys(page) == [("buttons.save_100%", "de")]


async def test_tags_use_or_semantics_without_duplicates(catalog):
    page = await catalog["service"].search(SearchFilters(tags=[catalog["web"], catalog["mobile"]]))

    assert _keys(page) == [("auth.login", "en"), ("auth.logout", "en"), ("auth.login", "fr")]
    assert page.total == 3


async def test_empty_tags_list_is_ignored(catalog):
    page = await catalog["service"].search(SearchFilters(tags=[]))
    assert page.total == 5


async def test_unknown_or_unused_tags_match_nothing(catalog):
    assert (await catalog["service"].search(SearchFilters(tags=[9999]))).total == 0
    assert (await catalog["service"].search(SearchFilters(tags=[catalog["desktop"]]))).total == 0


async def test_filters_combine_with_and(catalog):
    page = await catalog["service"].search(
        SearchFilters(key="auth", locale="en", tags=[catalog["web"]])
    )
    assert _keys(page) == [("auth.login", "en")]


async def test_results_carry_their_tags(catalog):
    page = await catalog["service"].search(SearchFilters(key="auth.login", locale="fr"))

    assert [tag.name for tag in page.items[0].tags] == ["web", "mobile"]


async def test_pagination_metadata(catalog):
    service = catalog["service"]
    first = await service.search(SearchFilters(), page=1, per_page=2)
    third = await service.search(SearchFilters(), page=3, per_page=2)
    beyond = await service.search(SearchFilters(), page=4, per_page=2)

    assert (first.total, first.last_page, len(first.items)) == (5, 3, 2)
    assert len(third.items) == 1
    assert beyond.items == []
    assert beyond.total == 5


async def test_pages_do_not_overlap(catalog):
    service = catalog["service"]
    seen = []
    for page_number in (1, 2, 3):
        page = await service.search(SearchFilters(), page=page_number, per_page=2)
        seen.extend(item.id for item in page.items)

    assert len(seen) == len(set(seen)) == 5


async def test_search_on_empty_store(session):
    page = await TranslationService(session).search(SearchFilters(key="anything"))

    assert page.items == []
    assert page.total == 0
    assert page.last_page == 1
