import random

from scripts.seed_translations import (
    DEFAULT_TAGS,
    build_tag_links,
    parse_args,
    sample_size_for,
    seed_translations,
)
from storage import async_session_factory
from storage.repositories import TagRepository, TranslationRepository, TranslationTagRepository



def test_sample_size():
    assert sample_size_for(0) == 0
    assert sample_size_for(99) == 99
    assert sample_size_for(500) == 50
    assert sample_size_for(100000) == 1000


def test_build_tag_links_picks_one_to_three_distinct_tags():
    links = build_tag_links([1, 2, 3], [10, 20, 30, 40], random.Random(7))

    per_translation = {}
    for translation_id, tag_id in links:
        per_translation.setdefault(translation_id, []).append(tag_id)

    assert set(per_translation) == {1, 2, 3}
    for tag_ids in per_translation.values():
        assert 1 <= len(tag_ids) <= 3
        assert len(tag_ids) == len(set(tag_ids))


def test_parse_args_defaults():
    args = parse_args([])

    assert (args.count, args.batch, args.with_tags, args.truncate) == (100000, 1000, False, False)


async def test_seed_with_tags():
    written = await seed_translations(count=250, batch_size=100, with_tags=True, seed=1)
    assert written == 250

    async with async_session_factory() as session:
        assert await TranslationRepository(session).count() == 250
        assert await TagRepository(session).count() == len(DEFAULT_TAGS)
        links = await TranslationTagRepository(session).query_by_filters({})
        tagged = {link.translation_id for link in links}
        assert len(tagged) == sample_size_for(250)


async def test_seed_is_rerunnable_and_truncates():
    await seed_translations(count=50, batch_size=20, seed=1)
    await seed_translations(count=50, batch_size=20, seed=1)

    async with async_session_factory() as session:
        assert await TranslationRepository(session).count() == 50

    await seed_translations(count=10, batch_size=20, truncate=True, seed=2)

    async with async_session_factory() as session:
        assert await TranslationRepository(session).count() == 10
