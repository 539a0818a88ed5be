"""Tests for SQLiteCatalogRepository."""

import asyncio
from datetime import UTC, datetime, timedelta

import pytest

from catalog.core.interfaces import CatalogFilters, Pagination


@pytest.fixture
async def seeded(repository, make_item):
    """Four stored items with distinct creation times, oldest first."""
    base = datetime(2024, 1, 1, tzinfo=UTC)
    specs = [
        ("Gaming Laptop", "Electronics", 1500.0, ["gaming", "laptop"], "seller123"),
        ("Office Mouse", "Electronics", 25.0, ["office"], "seller123"),
        ("Noise Headphones", "electronics", 199.0, ["audio"], "seller456"),
        ("Desktop Tower", "Computers", 899.0, ["desktop"], "seller456"),
    ]
    saved = []
    for offset, (name, category, price, tags, seller) in enumerate(specs):
        created = base + timedelta(days=offset)
        item = make_item(
            name=name, category=category, price=price, tags=tags, seller_id=seller
        ).model_copy(update={"created_at": created, "updated_at": created})
        saved.append(await repository.save(item))
    return saved


class TestSaveAndFind:
    async def test_save_round_trip(self, repository, make_item):
        item = make_item(image_url="https://cdn.example.com/laptop.png")
        saved = await repository.save(item)

        loaded = await repository.find_by_id(saved.id)
        assert loaded == saved
        assert loaded.tags == ("laptop", "computer")
        assert loaded.is_active is True
        assert loaded.created_at == item.created_at
        assert loaded.image_url == "https://cdn.example.com/laptop.png"

    async def test_find_missing(self, repository):
        assert await repository.find_by_id("nope") is None
        assert await repository.exists("nope") is False

    async def test_exists(self, repository, make_item):
        saved = await repository.save(make_item())
        assert await repository.exists(saved.id) is True


class TestFindAll:
    async def test_default_newest_first(self, repository, seeded):
        page = await repository.find_all()
        assert [i.name for i in page.items] == [
            "Desktop Tower",
            "Noise Headphones",
            "Office Mouse",
            "Gaming Laptop",
        ]
        assert page.page_info.total == 4
        assert page.page_info.pages == 1

    async def test_category_case_insensitive(self, repository, seeded):
        page = await repository.find_all(CatalogFilters(category="ELECTRONICS"))
        assert page.page_info.total == 3

    async def test_search(self, repository, seeded):
        assert (await repository.find_all(CatalogFilters(search="MOUSE"))).page_info.total == 1
        assert (await repository.find_all(CatalogFilters(search="audio"))).page_info.total == 1
        assert (await repository.find_all(CatalogFilters(search="developers"))).page_info.total == 4

    async def test_search_treats_wildcards_literally(self, repository, seeded):
        page = await repository.find_all(CatalogFilters(search="%"))
        assert page.page_info.total == 0

    async def test_price_range(self, repository, seeded):
        page = await repository.find_all(
            CatalogFilters(min_price=25.0, max_price=899.0),
            Pagination(sort_by="price", sort_order="asc"),
        )
        assert [i.price for i in page.items] == [25.0, 199.0, 899.0]

    async def test_tags_any_match(self, repository, seeded):
        page = await repository.find_all(CatalogFilters(tags=["office", "desktop"]))
        assert {i.name for i in page.items} == {"Office Mouse", "Desktop Tower"}

    async def test_pages_disjoint(self, repository, seeded):
        first = await repository.find_all(pagination=Pagination(page=1, limit=2))
        second = await repository.find_all(pagination=Pagination(page=2, limit=2))

        assert len(first.items) == 2
        assert len(second.items) == 2
        assert not {i.id for i in first.items} & {i.id for i in second.items}
        assert second.page_info.pages == 2

    async def test_unknown_sort_field(self, repository):
        with pytest.raises(ValueError):
            await repository.find_all(pagination=Pagination(sort_by="name; DROP TABLE x"))

    async def test_count_and_scoped_queries(self, repository, seeded):
        await repository.soft_delete(seeded[1].id)

        assert await repository.count() == 4
        assert await repository.count(CatalogFilters(is_active=True)) == 3
        assert [i.name for i in (await repository.find_by_seller("seller123")).items] == [
            "Gaming Laptop"
        ]
        assert (await repository.find_by_category("computers")).page_info.total == 1
        assert [i.name for i in (await repository.search("gaming")).items] == ["Gaming Laptop"]

    async def test_find_featured(self, repository, seeded):
        await repository.update(seeded[0].id, seeded[0].update_rating(4.0, 10))
        await repository.update(seeded[1].id, seeded[1].update_rating(5.0, 10))
        await repository.update(seeded[2].id, seeded[2].update_rating(5.0, 50))
        await repository.soft_delete(seeded[2].id)

        featured = await repository.find_featured(limit=2)
        assert [i.name for i in featured] == ["Office Mouse", "Gaming Laptop"]


class TestCommands:
    async def test_update(self, repository, seeded):
        original = seeded[0]
        updated = await repository.update(original.id, original.update(price=1199.99, stock=45))

        assert updated.price == 1199.99
        assert updated.stock == 45
        assert updated.created_at == original.created_at
        assert updated.updated_at > original.updated_at

    async def test_update_missing(self, repository, make_item):
        assert await repository.update("nope", make_item()) is None

    async def test_soft_delete(self, repository, seeded):
        assert await repository.soft_delete(seeded[0].id) is True
        assert (await repository.find_by_id(seeded[0].id)).is_active is False
        assert await repository.soft_delete("nope") is False

    async def test_hard_delete(self, repository, seeded):
        assert await repository.hard_delete(seeded[0].id) is True
        assert await repository.find_by_id(seeded[0].id) is None
        assert await repository.hard_delete(seeded[0].id) is False

    async def test_bulk_update(self, repository, seeded):
        modified = await repository.bulk_update(
            [seeded[0].id, seeded[1].id, "missing"],
            {"category": "Sale", "tags": ["clearance"]},
        )

        assert modified == 2
        stored = await repository.find_by_id(seeded[0].id)
        assert stored.category == "Sale"
        assert stored.tags == ("clearance",)

    async def test_bulk_update_nothing(self, repository, seeded):
        assert await repository.bulk_update([], {"is_active": False}) == 0

    async def test_bulk_update_rejects_unknown_field(self, repository, seeded):
        with pytest.raises(ValueError):
            await repository.bulk_update([seeded[0].id], {"seller_id": "x"})


class TestAdjustStock:
    async def test_adjust(self, repository, make_item):
        saved = await repository.save(make_item(stock=5))
        adjusted = await repository.adjust_stock(saved.id, -2)
        assert adjusted.stock == 3

    async def test_would_go_negative(self, repository, make_item):
        saved = await repository.save(make_item(stock=1))
        assert await repository.adjust_stock(saved.id, -2) is None
        assert (await repository.find_by_id(saved.id)).stock == 1

    async def test_missing(self, repository):
        assert await repository.adjust_stock("nope", 1) is None

    async def test_concurrent_decrements_never_oversell(self, repository, make_item):
        saved = await repository.save(make_item(stock=3))

        results = await asyncio.gather(
            *(repository.adjust_stock(saved.id, -1) for _ in range(5))
        )

        assert sum(r is not None for r in results) == 3
        assert (await repository.find_by_id(saved.id)).stock == 0
