# tests/domains/test_item.py

"""
'item' 도메인 (상품, 재고, 카테고리) 관련 테스트 모듈입니다.
"""

import pytest
from httpx import AsyncClient
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.exceptions import CategoryHierarchyError, InvalidQuantityError, NotEnoughStockError
from app.domains.item import crud as item_crud
from app.domains.item import models as item_models
from app.domains.item import schemas as item_schemas


# =================================================================================
# 1. 엔티티 재고 규칙
# =================================================================================
def test_add_stock_increases_quantity():
    item = item_models.Item(dtype=item_models.ItemType.BOOK, name="book", price=100, stock_quantity=1)
    item.add_stock(4)
    assert item.stock_quantity == 5


def test_remove_stock_decreases_quantity():
    item = item_models.Item(dtype=item_models.ItemType.BOOK, name="book", price=100, stock_quantity=10)
    item.remove_stock(3)
    assert item.stock_quantity == 7


def test_remove_stock_to_zero_is_allowed():
    item = item_models.Item(dtype=item_models.ItemType.BOOK, name="book", price=100, stock_quantity=2)
    item.remove_stock(2)
    assert item.stock_quantity == 0


def test_remove_stock_beyond_available_raises_and_keeps_stock():
    """(실패) 재고보다 많이 빼면 예외, 재고는 그대로"""
    item = item_models.Item(dtype=item_models.ItemType.BOOK, name="book", price=100, stock_quantity=10)
    with pytest.raises(NotEnoughStockError):
        item.remove_stock(11)
    assert item.stock_quantity == 10


@pytest.mark.parametrize("quantity", [0, -1])
def test_non_positive_stock_change_raises(quantity):
    item = item_models.Item(dtype=item_models.ItemType.BOOK, name="book", price=100, stock_quantity=10)
    with pytest.raises(InvalidQuantityError):
        item.add_stock(quantity)
    with pytest.raises(InvalidQuantityError):
        item.remove_stock(quantity)
    assert item.stock_quantity == 10


# =================================================================================
# 2. 상품 API
# =================================================================================
@pytest.mark.asyncio
async def test_create_book(client: AsyncClient):
    payload = {
        "dtype": "BOOK",
        "name": "JPA BOOK",
        "price": 10000,
        "stock_quantity": 100,
        "author": "김영한",
        "isbn": "978-89",
    }
    response = await client.post("/api/v1/items", json=payload)

    assert response.status_code == 201
    body = response.json()
    assert body["dtype"] == "BOOK"
    assert body["author"] == "김영한"
    assert body["artist"] is None


@pytest.mark.asyncio
async def test_create_album_and_movie(client: AsyncClient):
    album = await client.post(
        "/api/v1/items",
        json={"dtype": "ALBUM", "name": "album", "price": 1, "stock_quantity": 1, "artist": "IU", "etc": "live"},
    )
    movie = await client.post(
        "/api/v1/items",
        json={"dtype": "MOVIE", "name": "movie", "price": 1, "stock_quantity": 1, "director": "봉준호", "actor": "송강호"},
    )

    assert album.status_code == 201
    assert album.json()["artist"] == "IU"
    assert movie.status_code == 201
    assert movie.json()["director"] == "봉준호"


@pytest.mark.asyncio
async def test_create_item_with_unknown_kind_is_rejected(client: AsyncClient):
    response = await client.post(
        "/api/v1/items", json={"dtype": "GAME", "name": "game", "price": 1, "stock_quantity": 1}
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_create_item_with_negative_stock_is_rejected(client: AsyncClient):
    response = await client.post(
        "/api/v1/items", json={"dtype": "BOOK", "name": "book", "price": 1, "stock_quantity": -1}
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_read_and_update_item(client: AsyncClient, test_book: item_models.Item):
    response = await client.get(f"/api/v1/items/{test_book.id}")
    assert response.status_code == 200
    assert response.json()["name"] == "book-1"

    response = await client.post(f"/api/v1/items/{test_book.id}", json={"price": 200})
    assert response.status_code == 200
    body = response.json()
    assert body["price"] == 200
    assert body["stock_quantity"] == 10


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["name", "price", "stock_quantity"])
async def test_update_item_with_null_field_is_rejected(client: AsyncClient, test_book: item_models.Item, field):
    """(실패) 필수 값을 null로 바꾸려 하면 422, 상품은 그대로"""
    response = await client.post(f"/api/v1/items/{test_book.id}", json={field: None})
    assert response.status_code == 422

    body = (await client.get(f"/api/v1/items/{test_book.id}")).json()
    assert body["name"] == "book-1"
    assert body["price"] == 100
    assert body["stock_quantity"] == 10


def test_item_update_keeps_only_sent_fields():
    update = item_schemas.ItemUpdate(price=200)
    assert update.model_dump(exclude_unset=True) == {"price": 200}


@pytest.mark.asyncio
@pytest.mark.parametrize("params", [{"skip": -1}, {"limit": 0}, {"limit": -1}])
async def test_read_items_with_invalid_paging_is_rejected(client: AsyncClient, params):
    response = await client.get("/api/v1/items", params=params)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_read_items_wraps_result(client: AsyncClient, book_factory):
    await book_factory("a", 1, 1)
    await book_factory("b", 1, 1)

    response = await client.get("/api/v1/items")

    assert response.status_code == 200
    assert [i["name"] for i in response.json()["data"]] == ["a", "b"]


# =================================================================================
# 3. 카테고리
# =================================================================================
@pytest.mark.asyncio
async def test_add_child_sets_parent(db_session: AsyncSession):
    parent = await item_crud.category.create(db_session, obj_in=item_schemas.CategoryCreate(name="도서"))
    child = await item_crud.category.create(db_session, obj_in=item_schemas.CategoryCreate(name="IT"))

    child = await item_crud.category.add_child(db_session, parent=parent, child=child)

    assert child.parent_id == parent.id
    tree = await item_crud.category.get_tree(db_session)
    assert [node.name for node in tree] == ["도서"]
    assert [node.name for node in tree[0].children] == ["IT"]


@pytest.mark.asyncio
async def test_add_child_rejects_cycle(db_session: AsyncSession):
    """(실패) 자신의 하위 카테고리를 부모로 지정할 수 없다"""
    root = await item_crud.category.create(db_session, obj_in=item_schemas.CategoryCreate(name="root"))
    middle = await item_crud.category.create(
        db_session, obj_in=item_schemas.CategoryCreate(name="middle", parent_id=root.id)
    )
    leaf = await item_crud.category.create(
        db_session, obj_in=item_schemas.CategoryCreate(name="leaf", parent_id=middle.id)
    )

    with pytest.raises(CategoryHierarchyError):
        await item_crud.category.add_child(db_session, parent=leaf, child=root)
    with pytest.raises(CategoryHierarchyError):
        await item_crud.category.add_child(db_session, parent=root, child=root)
    assert root.parent_id is None


@pytest.mark.asyncio
async def test_category_api(client: AsyncClient, test_book: item_models.Item):
    parent = (await client.post("/api/v1/categories", json={"name": "도서"})).json()
    child_response = await client.post("/api/v1/categories", json={"name": "IT", "parent_id": parent["id"]})
    assert child_response.status_code == 201
    child = child_response.json()
    assert child["parent_id"] == parent["id"]

    response = await client.post(f"/api/v1/categories/{child['id']}/items/{test_book.id}")
    assert response.status_code == 200
    assert [i["id"] for i in response.json()["data"]] == [test_book.id]

    # 같은 상품을 다시 연결해도 한 번만 들어간다
    response = await client.post(f"/api/v1/categories/{child['id']}/items/{test_book.id}")
    assert len(response.json()["data"]) == 1

    response = await client.get(f"/api/v1/categories/{child['id']}/items")
    assert [i["name"] for i in response.json()["data"]] == ["book-1"]

    response = await client.get("/api/v1/categories")
    assert response.status_code == 200
    tree = response.json()
    assert tree[0]["name"] == "도서"
    assert tree[0]["children"][0]["name"] == "IT"
    assert tree[0]["children"][0]["children"] == []


@pytest.mark.asyncio
async def test_category_cycle_returns_400(client: AsyncClient):
    parent = (await client.post("/api/v1/categories", json={"name": "p"})).json()
    child = (await client.post("/api/v1/categories", json={"name": "c", "parent_id": parent["id"]})).json()

    response = await client.post(f"/api/v1/categories/{child['id']}/children/{parent['id']}")
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_category_with_unknown_parent_returns_404(client: AsyncClient):
    response = await client.post("/api/v1/categories", json={"name": "c", "parent_id": 999999})
    assert response.status_code == 404
