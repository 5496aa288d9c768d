"""
Shopfront Backend: Product Endpoint Tests
=========================================

What:  End-to-end tests for /api/products against a real SQLite store.
How:   HTTPX AsyncClient over ASGITransport; each test gets a fresh database
       file from the test_app fixture.
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from shopfront.models import Product, ProductTag


async def _make_category(client, name="Gadgets"):
    response = await client.post("/api/categories", json={"category_name": name})
    assert response.status_code == 201
    return response.json()["id"]


async def _make_tag(client, name):
    response = await client.post("/api/tags", json={"tag_name": name})
    assert response.status_code == 201
    return response.json()["id"]


async def _make_product(client, **overrides):
    payload = {"product_name": "Widget", "price": 9.99, "stock": 5}
    payload.update(overrides)
    response = await client.post("/api/products", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateAndRead:

    @pytest.mark.asyncio
    async def test_create_with_category_and_tags(self, test_client):
        category_id = await _make_category(test_client)
        new_id = await _make_tag(test_client, "new")
        sale_id = await _make_tag(test_client, "sale")

        created = await _make_product(
            test_client, category_id=category_id, tagIds=[new_id, sale_id]
        )

        assert created["product_name"] == "Widget"
        assert created["price"] == 9.99
        assert created["stock"] == 5
        assert created["category_id"] == category_id
        assert created["category"] == {"id": category_id, "category_name": "Gadgets"}
        assert [tag["tag_name"] for tag in created["tags"]] == ["new", "sale"]

        response = await test_client.get(f"/api/products/{created['id']}")
        assert response.status_code == 200
        assert response.json() == created

    @pytest.mark.asyncio
    async def test_list_returns_every_product(self, test_client):
        for name in ("A", "B", "C"):
            await _make_product(test_client, product_name=name)

        response = await test_client.get("/api/products")

        assert response.status_code == 200
        assert [p["product_name"] for p in response.json()] == ["A", "B", "C"]

    @pytest.mark.asyncio
    async def test_list_empty_store(self, test_client):
        response = await test_client.get("/api/products")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_zero_stock_and_price_are_accepted(self, test_client):
        created = await _make_product(test_client, price=0, stock=0)

        assert created["price"] == 0
        assert created["stock"] == 0
        assert created["category"] is None
        assert created["tags"] == []

    @pytest.mark.asyncio
    async def test_name_alias_is_accepted(self, test_client):
        response = await test_client.post(
            "/api/products", json={"name": "Aliased", "price": 1, "stock": 1, "category": None}
        )

        assert response.status_code == 201
        assert response.json()["product_name"] == "Aliased"

    @pytest.mark.asyncio
    async def test_duplicate_tag_ids_attach_once(self, test_client, db_session):
        tag_id = await _make_tag(test_client, "blue")

        created = await _make_product(test_client, tagIds=[tag_id, tag_id])

        assert [tag["id"] for tag in created["tags"]] == [tag_id]
        pairs = await db_session.scalar(select(func.count()).select_from(ProductTag))
        assert pairs == 1

    @pytest.mark.asyncio
    async def test_get_missing_product_returns_404(self, test_client):
        response = await test_client.get("/api/products/999")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_non_integer_id_is_rejected(self, test_client):
        response = await test_client.get("/api/products/abc")

        assert response.status_code == 422


class TestCreateValidation:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"price": 9.99, "stock": 5},
            {"product_name": "Widget", "stock": 5},
            {"product_name": "Widget", "price": 9.99},
            {"product_name": "Widget", "price": 9.99, "stock": None},
            {"product_name": "", "price": 9.99, "stock": 5},
        ],
    )
    async def test_missing_field_returns_400_and_stores_nothing(self, test_client, db_session, payload):
        response = await test_client.post("/api/products", json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["message"] == "Please provide product name, price, and stock."
        assert await db_session.scalar(select(func.count()).select_from(Product)) == 0

    @pytest.mark.asyncio
    async def test_negative_stock_returns_422(self, test_client):
        response = await test_client.post(
            "/api/products", json={"product_name": "Widget", "price": 1, "stock": -1}
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_unknown_tag_rolls_back_the_product(self, test_client, db_session):
        response = await test_client.post(
            "/api/products",
            json={"product_name": "Widget", "price": 9.99, "stock": 5, "tagIds": [404]},
        )

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "server_error"
        assert body["message"] == "An error occurred while creating the product."
        assert "FOREIGN KEY" not in response.text
        assert await db_session.scalar(select(func.count()).select_from(Product)) == 0

    @pytest.mark.asyncio
    async def test_unknown_category_returns_500(self, test_client):
        response = await test_client.post(
            "/api/products",
            json={"product_name": "Widget", "price": 9.99, "stock": 5, "category_id": 404},
        )

        assert response.status_code == 500


class TestUpdate:

    @pytest.mark.asyncio
    async def test_partial_update_keeps_other_fields(self, test_client):
        tag_id = await _make_tag(test_client, "red")
        created = await _make_product(test_client, tagIds=[tag_id])

        response = await test_client.put(f"/api/products/{created['id']}", json={"price": 12.5})

        assert response.status_code == 200
        updated = response.json()
        assert updated["price"] == 12.5
        assert updated["product_name"] == "Widget"
        assert updated["stock"] == 5
        assert [tag["id"] for tag in updated["tags"]] == [tag_id]

    @pytest.mark.asyncio
    async def test_tag_ids_replace_the_tag_set(self, test_client):
        red = await _make_tag(test_client, "red")
        blue = await _make_tag(test_client, "blue")
        green = await _make_tag(test_client, "green")
        created = await _make_product(test_client, tagIds=[red, blue])

        response = await test_client.put(
            f"/api/products/{created['id']}", json={"tagIds": [green, blue]}
        )

        assert response.status_code == 200
        assert sorted(tag["id"] for tag in response.json()["tags"]) == [blue, green]

    @pytest.mark.asyncio
    async def test_empty_tag_ids_remove_all_tags(self, test_client):
        red = await _make_tag(test_client, "red")
        created = await _make_product(test_client, tagIds=[red])

        response = await test_client.put(f"/api/products/{created['id']}", json={"tagIds": []})

        assert response.status_code == 200
        assert response.json()["tags"] == []

    @pytest.mark.asyncio
    async def test_null_category_clears_the_category(self, test_client):
        category_id = await _make_category(test_client)
        created = await _make_product(test_client, category_id=category_id)

        response = await test_client.put(f"/api/products/{created['id']}", json={"category_id": None})

        assert response.status_code == 200
        assert response.json()["category_id"] is None
        assert response.json()["category"] is None

    @pytest.mark.asyncio
    async def test_null_stock_returns_400(self, test_client):
        created = await _make_product(test_client)

        response = await test_client.put(f"/api/products/{created['id']}", json={"stock": None})

        assert response.status_code == 400
        assert response.json()["details"]["invalid_fields"] == ["stock"]

    @pytest.mark.asyncio
    async def test_update_missing_product_returns_404(self, test_client):
        response = await test_client.put("/api/products/999", json={"price": 1})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_tags_only_update_missing_product_returns_404(self, test_client):
        response = await test_client.put("/api/products/999", json={"tagIds": []})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_failed_tag_replacement_keeps_old_tags(self, test_client):
        red = await _make_tag(test_client, "red")
        created = await _make_product(test_client, tagIds=[red])

        response = await test_client.put(
            f"/api/products/{created['id']}", json={"stock": 1, "tagIds": [404]}
        )
        assert response.status_code == 500

        current = (await test_client.get(f"/api/products/{created['id']}")).json()
        assert current["stock"] == 5
        assert [tag["id"] for tag in current["tags"]] == [red]


class TestDelete:

    @pytest.mark.asyncio
    async def test_delete_then_get_returns_404(self, test_client, db_session):
        red = await _make_tag(test_client, "red")
        created = await _make_product(test_client, tagIds=[red])

        response = await test_client.delete(f"/api/products/{created['id']}")

        assert response.status_code == 200
        assert response.json() == {"deleted": 1}
        assert (await test_client.get(f"/api/products/{created['id']}")).status_code == 404
        assert await db_session.scalar(select(func.count()).select_from(ProductTag)) == 0

        # The tag itself survives
        assert (await test_client.get(f"/api/tags/{red}")).status_code == 200

    @pytest.mark.asyncio
    async def test_delete_missing_product_returns_404(self, test_client):
        response = await test_client.delete("/api/products/999")

        assert response.status_code == 404


class TestRequestId:

    @pytest.mark.asyncio
    async def test_response_carries_request_id(self, test_client):
        response = await test_client.get("/api/products")

        assert response.headers.get("X-Request-ID")

    @pytest.mark.asyncio
    async def test_incoming_request_id_is_echoed(self, test_client):
        response = await test_client.get("/api/products/999", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"
        assert response.json()["request_id"] == "abc123"


class TestWidgetLifecycle:

    @pytest.mark.asyncio
    async def test_create_retag_reprice_delete(self, test_client):
        category_id = await _make_category(test_client, "Gadgets")
        first_tag = await _make_tag(test_client, "new")
        second_tag = await _make_tag(test_client, "sale")

        response = await test_client.post(
            "/api/products",
            json={
                "name": "Widget",
                "price": 9.99,
                "stock": 5,
                "category": category_id,
                "tagIds": [first_tag, second_tag],
            },
        )
        assert response.status_code == 201
        product_id = response.json()["id"]
        assert response.json()["category"]["category_name"] == "Gadgets"
        assert [tag["id"] for tag in response.json()["tags"]] == [first_tag, second_tag]

        response = await test_client.put(f"/api/products/{product_id}", json={"tagIds": [second_tag]})
        assert response.status_code == 200
        assert [tag["id"] for tag in response.json()["tags"]] == [second_tag]

        response = await test_client.put(f"/api/products/{product_id}", json={"price": 12.99})
        assert response.status_code == 200

        fetched = (await test_client.get(f"/api/products/{product_id}")).json()
        assert fetched["price"] == 12.99
        assert fetched["stock"] == 5
        assert fetched["category_id"] == category_id
        assert [tag["id"] for tag in fetched["tags"]] == [second_tag]

        response = await test_client.delete(f"/api/products/{product_id}")
        assert response.json() == {"deleted": 1}
        assert (await test_client.get(f"/api/products/{product_id}")).status_code == 404


class TestCommitFailure:

    @staticmethod
    def _failing_commits(app):
        factory = app.state.session_factory

        def make_session():
            session = factory()
            session.commit = AsyncMock(
                side_effect=OperationalError("COMMIT", {}, Exception("disk I/O error"))
            )
            return session

        return factory, make_session

    @pytest.mark.asyncio
    async def test_failed_commit_on_create_returns_500(self, test_app, test_client):
        factory, failing = self._failing_commits(test_app)
        test_app.state.session_factory = failing
        try:
            response = await test_client.post(
                "/api/products", json={"product_name": "Widget", "price": 9.99, "stock": 5}
            )
        finally:
            test_app.state.session_factory = factory

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "server_error"
        assert body["message"] == "An error occurred while saving changes."
        assert "disk I/O" not in response.text
        assert (await test_client.get("/api/products")).json() == []

    @pytest.mark.asyncio
    async def test_failed_commit_on_delete_keeps_the_row(self, test_app, test_client):
        created = await _make_product(test_client)

        factory, failing = self._failing_commits(test_app)
        test_app.state.session_factory = failing
        try:
            response = await test_client.delete(f"/api/products/{created['id']}")
        finally:
            test_app.state.session_factory = factory

        assert response.status_code == 500
        assert (await test_client.get(f"/api/products/{created['id']}")).status_code == 200
