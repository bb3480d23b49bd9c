import pytest

from storefront.domain.errors import NotFoundError, UpstreamAssetError, ValidationError
from storefront.services.product_service import ImageUpload, ProductService
from tests.helpers import PNG, create_category, create_product


def _valid_form(**overrides):
    form = {"name": "Brownie", "price": "20000", "description": "Fudgy", "stock": "5"}
    form.update(overrides)
    return form


class TestCreateProduct:
    def test_create_with_category(self, client, assets):
        cakes = create_category(client, "Cakes")

        response = client.post(
            "/products",
            data=_valid_form(categoryId=str(cakes["id"])),
            files={"imageFile": ("brownie.png", PNG, "image/png")},
        )

        assert response.status_code == 201
        product = response.json()["data"]
        assert product["name"] == "Brownie"
        assert product["price"] == 20000
        assert product["stock"] == 5
        assert product["categoryId"] == cakes["id"]
        assert product["category"] == {"id": cakes["id"], "name": "Cakes"}
        assert product["imageUrl"] == assets.uploaded[0]
        assert product["createdAt"]

    def test_zero_stock_and_no_category_is_fine(self, client):
        product = create_product(client, stock=0)

        assert product["stock"] == 0
        assert product["categoryId"] is None

    @pytest.mark.parametrize(
        "field,value",
        [("price", "0"), ("price", "-5"), ("price", "abc"), ("stock", "-1"), ("name", ""), ("description", "")],
    )
    def test_invalid_fields_are_400(self, client, assets, field, value):
        response = client.post(
            "/products",
            data=_valid_form(**{field: value}),
            files={"imageFile": ("brownie.png", PNG, "image/png")},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "ValidationError"
        assert assets.uploaded == []

    def test_missing_image_is_400(self, client):
        response = client.post("/products", data=_valid_form())

        assert response.status_code == 400
        assert "imageFile" in response.json()["details"]

    def test_unknown_category_is_400(self, client, assets):
        response = client.post(
            "/products",
            data=_valid_form(categoryId="999"),
            files={"imageFile": ("brownie.png", PNG, "image/png")},
        )

        assert response.status_code == 400
        assert "categoryId" in response.json()["details"]
        assert assets.uploaded == []

    def test_upload_failure_is_500_and_persists_nothing(self, client, assets):
        assets.fail_upload = True

        response = client.post(
            "/products",
            data=_valid_form(),
            files={"imageFile": ("brownie.png", PNG, "image/png")},
        )

        assert response.status_code == 500
        assert response.json()["error"] == "UpstreamAssetError"
        assert client.get("/products").json()["pagination"]["total"] == 0


class TestUpdateProduct:
    def test_partial_update_keeps_other_fields(self, client):
        product = create_product(client)

        response = client.patch(f"/products/{product['id']}", data={"price": "25000"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        updated = body["product"]
        assert updated["price"] == 25000
        assert updated["name"] == product["name"]
        assert updated["description"] == product["description"]
        assert updated["stock"] == product["stock"]
        assert updated["imageUrl"] == product["imageUrl"]

    def test_stock_can_be_set_to_zero(self, client):
        product = create_product(client, stock=5)

        response = client.patch(f"/products/{product['id']}", data={"stock": "0"})

        assert response.json()["product"]["stock"] == 0

    def test_new_image_replaces_and_deletes_old(self, client, assets):
        product = create_product(client)
        old_url = product["imageUrl"]

        response = client.patch(
            f"/products/{product['id']}",
            files={"imageFile": ("new.png", PNG, "image/png")},
        )

        assert response.status_code == 200
        assert response.json()["product"]["imageUrl"] == assets.uploaded[-1]
        assert response.json()["product"]["imageUrl"] != old_url
        assert assets.deleted == [old_url]

    def test_old_image_delete_failure_is_not_fatal(self, client, assets):
        product = create_product(client)
        assets.fail_delete = True

        response = client.patch(
            f"/products/{product['id']}",
            files={"imageFile": ("new.png", PNG, "image/png")},
        )

        assert response.status_code == 200
        assert response.json()["product"]["imageUrl"] == assets.uploaded[-1]

    def test_upload_failure_leaves_product_untouched(self, client, assets):
        product = create_product(client)
        assets.fail_upload = True

        response = client.patch(
            f"/products/{product['id']}",
            data={"name": "Renamed"},
            files={"imageFile": ("new.png", PNG, "image/png")},
        )

        assert response.status_code == 500
        fetched = client.get(f"/products/{product['id']}").json()
        assert fetched["name"] == "Brownie"
        assert fetched["imageUrl"] == product["imageUrl"]

    def test_invalid_price_is_400(self, client):
        product = create_product(client)

        response = client.patch(f"/products/{product['id']}", data={"price": "0"})

        assert response.status_code == 400

    def test_unknown_is_404(self, client):
        assert client.patch("/products/999", data={"name": "x"}).status_code == 404


class TestDeleteProduct:
    def test_delete_removes_row_and_image(self, client, assets):
        product = create_product(client)

        response = client.delete(f"/products/{product['id']}")

        assert response.status_code == 200
        assert client.get(f"/products/{product['id']}").status_code == 404
        assert assets.deleted == [product["imageUrl"]]

    def test_image_delete_failure_is_not_fatal(self, client, assets):
        product = create_product(client)
        assets.fail_delete = True

        assert client.delete(f"/products/{product['id']}").status_code == 200
        assert client.get(f"/products/{product['id']}").status_code == 404

    def test_unknown_is_404(self, client):
        assert client.delete("/products/999").status_code == 404


class TestListProducts:
    def test_pages_cover_everything_newest_first(self, client):
        created = [create_product(client, name=f"Cake {i}")["id"] for i in range(7)]

        seen = []
        page = 1
        while True:
            body = client.get("/products", params={"page": page, "limit": 3}).json()
            assert body["pagination"]["total"] == 7
            assert body["pagination"]["totalPages"] == 3
            if not body["product"]:
                break
            assert len(body["product"]) <= 3
            seen.extend(p["id"] for p in body["product"])
            page += 1

        assert seen == list(reversed(created))
        assert page == 4

    def test_defaults(self, client):
        for i in range(10):
            create_product(client, name=f"Cake {i}")

        body = client.get("/products").json()

        assert body["success"] is True
        assert len(body["product"]) == 9
        assert body["pagination"] == {"page": 1, "limit": 9, "total": 10, "totalPages": 2}

    def test_search_is_case_insensitive_substring(self, client):
        for name in ["Chocolate Brownie", "Brownie Bites", "Cheesecake", "brown bread"]:
            create_product(client, name=name)

        body = client.get("/products", params={"search": "BROWNIE"}).json()

        names = {p["name"] for p in body["product"]}
        assert names == {"Chocolate Brownie", "Brownie Bites"}
        assert body["pagination"]["total"] == 2

    @pytest.mark.parametrize("search, expected", [("brownie ", set()), ("  ", set()), (" bread", {"Choco Bread"})])
    def test_search_keeps_surrounding_spaces(self, client, search, expected):
        create_product(client, name="Brownie")
        create_product(client, name="Choco Bread")

        body = client.get("/products", params={"search": search}).json()

        names = {p["name"] for p in body["product"]}
        assert names == expected
        assert all(search.lower() in name.lower() for name in names)
        assert body["pagination"]["total"] == len(expected)

    def test_search_folds_non_ascii_case(self, client):
        create_product(client, name="ÉCLAIR AU CHOCOLAT")
        create_product(client, name="Croissant")

        body = client.get("/products", params={"search": "éclair"}).json()

        assert [p["name"] for p in body["product"]] == ["ÉCLAIR AU CHOCOLAT"]

    def test_search_treats_wildcards_literally(self, client):
        create_product(client, name="100% Cocoa")
        create_product(client, name="Cocoa Nibs")

        body = client.get("/products", params={"search": "%"}).json()

        assert [p["name"] for p in body["product"]] == ["100% Cocoa"]

    def test_filter_by_category_joins_category(self, client):
        cakes = create_category(client, "Cakes")
        cookies = create_category(client, "Cookies")
        brownie = create_product(client, name="Brownie", price=20000, stock=5, categoryId=cakes["id"])
        create_product(client, name="Choco Chip", categoryId=cookies["id"])
        create_product(client, name="Plain")

        body = client.get("/products", params={"categoryId": cakes["id"]}).json()

        assert [p["id"] for p in body["product"]] == [brownie["id"]]
        assert body["product"][0]["category"]["name"] == "Cakes"

    def test_search_and_category_combine(self, client):
        cakes = create_category(client, "Cakes")
        create_product(client, name="Brownie", categoryId=cakes["id"])
        create_product(client, name="Cheesecake", categoryId=cakes["id"])
        create_product(client, name="Brownie Cookie")

        body = client.get("/products", params={"categoryId": cakes["id"], "search": "brown"}).json()

        assert [p["name"] for p in body["product"]] == ["Brownie"]

    def test_empty_catalog(self, client):
        body = client.get("/products").json()

        assert body["product"] == []
        assert body["pagination"]["total"] == 0
        assert body["pagination"]["totalPages"] == 0

    @pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"page": "x"}])
    def test_bad_paging_is_400(self, client, params):
        assert client.get("/products", params=params).status_code == 400


class TestProductService:
    def test_create_requires_image(self, db, assets):
        svc = ProductService(db, assets)

        with pytest.raises(ValidationError):
            svc.create_product({"name": "A", "price": 1, "description": "d", "stock": 0}, None)

        with pytest.raises(ValidationError):
            svc.create_product(
                {"name": "A", "price": 1, "description": "d", "stock": 0},
                ImageUpload(filename="a.png", content=b""),
            )

    def test_upload_error_propagates(self, db, assets):
        assets.fail_upload = True
        svc = ProductService(db, assets)

        with pytest.raises(UpstreamAssetError):
            svc.create_product(
                {"name": "A", "price": 1, "description": "d", "stock": 0},
                ImageUpload(filename="a.png", content=PNG),
            )

    def test_limit_is_capped(self, db, assets):
        page = ProductService(db, assets).list_products(limit=10_000)

        assert page.pagination.limit == 100

    def test_get_unknown(self, db, assets):
        with pytest.raises(NotFoundError):
            ProductService(db, assets).get_product(1)
