from storefront.domain.errors import UpstreamAssetError

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


class FakeAssetClient:
    """Object storage stand-in that records calls and can be told to fail."""

    def __init__(self):
        self.uploaded = []
        self.deleted = []
        self.fail_upload = False
        self.fail_delete = False

    def upload(self, filename, content, content_type=None):
        if self.fail_upload:
            raise UpstreamAssetError("Image upload failed: storage unavailable")
        url = f"https://cdn.test/storage/v1/object/public/flourish/productImage/{len(self.uploaded) + 1}-{filename}"
        self.uploaded.append(url)
        return url

    def delete(self, public_url):
        if self.fail_delete:
            raise UpstreamAssetError("Image delete failed: storage unavailable")
        self.deleted.append(public_url)


def create_category(client, name="Cakes"):
    response = client.post("/categories", json={"name": name})
    assert response.status_code == 200, response.text
    return response.json()["category"]


def create_product(client, **overrides):
    form = {
        "name": "Brownie",
        "price": "20000",
        "description": "Fudgy chocolate brownie",
        "stock": "5",
    }
    form.update({k: str(v) for k, v in overrides.items() if v is not None})
    response = client.post(
        "/products",
        data=form,
        files={"imageFile": ("brownie.png", PNG, "image/png")},
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]
