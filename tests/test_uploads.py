"""
Tests for image uploads
"""

import io
import os

from storefront.extensions import db
from storefront.models import Product


def image(name="photo.png", content=b"\x89PNG fake image"):
    return (io.BytesIO(content), name)


class TestUploads:

    def test_admin_uploads_image(self, app, admin_client):
        response = admin_client.post(
            "/api/upload",
            data={"images": [image()]},
            content_type="multipart/form-data",
        )

        assert response.status_code == 201
        [upload] = response.get_json()
        assert upload["filename"].endswith("_photo.png")
        assert upload["url"] == f"/api/upload/{upload['filename']}"
        stored = os.path.join(app.config["UPLOAD_FOLDER"], "products", upload["filename"])
        assert os.path.exists(stored)

    def test_uploaded_image_is_served(self, admin_client, client):
        upload = admin_client.post(
            "/api/upload",
            data={"images": [image(content=b"pixels")]},
            content_type="multipart/form-data",
        ).get_json()[0]

        response = client.get(upload["url"])

        assert response.status_code == 200
        assert response.data == b"pixels"

    def test_upload_attaches_to_product(self, app, admin_client, make_product):
        product_id = make_product("Camera", 100.0)

        response = admin_client.post(
            "/api/upload",
            data={"images": [image("a.jpg"), image("b.webp")], "product": str(product_id)},
            content_type="multipart/form-data",
        )

        assert response.status_code == 201
        urls = [u["url"] for u in response.get_json()]
        with app.app_context():
            assert db.session.get(Product, product_id).images == urls

    def test_disallowed_extension(self, app, admin_client):
        response = admin_client.post(
            "/api/upload",
            data={"images": [image("good.png"), image("script.exe")]},
            content_type="multipart/form-data",
        )

        assert response.status_code == 400
        assert os.listdir(os.path.join(app.config["UPLOAD_FOLDER"], "products")) == []

    def test_no_files(self, admin_client):
        response = admin_client.post("/api/upload", data={}, content_type="multipart/form-data")

        assert response.status_code == 400

    def test_unknown_product(self, admin_client):
        response = admin_client.post(
            "/api/upload",
            data={"images": [image()], "product": "999"},
            content_type="multipart/form-data",
        )

        assert response.status_code == 404

    def test_customer_cannot_upload(self, customer_client):
        response = customer_client.post(
            "/api/upload",
            data={"images": [image()]},
            content_type="multipart/form-data",
        )

        assert response.status_code == 403
