"""
Tests for the seed and admin creation scripts
"""

import pytest

from storefront.models import Category, Product, User
from create_admin import create_admin_user
from seed_data import seed_database


class TestSeedData:

    def test_seed_creates_catalog_once(self, app):
        assert seed_database(app) is True
        assert seed_database(app) is False

        with app.app_context():
            assert User.query.filter_by(role="admin").count() == 1
            assert Category.query.count() == 3
            assert Product.query.count() == 5
            assert all(p.category_id is not None for p in Product.query.all())


class TestCreateAdmin:

    def test_creates_admin(self, app_ctx):
        user = create_admin_user("Boss@Example.com", "pw123456", "Boss")

        assert user.role == "admin"
        assert user.email == "boss@example.com"
        assert user.check_password("pw123456")

    def test_existing_user_requires_promotion(self, app_ctx, customer_id):
        with pytest.raises(ValueError):
            create_admin_user("customer@example.com", "x", "Customer")

        user = create_admin_user("customer@example.com", None, "Customer", promote_existing=True)

        assert user.role == "admin"
