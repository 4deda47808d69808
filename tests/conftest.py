"""Pytest configuration and fixtures"""
import pytest
from datetime import datetime, timedelta

from storefront import create_app
from storefront.extensions import db
from storefront.models import User, Category, Product


ADMIN_EMAIL = "admin@example.com"
CUSTOMER_EMAIL = "customer@example.com"
PASSWORD = "secret123"


@pytest.fixture
def app(tmp_path):
    """Application with an in-memory database and a throwaway upload folder"""
    app = create_app("testing", UPLOAD_FOLDER=str(tmp_path / "uploads"))
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def app_ctx(app):
    """Pushed application context for calling services directly"""
    with app.app_context():
        yield app


def _create_user(app, email, role, name="Test User"):
    with app.app_context():
        user = User(email=email, name=name, role=role)
        user.set_password(PASSWORD)
        db.session.add(user)
        db.session.commit()
        return user.id


@pytest.fixture
def admin_id(app):
    return _create_user(app, ADMIN_EMAIL, "admin", name="Admin User")


@pytest.fixture
def customer_id(app):
    return _create_user(app, CUSTOMER_EMAIL, "customer", name="Customer User")


def _login(client, email):
    response = client.post("/api/user/login", json={"email": email, "password": PASSWORD})
    assert response.status_code == 200, response.get_json()
    return client


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(app, admin_id):
    return _login(app.test_client(), ADMIN_EMAIL)


@pytest.fixture
def customer_client(app, customer_id):
    return _login(app.test_client(), CUSTOMER_EMAIL)


@pytest.fixture
def make_product(app):
    """Factory inserting a product and returning its id"""

    def _make(title="Product", price=10.0, category_id=None, created_at=None, **extra):
        with app.app_context():
            product = Product(
                title=title,
                slug=title.lower().replace(" ", "-"),
                price=price,
                category_id=category_id,
                attributes=extra.pop("attributes", {}),
                images=[],
                **extra,
            )
            if created_at is not None:
                product.created_at = created_at
            db.session.add(product)
            db.session.commit()
            return product.id

    return _make


@pytest.fixture
def category_id(app):
    with app.app_context():
        category = Category(title="Shirts", description="Tops")
        category.generate_slug()
        db.session.add(category)
        db.session.commit()
        return category.id


@pytest.fixture
def catalog(make_product, category_id):
    """Five products with distinct prices and creation times, oldest first"""
    start = datetime(2024, 1, 1)
    rows = [
        ("Red Shirt", 25.0, category_id),
        ("Blue Jeans", 60.0, None),
        ("Green Shirt", 30.0, category_id),
        ("Black Hat", 15.0, None),
        ("White Socks", 5.0, None),
    ]
    return [
        make_product(title, price, cat, created_at=start + timedelta(days=i))
        for i, (title, price, cat) in enumerate(rows)
    ]
