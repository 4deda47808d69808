"""
Tests for accounts and the authorization policy
"""

import pytest
from types import SimpleNamespace

from storefront.errors import Forbidden, Unauthorized
from storefront.policy import AuthorizationPolicy, Principal


class TestAuthorizationPolicy:

    def test_anonymous_user(self):
        policy = AuthorizationPolicy.for_user(SimpleNamespace(is_authenticated=False))

        assert not policy.is_authenticated
        with pytest.raises(Unauthorized):
            policy.require_authenticated()
        with pytest.raises(Unauthorized):
            policy.require_admin()

    def test_customer(self):
        policy = AuthorizationPolicy.for_user(SimpleNamespace(is_authenticated=True, id=7, role="customer"))

        assert policy.require_authenticated() == Principal(id=7, role="customer")
        assert not policy.can_manage_catalog()
        with pytest.raises(Forbidden):
            policy.require_admin()

    def test_admin(self):
        policy = AuthorizationPolicy(Principal(id=1, role="admin"))

        assert policy.require_admin().id == 1
        assert policy.can_manage_catalog()


class TestAccountApi:

    def test_register_and_login(self, client):
        response = client.post("/api/user/register", json={
            "name": "New Person", "email": "New@Example.com", "password": "hunter22"
        })
        assert response.status_code == 201
        assert response.get_json()["role"] == "customer"

        response = client.post("/api/user/login", json={"email": "new@example.com", "password": "hunter22"})
        assert response.status_code == 200

        me = client.get("/api/user/me").get_json()
        assert me["email"] == "new@example.com"

    def test_register_cannot_choose_role(self, client):
        response = client.post("/api/user/register", json={
            "name": "Sneaky", "email": "sneaky@example.com", "password": "hunter22", "role": "admin"
        })

        assert response.get_json()["role"] == "customer"

    def test_duplicate_email(self, client, customer_id):
        response = client.post("/api/user/register", json={
            "name": "Again", "email": "customer@example.com", "password": "hunter22"
        })

        assert response.status_code == 400
        assert "email" in response.get_json()["errors"]

    def test_bad_password(self, client, customer_id):
        response = client.post("/api/user/login", json={"email": "customer@example.com", "password": "wrong"})

        assert response.status_code == 401

    def test_logout(self, customer_client):
        assert customer_client.post("/api/user/logout").status_code == 200
        assert customer_client.get("/api/user/me").status_code == 401

    def test_me_requires_login(self, client):
        response = client.get("/api/user/me")

        assert response.status_code == 401
        assert response.get_json() == {"status": "fail", "message": "Authentication required"}
