"""Database models package."""

from .user import User
from .category import Category
from .product import Product
from .cart import Cart, CartLineItem

__all__ = [
    'User',
    'Category',
    'Product',
    'Cart',
    'CartLineItem',
]
