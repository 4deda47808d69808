"""Cart aggregation: one cart per user with a derived total."""

from flask import current_app
from sqlalchemy.exc import IntegrityError

from storefront.errors import NotFound, ERROR_CART_NOT_FOUND, ERROR_PRODUCT_NOT_FOUND
from storefront.extensions import db
from storefront.models import Cart, CartLineItem, Product
from storefront.utils.validators import parse_id, parse_positive_int


def find_cart(user_id):
    return Cart.query.filter_by(user_id=user_id).first()


def _create_cart(user_id):
    """Insert an empty cart; if another request created one first, use that."""
    cart = Cart(user_id=user_id, cart_total=0.0)
    db.session.add(cart)
    try:
        db.session.flush()
    except IntegrityError:
        db.session.rollback()
        cart = find_cart(user_id)
        if cart is None:
            raise
        current_app.logger.info('Cart for user %s was created concurrently, reusing it', user_id)
    return cart


def add_to_cart(user_id, product_id, quantity=1, size=None, color=None):
    """Add ``quantity`` of a product to the user's cart, creating the cart if needed.

    Line items are keyed by product only: adding a product already in the
    cart increases that line's quantity and leaves its size and color as
    they were.
    """
    product_id = parse_id(product_id, 'productId')
    quantity = parse_positive_int(quantity, 'quantity')

    product = db.session.get(Product, product_id)
    if product is None:
        raise NotFound(ERROR_PRODUCT_NOT_FOUND)

    cart = find_cart(user_id)
    if cart is None:
        cart = _create_cart(user_id)

    item = cart.find_item(product_id)
    if item is not None:
        item.quantity += quantity
    else:
        position = max((i.position for i in cart.items), default=-1) + 1
        cart.items.append(CartLineItem(
            product=product,
            quantity=quantity,
            size=size,
            color=color,
            position=position,
        ))

    cart.recompute_total()
    db.session.commit()
    current_app.logger.info('User %s added product %s x%s to cart (total %.2f)',
                            user_id, product_id, quantity, cart.cart_total)
    return cart


def remove_from_cart(user_id, product_id):
    """Drop every line for ``product_id``; a product not in the cart is a no-op."""
    product_id = parse_id(product_id, 'product id')

    cart = find_cart(user_id)
    if cart is None:
        raise NotFound(ERROR_CART_NOT_FOUND)

    for item in list(cart.items):
        if item.product_id == product_id:
            cart.items.remove(item)

    cart.recompute_total()
    db.session.commit()
    current_app.logger.info('User %s removed product %s from cart (total %.2f)',
                            user_id, product_id, cart.cart_total)
    return cart


def get_cart(user_id):
    """The user's cart, or None if they never added anything."""
    return find_cart(user_id)


def empty_cart(user_id):
    cart = find_cart(user_id)
    if cart is None:
        return None
    cart.items.clear()
    cart.cart_total = 0.0
    db.session.commit()
    current_app.logger.info('User %s emptied cart', user_id)
    return cart
