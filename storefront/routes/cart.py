"""Cart routes for the authenticated user."""

from flask import Blueprint, jsonify
from storefront.forms.cart import AddToCartForm
from storefront.services import cart as carts
from storefront.utils.decorators import login_required

cart_bp = Blueprint('cart', __name__)


@cart_bp.route('', methods=['GET'])
@login_required
def view_cart(policy):
    """Cart with every line's product expanded, or null when there is none."""
    cart = carts.get_cart(policy.principal.id)
    if cart is None:
        return jsonify(None)
    return jsonify(cart.to_dict(expand_products=True))


@cart_bp.route('', methods=['POST'])
@login_required
def add_to_cart(policy):
    """Add ``{productId, quantity, size, color}`` to the cart."""
    form = AddToCartForm.from_json().validate_or_raise()
    cart = carts.add_to_cart(
        policy.principal.id,
        form.productId.data,
        quantity=form.quantity.data or 1,
        size=form.size.data or None,
        color=form.color.data or None,
    )
    return jsonify(cart.to_dict())


@cart_bp.route('/<product_id>', methods=['DELETE'])
@login_required
def remove_from_cart(product_id, policy):
    cart = carts.remove_from_cart(policy.principal.id, product_id)
    return jsonify(cart.to_dict())


@cart_bp.route('', methods=['DELETE'])
@login_required
def clear_cart(policy):
    cart = carts.empty_cart(policy.principal.id)
    if cart is None:
        return jsonify(None)
    return jsonify(cart.to_dict())
