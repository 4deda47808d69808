"""Product catalog routes."""

from flask import Blueprint, jsonify, request
from storefront.services import catalog
from storefront.utils.decorators import with_policy

products_bp = Blueprint('products', __name__)


@products_bp.route('', methods=['GET'])
def list_products():
    """Filtered, sorted and paginated product list."""
    return jsonify(catalog.list_products(request.args))


@products_bp.route('', methods=['POST'])
@with_policy
def create_product(policy):
    product = catalog.create_product(request.get_json(silent=True), policy)
    return jsonify(product.to_dict()), 201


@products_bp.route('/<product_id>', methods=['GET'])
def get_product(product_id):
    return jsonify(catalog.get_product(product_id))


@products_bp.route('/<product_id>', methods=['PUT'])
@with_policy
def update_product(product_id, policy):
    product = catalog.update_product(product_id, request.get_json(silent=True), policy)
    return jsonify(product.to_dict())


@products_bp.route('/<product_id>', methods=['DELETE'])
@with_policy
def delete_product(product_id, policy):
    catalog.delete_product(product_id, policy)
    return jsonify({
        'status': 'successful',
        'message': 'Product successfully deleted'
    })
