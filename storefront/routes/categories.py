"""Product category routes."""

from flask import Blueprint, jsonify
from storefront.forms.catalog import CategoryForm
from storefront.services import categories
from storefront.utils.decorators import with_policy

categories_bp = Blueprint('categories', __name__)


@categories_bp.route('', methods=['GET'])
def list_categories():
    return jsonify([category.to_dict() for category in categories.list_categories()])


@categories_bp.route('/<category_id>', methods=['GET'])
def get_category(category_id):
    return jsonify(categories.get_category_or_404(category_id).to_dict())


@categories_bp.route('', methods=['POST'])
@with_policy
def create_category(policy):
    policy.require_admin()
    form = CategoryForm.from_json().validate_or_raise()
    category = categories.create_category(form, policy)
    return jsonify(category.to_dict()), 201


@categories_bp.route('/<category_id>', methods=['PUT'])
@with_policy
def update_category(category_id, policy):
    policy.require_admin()
    form = CategoryForm.from_json().validate_or_raise()
    category = categories.update_category(category_id, form, policy)
    return jsonify(category.to_dict())


@categories_bp.route('/<category_id>', methods=['DELETE'])
@with_policy
def delete_category(category_id, policy):
    categories.delete_category(category_id, policy)
    return jsonify({
        'status': 'successful',
        'message': 'Category successfully deleted'
    })
