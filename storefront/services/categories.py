"""Product category administration."""

from flask import current_app

from storefront.errors import NotFound, ValidationError, ERROR_CATEGORY_NOT_FOUND
from storefront.extensions import db
from storefront.models import Category, Product
from storefront.utils.validators import parse_id


def list_categories():
    return Category.query.order_by(Category.title.asc()).all()


def get_category_or_404(category_id):
    category = db.session.get(Category, parse_id(category_id, 'category id'))
    if category is None:
        raise NotFound(ERROR_CATEGORY_NOT_FOUND)
    return category


def _ensure_unique_title(title, category_id=None):
    query = Category.query.filter(db.func.lower(Category.title) == title.lower())
    if category_id is not None:
        query = query.filter(Category.id != category_id)
    if query.first() is not None:
        raise ValidationError('A category with this title already exists',
                              errors={'title': ['Already exists']})


def create_category(form, policy):
    """Create a category from a validated CategoryForm."""
    principal = policy.require_admin()
    title = form.title.data.strip()
    _ensure_unique_title(title)

    category = Category(title=title, description=form.description.data)
    category.generate_slug()
    db.session.add(category)
    db.session.commit()
    current_app.logger.info('Category %s created by user %s', category.id, principal.id)
    return category


def update_category(category_id, form, policy):
    principal = policy.require_admin()
    category = get_category_or_404(category_id)
    title = form.title.data.strip()
    _ensure_unique_title(title, category.id)

    if title != category.title:
        category.title = title
        category.generate_slug()
    category.description = form.description.data
    db.session.commit()
    current_app.logger.info('Category %s updated by user %s', category.id, principal.id)
    return category


def delete_category(category_id, policy):
    """Delete a category; its products are kept without a category."""
    principal = policy.require_admin()
    category = get_category_or_404(category_id)

    detached = Product.query.filter_by(category_id=category.id).all()
    for product in detached:
        product.category_id = None
    db.session.flush()
    db.session.delete(category)
    db.session.commit()
    current_app.logger.info('Category %s deleted by user %s (%d products detached)',
                            category_id, principal.id, len(detached))
