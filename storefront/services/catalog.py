"""Product catalog: the list query builder and admin product CRUD."""

import operator
import re
from collections import namedtuple

from flask import current_app
from slugify import slugify

from storefront.errors import (NotFound, ValidationError, ERROR_CATEGORY_NOT_FOUND,
                               ERROR_PAGE_NOT_FOUND, ERROR_PRODUCT_NOT_FOUND)
from storefront.extensions import db
from storefront.models import Category, Product
from storefront.models.product import HIDDEN_FIELDS, PRODUCT_FIELDS
from storefront.utils.validators import parse_datetime, parse_id, parse_positive_int, parse_price

RESERVED_PARAMS = ('page', 'sort', 'limit', 'fields', 'search')

OPERATORS = {
    'eq': operator.eq,
    'gt': operator.gt,
    'gte': operator.ge,
    'lt': operator.lt,
    'lte': operator.le,
}
RANGE_OPERATORS = frozenset(('gt', 'gte', 'lt', 'lte'))

FilterField = namedtuple('FilterField', 'column coerce operators')


def _text(value, name):
    return str(value)


FILTERABLE_FIELDS = {
    'title': FilterField(Product.title, _text, frozenset(('eq',))),
    'slug': FilterField(Product.slug, _text, frozenset(('eq',))),
    'price': FilterField(Product.price, parse_price, RANGE_OPERATORS | {'eq'}),
    'category': FilterField(Product.category_id, parse_id, frozenset(('eq',))),
    'created_at': FilterField(Product.created_at, parse_datetime, RANGE_OPERATORS),
    'updated_at': FilterField(Product.updated_at, parse_datetime, RANGE_OPERATORS),
}

SORTABLE_FIELDS = {
    'id': Product.id,
    'title': Product.title,
    'price': Product.price,
    'created_at': Product.created_at,
    'updated_at': Product.updated_at,
}

DEFAULT_SORT = '-created_at'

# price[gte]=10 style query keys
_FILTER_KEY = re.compile(r'^(?P<field>[A-Za-z_]+)(?:\[(?P<op>[A-Za-z]+)\])?$')


def parse_filters(params):
    """Translate non-reserved params into SQLAlchemy criteria.

    Accepts flat query-string keys (``price[gte]``) and nested mappings
    (``{'price': {'gte': 10}}``). Only fields in FILTERABLE_FIELDS with one
    of their permitted operators are accepted.
    """
    criteria = []
    for key, value in params.items():
        if key in RESERVED_PARAMS:
            continue
        match = _FILTER_KEY.match(key)
        if match is None:
            raise ValidationError(f'Invalid filter: {key}')
        field, op = match.group('field'), match.group('op')
        if isinstance(value, dict):
            if op is not None:
                raise ValidationError(f'Invalid filter: {key}')
            pairs = list(value.items())
        else:
            pairs = [(op or 'eq', value)]

        allowed = FILTERABLE_FIELDS.get(field)
        if allowed is None:
            raise ValidationError(f'Filtering on "{field}" is not allowed')
        for op_name, raw in pairs:
            if op_name not in allowed.operators:
                raise ValidationError(f'Operator "{op_name}" is not allowed on "{field}"')
            criteria.append(OPERATORS[op_name](allowed.column, allowed.coerce(raw, field)))
    return criteria


def parse_sort(sort):
    """Turn ``"price,-title"`` into ORDER BY clauses with the id as tie-breaker."""
    clauses = []
    seen = []
    descending_first = False
    for raw in (sort or DEFAULT_SORT).split(','):
        name = raw.strip()
        if not name:
            continue
        descending = name.startswith('-')
        name = name.lstrip('-')
        column = SORTABLE_FIELDS.get(name)
        if column is None:
            raise ValidationError(f'Sorting on "{name}" is not allowed')
        if name in seen:
            continue
        if not seen:
            descending_first = descending
        seen.append(name)
        clauses.append(column.desc() if descending else column.asc())
    if not clauses:
        raise ValidationError('sort must name at least one field')
    if 'id' not in seen:
        clauses.append(Product.id.desc() if descending_first else Product.id.asc())
    return clauses


def parse_fields(fields):
    """Resolve the projection; the version marker is only returned on request."""
    if not fields:
        return list(PRODUCT_FIELDS)
    selected = ['id']
    for raw in fields.split(','):
        name = raw.strip()
        if not name or name in selected:
            continue
        if name not in PRODUCT_FIELDS and name not in HIDDEN_FIELDS:
            raise ValidationError(f'Unknown field "{name}"')
        selected.append(name)
    return selected


def parse_pagination(page, limit):
    """Return ``(skip, limit)``, or ``(None, None)`` when nothing was requested."""
    if page in (None, '') and limit in (None, ''):
        return None, None
    page = parse_positive_int(page, 'page') if page not in (None, '') else 1
    if limit in (None, ''):
        limit = current_app.config.get('ITEMS_PER_PAGE', 12)
    else:
        limit = parse_positive_int(limit, 'limit')
    return (page - 1) * limit, limit


def list_products(params):
    """Filtered, sorted, paginated and projected list of products.

    ``params`` is ``request.args`` or any mapping with the same keys.
    Raises NotFound when ``page`` is given and lies past the last product.
    """
    query = Product.query.filter(*parse_filters(params))

    search = params.get('search')
    if search:
        query = query.filter(Product.title.icontains(search, autoescape=True))

    query = query.order_by(*parse_sort(params.get('sort')))
    fields = parse_fields(params.get('fields'))

    skip, limit = parse_pagination(params.get('page'), params.get('limit'))
    if skip is not None:
        if params.get('page') not in (None, ''):
            product_count = Product.query.count()
            if skip >= product_count:
                raise NotFound(ERROR_PAGE_NOT_FOUND)
        query = query.offset(skip).limit(limit)

    return [product.to_dict(fields=fields) for product in query.all()]


# --- Product administration ---

PRODUCT_PAYLOAD_FIELDS = ('title', 'description', 'price', 'category', 'attributes', 'images')


def _clean_product_payload(data, partial=False):
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')

    unknown = sorted(set(data) - set(PRODUCT_PAYLOAD_FIELDS))
    if unknown:
        raise ValidationError('Unknown product fields', errors={name: ['Not allowed'] for name in unknown})

    cleaned = {}
    errors = {}
    if not partial:
        for required in ('title', 'price'):
            if data.get(required) in (None, ''):
                errors[required] = [f'{required} is required']

    if data.get('title') is not None:
        title = str(data['title']).strip()
        if not title or len(title) > 150:
            errors['title'] = ['Title must be between 1 and 150 characters']
        else:
            cleaned['title'] = title
    if data.get('price') is not None:
        try:
            cleaned['price'] = parse_price(data['price'])
        except ValidationError as exc:
            errors['price'] = [exc.message]
    if 'description' in data:
        cleaned['description'] = data['description']
    if 'category' in data:
        if data['category'] is None:
            cleaned['category_id'] = None
        else:
            try:
                cleaned['category_id'] = parse_id(data['category'], 'category')
            except ValidationError as exc:
                errors['category'] = [exc.message]
    if 'attributes' in data:
        if not isinstance(data['attributes'], dict):
            errors['attributes'] = ['Attributes must be an object']
        else:
            cleaned['attributes'] = data['attributes']
    if 'images' in data:
        images = data['images']
        if not isinstance(images, list) or not all(isinstance(i, str) for i in images):
            errors['images'] = ['Images must be a list of URLs']
        else:
            cleaned['images'] = images

    if errors:
        raise ValidationError('Invalid product payload', errors=errors)

    category_id = cleaned.get('category_id')
    if category_id is not None and db.session.get(Category, category_id) is None:
        raise NotFound(ERROR_CATEGORY_NOT_FOUND)
    return cleaned


def get_product_or_404(product_id):
    product = db.session.get(Product, parse_id(product_id, 'product id'))
    if product is None:
        raise NotFound(ERROR_PRODUCT_NOT_FOUND)
    return product


def get_product(product_id):
    """Product with its category expanded."""
    return get_product_or_404(product_id).to_dict(expand_category=True)


def create_product(data, policy):
    principal = policy.require_admin()
    cleaned = _clean_product_payload(data)

    product = Product(
        title=cleaned['title'],
        slug=slugify(cleaned['title']),
        description=cleaned.get('description'),
        price=cleaned['price'],
        category_id=cleaned.get('category_id'),
        attributes=cleaned.get('attributes', {}),
        images=cleaned.get('images', []),
    )
    db.session.add(product)
    db.session.commit()
    current_app.logger.info('Product %s created by user %s', product.id, principal.id)
    return product


def update_product(product_id, data, policy):
    principal = policy.require_admin()
    product = get_product_or_404(product_id)
    cleaned = _clean_product_payload(data, partial=True)

    for key, value in cleaned.items():
        setattr(product, key, value)
    if 'title' in cleaned:
        product.slug = slugify(cleaned['title'])

    db.session.commit()
    current_app.logger.info('Product %s updated by user %s', product.id, principal.id)
    return product


def delete_product(product_id, policy):
    """Delete a product, dropping it from every cart that holds it."""
    principal = policy.require_admin()
    product = get_product_or_404(product_id)

    affected = set()
    for item in product.line_items.all():
        cart = item.cart
        cart.items.remove(item)
        affected.add(cart)
    db.session.flush()
    for cart in affected:
        cart.recompute_total()

    db.session.delete(product)
    db.session.commit()
    current_app.logger.info('Product %s deleted by user %s (%d carts updated)',
                            product_id, principal.id, len(affected))
