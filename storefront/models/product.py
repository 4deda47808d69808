"""Product model."""

from datetime import datetime
from storefront.extensions import db

# Fields a client can see, in output order. ``version`` is internal and only
# returned when a projection names it explicitly.
PRODUCT_FIELDS = (
    'id', 'title', 'slug', 'description', 'price', 'category',
    'attributes', 'images', 'created_at', 'updated_at',
)
HIDDEN_FIELDS = ('version',)


class Product(db.Model):
    """Product model."""
    __tablename__ = 'products'
    __table_args__ = (
        db.CheckConstraint('price >= 0', name='ck_products_price_non_negative'),
    )
    
    id = db.Column(db.Integer, primary_key=True)
    category_id = db.Column(db.Integer, db.ForeignKey('categories.id'), index=True)
    title = db.Column(db.String(150), nullable=False, index=True)
    slug = db.Column(db.String(170), index=True)
    description = db.Column(db.Text)
    price = db.Column(db.Float, nullable=False)
    attributes = db.Column(db.JSON, default=dict)
    images = db.Column(db.JSON, default=list)
    version = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # Relationships
    line_items = db.relationship('CartLineItem', backref='product', lazy='dynamic')
    
    __mapper_args__ = {'version_id_col': version}
    
    def to_dict(self, fields=None, expand_category=False):
        """Serialize the product, optionally projected to ``fields``."""
        if fields is None:
            fields = PRODUCT_FIELDS
        data = {}
        for field in fields:
            if field == 'category':
                if expand_category and self.category is not None:
                    data['category'] = self.category.to_dict()
                else:
                    data['category'] = self.category_id
            elif field in ('created_at', 'updated_at'):
                value = getattr(self, field)
                data[field] = value.isoformat() if value else None
            elif field == 'attributes':
                data[field] = self.attributes or {}
            elif field == 'images':
                data[field] = self.images or []
            else:
                data[field] = getattr(self, field)
        return data
    
    def __repr__(self):
        return f'<Product {self.title}>'
