"""Category model."""

from datetime import datetime
from slugify import slugify
from storefront.extensions import db


class Category(db.Model):
    """Product category model."""
    __tablename__ = 'categories'
    
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(100), unique=True, nullable=False)
    slug = db.Column(db.String(120), unique=True, index=True)
    description = db.Column(db.String(255))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # Relationships
    products = db.relationship('Product', backref='category', lazy='dynamic')
    
    def generate_slug(self):
        """Generate a unique slug for the category."""
        base_slug = slugify(self.title) if self.title else 'category'
        slug = base_slug
        counter = 1
        while Category.query.filter(Category.slug == slug, Category.id != self.id).first() is not None:
            slug = f"{base_slug}-{counter}"
            counter += 1
        self.slug = slug
    
    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'slug': self.slug,
            'description': self.description,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }
    
    def __repr__(self):
        return f'<Category {self.title}>'
