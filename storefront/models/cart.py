"""Cart and cart line item models."""

from datetime import datetime
from storefront.extensions import db


class Cart(db.Model):
    """One shopping cart per user."""
    __tablename__ = 'carts'
    
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), unique=True, nullable=False)
    cart_total = db.Column(db.Float, nullable=False, default=0.0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    items = db.relationship('CartLineItem', backref='cart', order_by='CartLineItem.position',
                            cascade='all, delete-orphan')
    
    def find_item(self, product_id):
        """Return the line item for ``product_id``, or None."""
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None
    
    def recompute_total(self):
        """Set cart_total to the sum of quantity x current price over all lines."""
        total = sum(item.subtotal for item in self.items)
        self.cart_total = round(total, 2)
        return self.cart_total
    
    def to_dict(self, expand_products=False):
        return {
            'id': self.id,
            'owner': self.user_id,
            'items': [item.to_dict(expand_product=expand_products) for item in self.items],
            'cart_total': self.cart_total,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }
    
    def __repr__(self):
        return f'<Cart user={self.user_id} total={self.cart_total}>'


class CartLineItem(db.Model):
    """A product, quantity and optional variant inside a cart."""
    __tablename__ = 'cart_line_items'
    
    id = db.Column(db.Integer, primary_key=True)
    cart_id = db.Column(db.Integer, db.ForeignKey('carts.id'), nullable=False, index=True)
    product_id = db.Column(db.Integer, db.ForeignKey('products.id'), nullable=False)
    quantity = db.Column(db.Integer, default=1, nullable=False)
    size = db.Column(db.String(50))
    color = db.Column(db.String(50))
    position = db.Column(db.Integer, default=0, nullable=False)
    
    @property
    def subtotal(self):
        """Calculate subtotal for this line from the product's current price."""
        if self.product:
            return self.product.price * self.quantity
        return 0
    
    def to_dict(self, expand_product=False):
        return {
            'product': self.product.to_dict(expand_category=True) if expand_product else self.product_id,
            'quantity': self.quantity,
            'size': self.size,
            'color': self.color,
        }
    
    def __repr__(self):
        return f'<CartLineItem {self.product_id} x {self.quantity}>'
