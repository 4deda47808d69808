"""Seed script to populate database with sample data."""

from slugify import slugify

from storefront import create_app
from storefront.extensions import db
from storefront.models import User, Category, Product

CATALOG = {
    'Breads': [
        {'title': 'Sourdough Loaf', 'price': 180, 'description': 'Classic tangy sourdough with a crispy crust',
         'attributes': {'weight_g': 500, 'vegetarian': True}},
        {'title': 'Multigrain Bread', 'price': 120, 'description': 'Healthy multigrain bread with seeds',
         'attributes': {'weight_g': 400, 'vegetarian': True}},
    ],
    'Apparel': [
        {'title': 'Cotton T-Shirt', 'price': 499, 'description': 'Plain crew neck tee',
         'attributes': {'sizes': ['S', 'M', 'L', 'XL'], 'colors': ['white', 'black']}},
        {'title': 'Denim Jacket', 'price': 2499, 'description': 'Stonewashed denim jacket',
         'attributes': {'sizes': ['M', 'L'], 'colors': ['blue']}},
    ],
    'Accessories': [
        {'title': 'Canvas Tote Bag', 'price': 299, 'description': 'Reusable canvas tote',
         'attributes': {'colors': ['natural', 'navy']}},
    ],
}


def seed_database(app=None):
    """Seed the database with sample data. Returns False if already seeded."""
    app = app or create_app()
    
    with app.app_context():
        # Create tables
        db.create_all()
        
        # Check if already seeded
        if User.query.filter_by(email='admin@shop.example.com').first():
            print('Database already seeded!')
            return False
        
        print('Seeding database...')
        
        # Create Admin
        admin = User(
            email='admin@shop.example.com',
            name='Admin User',
            role='admin'
        )
        admin.set_password('admin123')
        db.session.add(admin)
        
        customer = User(
            email='customer@example.com',
            name='Sample Customer',
            role='customer'
        )
        customer.set_password('customer123')
        db.session.add(customer)
        
        for category_title, products in CATALOG.items():
            category = Category(title=category_title)
            category.generate_slug()
            db.session.add(category)
            for product_data in products:
                db.session.add(Product(
                    category=category,
                    slug=slugify(product_data['title']),
                    images=[],
                    **product_data
                ))
        
        db.session.commit()
        print(f'Created {Category.query.count()} categories and {Product.query.count()} products.')
        print('Admin login: admin@shop.example.com / admin123')
        return True


if __name__ == '__main__':
    seed_database()
