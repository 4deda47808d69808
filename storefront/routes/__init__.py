"""Routes package - register all blueprints."""

from flask import Flask


def register_blueprints(app: Flask):
    """Register all blueprints with the application."""
    from .auth import auth_bp
    from .products import products_bp
    from .categories import categories_bp
    from .cart import cart_bp
    from .uploads import uploads_bp
    
    app.register_blueprint(auth_bp, url_prefix='/api/user')
    app.register_blueprint(products_bp, url_prefix='/api/product')
    app.register_blueprint(categories_bp, url_prefix='/api/category')
    app.register_blueprint(cart_bp, url_prefix='/api/cart')
    app.register_blueprint(uploads_bp, url_prefix='/api/upload')
