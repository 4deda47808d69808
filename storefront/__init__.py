"""Flask application factory."""

import os
from flask import Flask
from .config import config
from .extensions import db, migrate, login_manager, bcrypt


def create_app(config_name=None, **overrides):
    """Create and configure the Flask application."""
    if config_name is None:
        config_name = os.environ.get('FLASK_CONFIG', 'development')

    app = Flask(__name__)
    app.config.from_object(config[config_name])
    app.config.update(overrides)
    app.logger.setLevel(app.config['LOG_LEVEL'])

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    bcrypt.init_app(app)

    # Create upload directory
    os.makedirs(os.path.join(app.config['UPLOAD_FOLDER'], 'products'), exist_ok=True)

    # Register blueprints
    from .routes import register_blueprints
    register_blueprints(app)

    # JSON error bodies for every failure
    from .errors import register_error_handlers
    register_error_handlers(app)

    # User loader for Flask-Login
    from .models import User

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    app.logger.debug('Application created with %s config', config_name)
    return app
