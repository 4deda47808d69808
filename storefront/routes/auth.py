"""Account routes: registration and session login."""

from flask import Blueprint, jsonify, current_app
from flask_login import login_user, logout_user, current_user
from storefront.errors import Forbidden, Unauthorized
from storefront.extensions import db
from storefront.forms.auth import LoginForm, RegistrationForm
from storefront.models import User
from storefront.policy import ROLE_CUSTOMER
from storefront.utils.decorators import login_required

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/register', methods=['POST'])
def register():
    """Customer registration."""
    form = RegistrationForm.from_json().validate_or_raise()
    user = User(
        email=form.email.data.lower(),
        name=form.name.data,
        role=ROLE_CUSTOMER
    )
    user.set_password(form.password.data)

    db.session.add(user)
    db.session.commit()
    current_app.logger.info('Registered user %s', user.id)
    return jsonify(user.to_dict()), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    """User login."""
    form = LoginForm.from_json().validate_or_raise()
    user = User.query.filter_by(email=form.email.data.lower()).first()

    if user is None or not user.check_password(form.password.data):
        raise Unauthorized('Invalid email or password.')
    if not user.is_active:
        raise Forbidden('Your account has been deactivated. Please contact support.')

    login_user(user, remember=form.remember.data)
    return jsonify(user.to_dict())


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout(policy):
    """User logout."""
    logout_user()
    return jsonify({'status': 'successful', 'message': 'You have been logged out.'})


@auth_bp.route('/me', methods=['GET'])
@login_required
def me(policy):
    return jsonify(current_user.to_dict())
