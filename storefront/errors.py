"""API error types and the JSON error handlers that render them."""

import logging
import os
import sys
import threading

from flask import jsonify
from sqlalchemy.orm.exc import StaleDataError
from werkzeug.exceptions import HTTPException

from storefront.extensions import db

# Common messages
ERROR_PRODUCT_NOT_FOUND = 'Product not found'
ERROR_CATEGORY_NOT_FOUND = 'Category not found'
ERROR_CART_NOT_FOUND = 'Cart not found'
ERROR_PAGE_NOT_FOUND = 'This page does not exist'
ERROR_ADMIN_REQUIRED = 'User does not have permission to perform this action'
ERROR_LOGIN_REQUIRED = 'Authentication required'
ERROR_INTERNAL = 'Internal Server Error'


class ApiError(Exception):
    """Base class for errors surfaced to API clients."""
    status_code = 500
    status = 'error'
    default_message = ERROR_INTERNAL

    def __init__(self, message=None, errors=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.errors = errors

    def to_dict(self):
        body = {'status': self.status, 'message': self.message}
        if self.errors:
            body['errors'] = self.errors
        return body


class ValidationError(ApiError):
    """Malformed identifier or payload."""
    status_code = 400
    status = 'fail'
    default_message = 'Invalid request'


class Unauthorized(ApiError):
    status_code = 401
    status = 'fail'
    default_message = ERROR_LOGIN_REQUIRED


class Forbidden(ApiError):
    """Authenticated principal lacks the required role."""
    status_code = 403
    status = 'fail'
    default_message = ERROR_ADMIN_REQUIRED


class NotFound(ApiError):
    status_code = 404
    status = 'fail'
    default_message = 'Not found'


class Conflict(ApiError):
    """Write lost against a concurrent update of the same record."""
    status_code = 409
    status = 'fail'
    default_message = 'Record was modified concurrently, retry the request'


class InternalError(ApiError):
    status_code = 500
    default_message = ERROR_INTERNAL


def register_error_handlers(app):
    """Render every error raised by a handler as a JSON body."""

    @app.errorhandler(ApiError)
    def api_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(StaleDataError)
    def stale_data_error(error):
        db.session.rollback()
        return api_error(Conflict())

    @app.errorhandler(HTTPException)
    def http_error(error):
        status = 'fail' if error.code < 500 else 'error'
        return jsonify({'status': status, 'message': error.description}), error.code

    @app.errorhandler(Exception)
    def internal_error(error):
        db.session.rollback()
        app.logger.exception('Unhandled error: %s', error)
        return api_error(InternalError())


def install_fault_boundary(logger=None):
    """Log any uncaught exception and terminate the process.

    Covers the main thread and server worker threads. Nothing tries to
    recover in process.
    """
    logger = logger or logging.getLogger('storefront')

    def _shutdown(exc_type, exc_value, exc_traceback):
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return
        logger.critical(
            'UNCAUGHT EXCEPTION! Shutting down... %s: %s',
            exc_type.__name__, exc_value,
            exc_info=(exc_type, exc_value, exc_traceback),
        )
        for handler in logger.handlers + logging.getLogger().handlers:
            handler.flush()
        os._exit(1)

    def _thread_shutdown(args):
        if issubclass(args.exc_type, SystemExit):
            return
        _shutdown(args.exc_type, args.exc_value, args.exc_traceback)

    sys.excepthook = _shutdown
    threading.excepthook = _thread_shutdown
    return _shutdown
