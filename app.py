"""Development entry point.

Builds the application, installs the process-wide fault boundary and runs
the Flask server. Any exception that escapes request handling is logged and
terminates the process.
"""

import os

from storefront import create_app
from storefront.errors import install_fault_boundary
from storefront.extensions import db

app = create_app()


if __name__ == '__main__':
    install_fault_boundary(app.logger)

    with app.app_context():
        db.create_all()

    port = int(os.environ.get('PORT', 5000))
    app.logger.info('Server running on port %s', port)
    app.run(host='0.0.0.0', port=port, debug=app.config.get('DEBUG', False))
