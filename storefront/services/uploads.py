"""Product image uploads stored in the local upload folder."""

import os
from datetime import datetime

from flask import current_app, url_for
from werkzeug.utils import secure_filename

from storefront.errors import ValidationError
from storefront.extensions import db
from storefront.services.catalog import get_product_or_404

UPLOAD_SUBFOLDER = 'products'


def upload_dir():
    return os.path.join(current_app.config['UPLOAD_FOLDER'], UPLOAD_SUBFOLDER)


def allowed_file(filename):
    """Check if file extension is allowed."""
    allowed = current_app.config.get('ALLOWED_EXTENSIONS', set())
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in allowed


def save_file(file):
    """Save one uploaded file and return the stored filename."""
    filename = secure_filename(file.filename or '')
    if not filename or not allowed_file(filename):
        raise ValidationError(f'File type not allowed: {file.filename!r}')
    timestamp = datetime.utcnow().strftime('%Y%m%d%H%M%S%f')
    filename = f"{timestamp}_{filename}"
    os.makedirs(upload_dir(), exist_ok=True)
    file.save(os.path.join(upload_dir(), filename))
    return filename


def save_uploads(files, policy, product_id=None):
    """Store uploaded images and optionally append them to a product.

    All files are checked before any is written. Returns a list of
    ``{'filename', 'url'}`` dicts.
    """
    principal = policy.require_admin()
    files = [f for f in files if f and f.filename]
    if not files:
        raise ValidationError('No files uploaded', errors={'images': ['At least one image is required']})
    rejected = [f.filename for f in files if not allowed_file(secure_filename(f.filename))]
    if rejected:
        raise ValidationError('File type not allowed', errors={'images': rejected})

    product = get_product_or_404(product_id) if product_id not in (None, '') else None

    uploads = []
    for file in files:
        filename = save_file(file)
        uploads.append({
            'filename': filename,
            'url': url_for('uploads.get_upload', filename=filename),
        })

    if product is not None:
        # JSON columns only track reassignment
        product.images = (product.images or []) + [u['url'] for u in uploads]
        db.session.commit()

    current_app.logger.info('User %s uploaded %d image(s)%s', principal.id, len(uploads),
                            f' for product {product.id}' if product is not None else '')
    return uploads
