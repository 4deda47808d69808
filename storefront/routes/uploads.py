"""Image upload routes."""

from flask import Blueprint, jsonify, request, send_from_directory
from storefront.services import uploads
from storefront.utils.decorators import with_policy

uploads_bp = Blueprint('uploads', __name__)


@uploads_bp.route('', methods=['POST'])
@with_policy
def upload_images(policy):
    """Multipart upload of ``images``; ``product`` attaches them to a product."""
    saved = uploads.save_uploads(
        request.files.getlist('images'),
        policy,
        product_id=request.form.get('product'),
    )
    return jsonify(saved), 201


@uploads_bp.route('/<path:filename>', methods=['GET'])
def get_upload(filename):
    return send_from_directory(uploads.upload_dir(), filename)
