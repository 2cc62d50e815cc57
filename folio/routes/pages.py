"""Legacy page routes.

A page is a view over a page group: the root page has the page group's id
and each translation is addressed as `{pageGroupId}_{language}`.
"""

import logging

from flask import Blueprint, request, jsonify

from folio import db
from folio.services.project_service import ValidationError, get_project_service
from folio.utils.images import get_image_from_request

pages_bp = Blueprint('pages', __name__)
logger = logging.getLogger(__name__)


def _page_data_from_form():
    form = request.form
    return {
        'fileName': form.get('fileName', 'untitled'),
        'title': form.get('title', 'Untitled'),
        'originalText': form.get('originalText', ''),
        'editedText': form.get('editedText', ''),
        'language': form.get('language', 'eng'),
        'status': form.get('status', 'approved'),
        'projectId': form.get('projectId'),
    }


@pages_bp.route('', methods=['POST'])
def create_page():
    """Create a page from a scanned image (multipart) or from text (JSON).

    Multipart requires `imageFile`; JSON requires `language` and `editedText`.
    Either may carry `projectId` to add the new page to a project.
    """
    try:
        image = None
        if request.is_json:
            data = request.get_json(silent=True) or {}
            if not data.get('language') or not data.get('editedText'):
                return jsonify({'error': 'language and editedText are required'}), 400
        else:
            data = _page_data_from_form()
            image, error = get_image_from_request('imageFile')
            if error:
                return error

        service = get_project_service()
        page = service.create_page(data, image=image)
        logger.info(f"Page created: {page['id']} ({page['language']})")

        project_id = data.get('projectId')
        if project_id and not service.add_page_to_project(project_id, page['id'], page['language']):
            logger.warning(f"Page {page['id']} could not be added to project {project_id}")

        return jsonify(page), 201
    except ValidationError as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        db.session.rollback()
        logger.error(f'Error creating page: {e}', exc_info=True)
        return jsonify({'error': 'Failed to create page'}), 500


@pages_bp.route('', methods=['GET'])
def get_pages():
    """Get all pages, optionally only those in ?language=."""
    try:
        language = request.args.get('language')
        service = get_project_service()
        pages = service.get_pages_by_language(language) if language else service.get_pages()
        return jsonify(pages), 200
    except Exception as e:
        logger.error(f'Error fetching pages: {e}', exc_info=True)
        return jsonify({'error': 'Failed to fetch pages'}), 500


@pages_bp.route('/<page_id>', methods=['GET'])
def get_page(page_id):
    try:
        page = get_project_service().load_page(page_id)
        if page is None:
            return jsonify({'error': 'Page not found'}), 404
        return jsonify(page), 200
    except Exception as e:
        logger.error(f'Error fetching page {page_id}: {e}', exc_info=True)
        return jsonify({'error': 'Failed to fetch page'}), 500


@pages_bp.route('/<page_id>', methods=['PUT'])
def update_page(page_id):
    """Update a page. Translation pages only take editedText."""
    try:
        data = request.get_json(silent=True) or {}

        page = get_project_service().update_page(page_id, data)
        if page is None:
            return jsonify({'error': 'Page not found'}), 404
        return jsonify(page), 200
    except ValidationError as e:
        db.session.rollback()
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        db.session.rollback()
        logger.error(f'Error updating page {page_id}: {e}', exc_info=True)
        return jsonify({'error': 'Failed to update page'}), 500


@pages_bp.route('/<page_id>', methods=['DELETE'])
def delete_page(page_id):
    """Delete a root page (its whole page group) or a single translation."""
    try:
        if not get_project_service().delete_page(page_id):
            return jsonify({'error': 'Page not found'}), 404
        return jsonify({'success': True}), 200
    except Exception as e:
        db.session.rollback()
        logger.error(f'Error deleting page {page_id}: {e}', exc_info=True)
        return jsonify({'error': 'Failed to delete page'}), 500


def _link_ids():
    data = request.get_json(silent=True) or {}
    return data.get('rootPageId'), data.get('translationPageId')


@pages_bp.route('/link', methods=['POST'])
def link_pages():
    """Merge a page into a root page's group as one of its translations."""
    try:
        root_page_id, translation_page_id = _link_ids()
        if not root_page_id or not translation_page_id:
            return jsonify({'error': 'Root page ID and translation page ID are required'}), 400

        if not get_project_service().link_translation_page(root_page_id, translation_page_id):
            return jsonify({'error': 'Failed to link pages'}), 400
        return jsonify({'success': True}), 200
    except Exception as e:
        db.session.rollback()
        logger.error(f'Error linking pages: {e}', exc_info=True)
        return jsonify({'error': 'Failed to link pages'}), 500


@pages_bp.route('/link', methods=['DELETE'])
def unlink_pages():
    """Split a translation out of its group into a standalone page."""
    try:
        root_page_id, translation_page_id = _link_ids()
        if not root_page_id or not translation_page_id:
            return jsonify({'error': 'Root page ID and translation page ID are required'}), 400

        if not get_project_service().unlink_translation_page(root_page_id, translation_page_id):
            return jsonify({'error': 'Failed to unlink pages'}), 400
        return jsonify({'success': True}), 200
    except Exception as e:
        db.session.rollback()
        logger.error(f'Error unlinking pages: {e}', exc_info=True)
        return jsonify({'error': 'Failed to unlink pages'}), 500
