"""Page group routes: create, read, edit root fields and manage translations."""

import json
import logging

from flask import Blueprint, request, jsonify

from folio import db
from folio.services.project_service import ValidationError, get_project_service
from folio.utils.images import get_image_from_request

page_groups_bp = Blueprint('page_groups', __name__)
logger = logging.getLogger(__name__)


def _page_group_data_from_form():
    """Form fields of a multipart create. `translations` is a JSON object string."""
    form = request.form
    translations = form.get('translations')
    return {
        'title': form.get('title'),
        'fileName': form.get('fileName'),
        'rootLanguage': form.get('rootLanguage'),
        'rootText': form.get('rootText', ''),
        'translations': json.loads(translations) if translations else {},
        'status': form.get('status'),
        'projectId': form.get('projectId'),
    }


@page_groups_bp.route('', methods=['GET'])
def get_page_groups():
    try:
        return jsonify(get_project_service().get_page_groups()), 200
    except Exception as e:
        logger.error(f'Error fetching page groups: {e}', exc_info=True)
        return jsonify({'error': 'Failed to fetch page groups'}), 500


@page_groups_bp.route('', methods=['POST'])
def create_page_group():
    """Create a page group from JSON or from a multipart form with an optional `imageFile`.

    Body: rootLanguage, title?, fileName?, rootText?, translations?, status?, projectId?
    """
    try:
        image = None
        if request.is_json:
            data = request.get_json(silent=True) or {}
        else:
            try:
                data = _page_group_data_from_form()
            except ValueError:
                return jsonify({'error': 'translations must be a JSON object'}), 400
            image, error = get_image_from_request('imageFile', required=False)
            if error:
                return error

        if not data.get('rootLanguage'):
            return jsonify({'error': 'rootLanguage is required'}), 400

        service = get_project_service()
        page_group = service.create_page_group(data, image=image)

        project_id = data.get('projectId')
        if project_id and not service.add_page_group_to_project(project_id, page_group['id']):
            logger.warning(f"Page group {page_group['id']} could not be added to project {project_id}")

        return jsonify(page_group), 201
    except ValidationError as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        db.session.rollback()
        logger.error(f'Error creating page group: {e}', exc_info=True)
        return jsonify({'error': 'Failed to create page group'}), 500


@page_groups_bp.route('/<page_group_id>', methods=['GET'])
def get_page_group(page_group_id):
    try:
        page_group = get_project_service().load_page_group(page_group_id)
        if page_group is None:
            return jsonify({'error': 'Page group not found'}), 404
        return jsonify(page_group), 200
    except Exception as e:
        logger.error(f'Error fetching page group {page_group_id}: {e}', exc_info=True)
        return jsonify({'error': 'Failed to fetch page group'}), 500


@page_groups_bp.route('/<page_group_id>', methods=['PUT'])
def update_page_group(page_group_id):
    """Update the title or the root text. Title wins when both are sent."""
    try:
        data = request.get_json(silent=True) or {}
        service = get_project_service()

        if data.get('title') is not None:
            page_group = service.update_page_group_title(page_group_id, data['title'])
        elif data.get('rootText') is not None:
            page_group = service.update_page_group_root_text(page_group_id, data['rootText'])
        else:
            return jsonify({'error': 'No valid update fields provided'}), 400

        if page_group is None:
            return jsonify({'error': 'Page group not found'}), 404
        return jsonify({'success': True, 'pageGroup': page_group}), 200
    except Exception as e:
        db.session.rollback()
        logger.error(f'Error updating page group {page_group_id}: {e}', exc_info=True)
        return jsonify({'error': 'Failed to update page group'}), 500


@page_groups_bp.route('/<page_group_id>', methods=['DELETE'])
def delete_page_group(page_group_id):
    try:
        if not get_project_service().delete_page_group(page_group_id):
            return jsonify({'error': 'Page group not found'}), 404
        return jsonify({'success': True}), 200
    except Exception as e:
        db.session.rollback()
        logger.error(f'Error deleting page group {page_group_id}: {e}', exc_info=True)
        return jsonify({'error': 'Failed to delete page group'}), 500


@page_groups_bp.route('/<page_group_id>/translations', methods=['POST', 'PUT'])
def set_translation(page_group_id):
    """Add or overwrite one translation. Body: language, text"""
    try:
        data = request.get_json(silent=True) or {}
        language = data.get('language')
        text = data.get('text')

        if not language or not text:
            return jsonify({'error': 'Language and text are required'}), 400

        page_group = get_project_service().add_translation_to_page_group(page_group_id, language, text)
        if page_group is None:
            return jsonify({'error': 'Page group not found'}), 404
        return jsonify({'success': True, 'pageGroup': page_group}), 200
    except ValidationError as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        db.session.rollback()
        logger.error(f'Error saving translation for page group {page_group_id}: {e}', exc_info=True)
        return jsonify({'error': 'Failed to save translation'}), 500


@page_groups_bp.route('/<page_group_id>/translations/<language>', methods=['DELETE'])
def remove_translation(page_group_id, language):
    try:
        page_group = get_project_service().remove_translation_from_page_group(page_group_id, language)
        if page_group is None:
            return jsonify({'error': 'Translation not found'}), 404
        return jsonify({'success': True, 'pageGroup': page_group}), 200
    except Exception as e:
        db.session.rollback()
        logger.error(f'Error removing {language} translation from page group {page_group_id}: {e}', exc_info=True)
        return jsonify({'error': 'Failed to remove translation'}), 500
