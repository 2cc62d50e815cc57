"""Project routes: CRUD plus page-group membership."""

import logging

from flask import Blueprint, request, jsonify

from folio import db
from folio.services.project_service import ValidationError, get_project_service

projects_bp = Blueprint('projects', __name__)
logger = logging.getLogger(__name__)


@projects_bp.route('', methods=['GET'])
def get_projects():
    """Get all projects, newest first."""
    try:
        return jsonify(get_project_service().get_projects()), 200
    except Exception as e:
        logger.error(f'Error fetching projects: {e}', exc_info=True)
        return jsonify({'error': 'Failed to fetch projects'}), 500


@projects_bp.route('', methods=['POST'])
def create_project():
    """Create a new project.

    Body: title, rootLanguage, translationLanguages[], description?, fileName?
    """
    try:
        data = request.get_json(silent=True) or {}

        if not data.get('title') or not data.get('rootLanguage') or not data.get('translationLanguages'):
            return jsonify({
                'error': 'Title, root language and at least one translation language are required'
            }), 400

        project = get_project_service().create_project(data)
        return jsonify(project), 201
    except ValidationError as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        db.session.rollback()
        logger.error(f'Error creating project: {e}', exc_info=True)
        return jsonify({'error': 'Failed to create project'}), 500


@projects_bp.route('/<project_id>', methods=['GET'])
def get_project(project_id):
    """Get a project with its pages grouped by language."""
    try:
        result = get_project_service().get_project_with_pages(project_id)
        if result is None:
            return jsonify({'error': 'Project not found'}), 404
        return jsonify(result), 200
    except Exception as e:
        logger.error(f'Error fetching project {project_id}: {e}', exc_info=True)
        return jsonify({'error': 'Failed to fetch project'}), 500


@projects_bp.route('/<project_id>/linked', methods=['GET'])
def get_project_linked(project_id):
    """Get a project with one entry per page group (root page + translations)."""
    try:
        result = get_project_service().get_project_with_linked_pages(project_id)
        if result is None:
            return jsonify({'error': 'Project not found'}), 404
        return jsonify(result), 200
    except Exception as e:
        logger.error(f'Error fetching linked pages for project {project_id}: {e}', exc_info=True)
        return jsonify({'error': 'Failed to fetch project'}), 500


@projects_bp.route('/<project_id>', methods=['PUT'])
def update_project(project_id):
    """Update an existing project. Missing fields are left unchanged."""
    try:
        data = request.get_json(silent=True) or {}

        project = get_project_service().update_project(project_id, data)
        if project is None:
            return jsonify({'error': 'Project not found'}), 404
        return jsonify(project), 200
    except ValidationError as e:
        db.session.rollback()
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        db.session.rollback()
        logger.error(f'Error updating project {project_id}: {e}', exc_info=True)
        return jsonify({'error': 'Failed to update project'}), 500


@projects_bp.route('/<project_id>', methods=['DELETE'])
def delete_project(project_id):
    """Delete a project and every page group linked to it."""
    try:
        if not get_project_service().delete_project(project_id):
            return jsonify({'error': 'Project not found'}), 404
        return jsonify({'success': True}), 200
    except Exception as e:
        db.session.rollback()
        logger.error(f'Error deleting project {project_id}: {e}', exc_info=True)
        return jsonify({'error': 'Failed to delete project'}), 500


@projects_bp.route('/<project_id>/pages', methods=['POST'])
def add_page(project_id):
    """Add a page (its whole page group) to a project. Body: pageId, language?"""
    try:
        data = request.get_json(silent=True) or {}
        page_id = data.get('pageId')

        if not page_id:
            return jsonify({'error': 'Page ID is required'}), 400

        if not get_project_service().add_page_to_project(project_id, page_id, data.get('language')):
            return jsonify({'success': False, 'error': 'Failed to add page to project'}), 400
        return jsonify({'success': True}), 200
    except Exception as e:
        db.session.rollback()
        logger.error(f'Error adding page to project {project_id}: {e}', exc_info=True)
        return jsonify({'error': 'Failed to add page to project'}), 500


@projects_bp.route('/<project_id>/pages', methods=['DELETE'])
def remove_page(project_id):
    """Remove a page (its whole page group) from a project. Body: pageId, language?"""
    try:
        data = request.get_json(silent=True) or {}
        page_id = data.get('pageId')

        if not page_id:
            return jsonify({'error': 'Page ID is required'}), 400

        if not get_project_service().remove_page_from_project(project_id, page_id, data.get('language')):
            return jsonify({'success': False, 'error': 'Failed to remove page from project'}), 400
        return jsonify({'success': True}), 200
    except Exception as e:
        db.session.rollback()
        logger.error(f'Error removing page from project {project_id}: {e}', exc_info=True)
        return jsonify({'error': 'Failed to remove page from project'}), 500
