"""Service bootstrap routes: status, sample data and reset."""

import logging

from flask import Blueprint, jsonify

from folio import db
from folio.services.project_service import get_project_service

admin_bp = Blueprint('admin', __name__)
logger = logging.getLogger(__name__)


@admin_bp.route('/init', methods=['GET'])
def init_status():
    """Initialize the service and report how much data it holds."""
    try:
        service = get_project_service()
        service.initialize()
        counts = service.count_rows()
        return jsonify({
            'message': 'Service initialized successfully',
            'projectCount': counts['projectCount'],
            'pageGroupCount': counts['pageGroupCount'],
            'pageCount': len(service.get_pages()),
            'storageConfigured': service.storage.is_storage_configured(),
        }), 200
    except Exception as e:
        logger.error(f'Failed to initialize service: {e}', exc_info=True)
        return jsonify({'error': 'Failed to initialize service'}), 500


@admin_bp.route('/init', methods=['POST'])
def init_sample_data():
    """Seed the sample project. Does nothing when projects already exist."""
    try:
        if get_project_service().initialize_from_sample_data():
            return jsonify({'message': 'Sample data initialized successfully'}), 200
        return jsonify({'message': 'Database already contains data, sample data skipped'}), 200
    except Exception as e:
        db.session.rollback()
        logger.error(f'Failed to initialize data: {e}', exc_info=True)
        return jsonify({'error': 'Failed to initialize data'}), 500


@admin_bp.route('/init', methods=['DELETE'])
def clear_data():
    try:
        get_project_service().clear_all_data()
        return jsonify({'message': 'All data cleared successfully'}), 200
    except Exception as e:
        db.session.rollback()
        logger.error(f'Failed to clear data: {e}', exc_info=True)
        return jsonify({'error': 'Failed to clear data'}), 500
