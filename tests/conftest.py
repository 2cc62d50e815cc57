"""
Pytest configuration and fixtures for testing the Folio API.
"""

import io
import os
import sys
import pytest
from faker import Faker
from PIL import Image

# Add the parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from folio import create_app, db

fake = Faker()


class FakeStorage:
    """In-memory stand-in for folio.services.storage."""

    def __init__(self):
        self.blobs = {}
        self.deleted = []
        self.fail_upload = False
        self.fail_delete = False

    def is_storage_configured(self):
        return True

    def upload_page_image(self, file_data, file_name, original_name, content_type='image/jpeg'):
        if self.fail_upload:
            return None, None, 'upload failed'
        blob_id = f'{file_name}-{len(self.blobs) + 1}.png'
        self.blobs[blob_id] = file_data
        return f'https://storage.test/page-images/images/{blob_id}', blob_id, None

    def delete_page_image(self, blob_id):
        self.deleted.append(blob_id)
        if self.fail_delete:
            return False, 'delete failed'
        self.blobs.pop(blob_id, None)
        return True, None


def make_png(size=(32, 32), color='white'):
    """Bytes of a real PNG image."""
    buffer = io.BytesIO()
    Image.new('RGB', size, color).save(buffer, format='PNG')
    return buffer.getvalue()


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    os.environ['FLASK_ENV'] = 'testing'

    app = create_app('testing')

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client for each test function."""
    return app.test_client()


@pytest.fixture(scope='function')
def service(app):
    """The app's ProjectService with a fresh fake blob store and empty caches."""
    project_service = app.extensions['project_service']
    project_service.storage = FakeStorage()
    project_service.project_cache.clear()
    project_service.page_group_cache.clear()
    return project_service


@pytest.fixture(scope='function')
def storage(service):
    return service.storage


@pytest.fixture(scope='function')
def db_session(app, service):
    """Create a fresh database session for each test."""
    with app.app_context():
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()
        yield db.session
        db.session.rollback()


@pytest.fixture
def png_bytes():
    return make_png()


def _project_data(**overrides):
    data = {
        'title': fake.sentence(nb_words=3).rstrip('.'),
        'description': fake.paragraph(),
        'rootLanguage': 'eng',
        'translationLanguages': ['ara', 'fra'],
    }
    data.update(overrides)
    return data


@pytest.fixture
def project_data():
    return _project_data


@pytest.fixture
def test_project(service, db_session):
    """Create a test project."""
    return service.create_project(_project_data())


@pytest.fixture
def test_page_group(service, db_session):
    """Create a test page group with a Spanish translation."""
    return service.create_page_group({
        'title': fake.sentence(nb_words=3).rstrip('.'),
        'rootLanguage': 'eng',
        'rootText': fake.paragraph(),
        'translations': {'spa': fake.paragraph()},
    })


@pytest.fixture
def linked_page_group(service, test_project, test_page_group):
    """The test page group linked to the test project."""
    service.add_page_group_to_project(test_project['id'], test_page_group['id'])
    return test_page_group
