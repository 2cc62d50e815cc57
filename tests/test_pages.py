"""
Tests for the legacy page endpoints.
"""

import io

from faker import Faker

fake = Faker()


def _form(png_bytes, **fields):
    data = {
        'fileName': 'folio-7',
        'title': 'Folio 7',
        'originalText': 'raw ocr text',
        'editedText': 'clean text',
        'language': 'ara',
        'imageFile': (io.BytesIO(png_bytes), 'folio-7.png'),
    }
    data.update(fields)
    return data


class TestCreatePage:
    """Tests for POST /api/pages"""

    def test_create_page_json(self, client, db_session):
        response = client.post('/api/pages', json={
            'language': 'eng',
            'editedText': fake.paragraph(),
            'title': 'Preface',
        })

        assert response.status_code == 201
        assert response.json['language'] == 'eng'
        assert response.json['status'] == 'approved'
        assert response.json['originalText'] == response.json['editedText']

    def test_create_page_json_missing_fields(self, client, db_session):
        response = client.post('/api/pages', json={'language': 'eng'})

        assert response.status_code == 400
        assert response.json == {'error': 'language and editedText are required'}

    def test_create_page_multipart(self, client, storage, db_session, png_bytes):
        response = client.post('/api/pages', data=_form(png_bytes), content_type='multipart/form-data')

        assert response.status_code == 201
        assert response.json['editedText'] == 'clean text'
        assert response.json['fileName'] == 'folio-7'
        assert response.json['imageUrl'].startswith('https://storage.test/')
        assert len(storage.blobs) == 1

    def test_create_page_multipart_requires_image(self, client, db_session, png_bytes):
        data = _form(png_bytes)
        del data['imageFile']

        response = client.post('/api/pages', data=data, content_type='multipart/form-data')

        assert response.status_code == 400

    def test_create_page_rejects_non_image(self, client, db_session):
        data = _form(b'', imageFile=(io.BytesIO(b'%PDF-1.7 not really an image'), 'scan.png'))

        response = client.post('/api/pages', data=data, content_type='multipart/form-data')

        assert response.status_code == 400
        assert response.json == {'error': 'File does not appear to be a valid image'}

    def test_create_page_rejects_mismatched_extension(self, client, db_session, png_bytes):
        data = _form(png_bytes, imageFile=(io.BytesIO(png_bytes), 'scan.jpg'))

        response = client.post('/api/pages', data=data, content_type='multipart/form-data')

        assert response.status_code == 400

    def test_create_page_with_project(self, client, test_project, png_bytes):
        data = _form(png_bytes, projectId=test_project['id'])

        response = client.post('/api/pages', data=data, content_type='multipart/form-data')

        assert response.status_code == 201
        project = client.get(f'/api/projects/{test_project["id"]}').json['project']
        assert project['pageGroups'] == [response.json['id']]

    def test_create_page_with_unknown_project(self, client, db_session):
        response = client.post('/api/pages', json={
            'language': 'eng', 'editedText': 'text', 'projectId': 'project-0-missing',
        })

        assert response.status_code == 201


class TestListPages:
    """Tests for GET /api/pages"""

    def test_list_pages(self, client, test_page_group):
        response = client.get('/api/pages')

        assert response.status_code == 200
        assert {page['language'] for page in response.json} == {'eng', 'spa'}

    def test_list_pages_by_language(self, client, test_page_group):
        response = client.get('/api/pages?language=spa')

        assert response.status_code == 200
        assert [page['id'] for page in response.json] == [f'{test_page_group["id"]}_spa']


class TestSinglePage:
    """Tests for GET/PUT/DELETE /api/pages/:id"""

    def test_get_root_page(self, client, test_page_group):
        response = client.get(f'/api/pages/{test_page_group["id"]}')

        assert response.status_code == 200
        assert response.json['editedText'] == test_page_group['rootText']
        assert response.json['translationPages'] == [f'{test_page_group["id"]}_spa']

    def test_get_translation_page(self, client, test_page_group):
        response = client.get(f'/api/pages/{test_page_group["id"]}_spa')

        assert response.status_code == 200
        assert response.json['language'] == 'spa'
        assert response.json['rootPageId'] == test_page_group['id']

    def test_get_page_not_found(self, client, db_session):
        response = client.get('/api/pages/pagegroup-0-missing')

        assert response.status_code == 404

    def test_update_root_page(self, client, test_page_group):
        response = client.put(f'/api/pages/{test_page_group["id"]}', json={
            'editedText': 'corrected',
            'status': 'needs_review',
        })

        assert response.status_code == 200
        assert response.json['editedText'] == 'corrected'
        assert response.json['status'] == 'needs_review'

    def test_update_translation_page(self, client, test_page_group):
        response = client.put(f'/api/pages/{test_page_group["id"]}_spa', json={'editedText': 'Hola'})

        assert response.status_code == 200
        assert response.json['editedText'] == 'Hola'

    def test_update_page_invalid_status(self, client, test_page_group):
        response = client.put(f'/api/pages/{test_page_group["id"]}', json={'status': 'lost'})

        assert response.status_code == 400

    def test_update_page_not_found(self, client, db_session):
        response = client.put('/api/pages/pagegroup-0-missing', json={'editedText': 'x'})

        assert response.status_code == 404

    def test_delete_translation_page(self, client, test_page_group):
        response = client.delete(f'/api/pages/{test_page_group["id"]}_spa')

        assert response.status_code == 200
        assert client.get(f'/api/pages/{test_page_group["id"]}_spa').status_code == 404
        assert client.get(f'/api/pages/{test_page_group["id"]}').status_code == 200

    def test_delete_root_page(self, client, test_page_group):
        response = client.delete(f'/api/pages/{test_page_group["id"]}')

        assert response.status_code == 200
        assert client.get(f'/api/pages/{test_page_group["id"]}_spa').status_code == 404

    def test_delete_page_not_found(self, client, db_session):
        response = client.delete('/api/pages/pagegroup-0-missing')

        assert response.status_code == 404


class TestLinkPages:
    """Tests for POST/DELETE /api/pages/link"""

    def test_link_pages(self, client, test_page_group):
        standalone = client.post('/api/pages', json={'language': 'fra', 'editedText': 'Bonjour'}).json

        response = client.post('/api/pages/link', json={
            'rootPageId': test_page_group['id'],
            'translationPageId': standalone['id'],
        })

        assert response.status_code == 200
        assert response.json == {'success': True}
        page = client.get(f'/api/pages/{test_page_group["id"]}_fra').json
        assert page['editedText'] == 'Bonjour'

    def test_link_pages_missing_ids(self, client, db_session):
        response = client.post('/api/pages/link', json={'rootPageId': 'pagegroup-1-a'})

        assert response.status_code == 400

    def test_link_unknown_pages(self, client, db_session):
        response = client.post('/api/pages/link', json={
            'rootPageId': 'pagegroup-0-missing',
            'translationPageId': 'pagegroup-0-other',
        })

        assert response.status_code == 400

    def test_unlink_pages(self, client, test_page_group):
        response = client.delete('/api/pages/link', json={
            'rootPageId': test_page_group['id'],
            'translationPageId': f'{test_page_group["id"]}_spa',
        })

        assert response.status_code == 200
        spanish = client.get('/api/pages?language=spa').json
        assert len(spanish) == 1
        assert 'rootPageId' not in spanish[0]
