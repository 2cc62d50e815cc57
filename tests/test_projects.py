"""
Tests for project endpoints.
"""

import pytest
from faker import Faker

fake = Faker()


class TestListProjects:
    """Tests for GET /api/projects"""

    def test_list_projects_empty(self, client, db_session):
        response = client.get('/api/projects')

        assert response.status_code == 200
        assert response.json == []

    def test_list_projects_with_data(self, client, test_project):
        response = client.get('/api/projects')

        assert response.status_code == 200
        assert [project['id'] for project in response.json] == [test_project['id']]

    def test_list_projects_storage_error(self, client, service, db_session, monkeypatch):
        def broken():
            raise RuntimeError('connection refused')

        monkeypatch.setattr(service, 'get_projects', broken)

        response = client.get('/api/projects')

        assert response.status_code == 500
        assert response.json == {'error': 'Failed to fetch projects'}


class TestCreateProject:
    """Tests for POST /api/projects"""

    def test_create_project_success(self, client, db_session):
        data = {
            'title': fake.sentence(nb_words=4),
            'description': fake.paragraph(),
            'rootLanguage': 'ara',
            'translationLanguages': ['eng'],
        }

        response = client.post('/api/projects', json=data)

        assert response.status_code == 201
        assert response.json['rootLanguage'] == 'ara'
        assert response.json['translationLanguages'] == ['eng']
        assert response.json['pageGroups'] == []

    @pytest.mark.parametrize('missing', ['title', 'rootLanguage', 'translationLanguages'])
    def test_create_project_missing_fields(self, client, db_session, missing):
        data = {'title': 'Diwan', 'rootLanguage': 'ara', 'translationLanguages': ['eng']}
        del data[missing]

        response = client.post('/api/projects', json=data)

        assert response.status_code == 400
        assert 'error' in response.json

    @pytest.mark.parametrize('field, value', [('title', 5), ('rootLanguage', ['ara'])])
    def test_create_project_non_string_fields(self, client, db_session, field, value):
        data = {'title': 'Diwan', 'rootLanguage': 'ara', 'translationLanguages': ['eng']}
        data[field] = value

        response = client.post('/api/projects', json=data)

        assert response.status_code == 400
        assert 'error' in response.json

    def test_create_project_root_in_translations(self, client, db_session):
        response = client.post('/api/projects', json={
            'title': 'Diwan', 'rootLanguage': 'ara', 'translationLanguages': ['ara', 'eng'],
        })

        assert response.status_code == 400


class TestGetProject:
    """Tests for GET /api/projects/:id"""

    def test_get_project_with_pages(self, client, test_project, linked_page_group):
        response = client.get(f'/api/projects/{test_project["id"]}')

        assert response.status_code == 200
        assert response.json['project']['id'] == test_project['id']
        pages = response.json['pagesByLanguage']
        assert [page['id'] for page in pages['eng']] == [linked_page_group['id']]
        assert [page['id'] for page in pages['spa']] == [f'{linked_page_group["id"]}_spa']

    def test_get_project_linked_view(self, client, test_project, linked_page_group):
        response = client.get(f'/api/projects/{test_project["id"]}/linked')

        assert response.status_code == 200
        entry = response.json['linkedPageGroups'][0]
        assert entry['rootPage']['id'] == linked_page_group['id']
        assert 'spa' in entry['translations']

    def test_get_project_not_found(self, client, db_session):
        response = client.get('/api/projects/project-0-missing')

        assert response.status_code == 404
        assert response.json == {'error': 'Project not found'}


class TestUpdateProject:
    """Tests for PUT /api/projects/:id"""

    def test_update_project_success(self, client, test_project):
        response = client.put(f'/api/projects/{test_project["id"]}', json={
            'title': 'Updated title',
            'status': 'archived',
        })

        assert response.status_code == 200
        assert response.json['title'] == 'Updated title'
        assert response.json['status'] == 'archived'
        assert response.json['translationLanguages'] == test_project['translationLanguages']

    def test_update_project_non_string_title(self, client, test_project):
        response = client.put(f'/api/projects/{test_project["id"]}', json={'title': 5})

        assert response.status_code == 400
        assert 'error' in response.json

    def test_update_project_invalid_status(self, client, test_project):
        response = client.put(f'/api/projects/{test_project["id"]}', json={'status': 'gone'})

        assert response.status_code == 400

    def test_update_project_not_found(self, client, db_session):
        response = client.put('/api/projects/project-0-missing', json={'title': 'x'})

        assert response.status_code == 404


class TestDeleteProject:
    """Tests for DELETE /api/projects/:id"""

    def test_delete_project_success(self, client, test_project, linked_page_group):
        response = client.delete(f'/api/projects/{test_project["id"]}')

        assert response.status_code == 200
        assert response.json == {'success': True}
        assert client.get(f'/api/projects/{test_project["id"]}').status_code == 404
        assert client.get(f'/api/page-groups/{linked_page_group["id"]}').status_code == 404

    def test_delete_project_not_found(self, client, db_session):
        response = client.delete('/api/projects/project-0-missing')

        assert response.status_code == 404


class TestProjectPages:
    """Tests for POST/DELETE /api/projects/:id/pages"""

    def test_add_page(self, client, test_project, test_page_group):
        response = client.post(f'/api/projects/{test_project["id"]}/pages', json={
            'pageId': test_page_group['id'],
            'language': 'eng',
        })

        assert response.status_code == 200
        assert response.json == {'success': True}
        project = client.get(f'/api/projects/{test_project["id"]}').json['project']
        assert project['pageGroups'] == [test_page_group['id']]

    def test_add_page_missing_page_id(self, client, test_project):
        response = client.post(f'/api/projects/{test_project["id"]}/pages', json={})

        assert response.status_code == 400

    def test_add_unknown_page(self, client, test_project):
        response = client.post(f'/api/projects/{test_project["id"]}/pages', json={
            'pageId': 'pagegroup-0-missing',
        })

        assert response.status_code == 400
        assert response.json['success'] is False

    def test_remove_page(self, client, test_project, linked_page_group):
        response = client.delete(f'/api/projects/{test_project["id"]}/pages', json={
            'pageId': f'{linked_page_group["id"]}_spa',
        })

        assert response.status_code == 200
        project = client.get(f'/api/projects/{test_project["id"]}').json['project']
        assert project['pageGroups'] == []

    def test_remove_unknown_page(self, client, test_project):
        response = client.delete(f'/api/projects/{test_project["id"]}/pages', json={
            'pageId': 'pagegroup-0-unknown',
        })

        assert response.status_code == 400
        assert response.json['success'] is False
