"""Data-access layer for projects and page groups.

ProjectService owns every read and write to the database and the image
store. It returns plain dicts (the API shapes) and keeps one read-through
cache per entity kind. Cache entries are filled on read and on create and
invalidated on every write to the same id.

Storage errors propagate to the caller; the route handler is the only place
they are turned into HTTP responses. Image upload and image delete failures
are logged and do not fail the operation.
"""

import logging
import re
import time
from datetime import datetime
from uuid import uuid4

from flask import current_app
from sqlalchemy import text
from sqlalchemy.orm import selectinload

from folio import db
from folio.models import Project, PageGroup, ProjectPageGroup
from folio.models.project import PROJECT_STATUSES
from folio.models.page_group import PAGE_GROUP_STATUSES
from folio.services.cache import MemoryCache
from folio.services.page_refs import (
    RootPageRef,
    TranslationRef,
    parse_page_ref,
    translation_page_id,
)
from folio.services.storage import SupabaseImageStore

logger = logging.getLogger(__name__)


class ValidationError(ValueError):
    """Input rejected at the data-access boundary."""


def slugify(value: str) -> str:
    slug = re.sub(r'[^a-z0-9]+', '-', (value or '').lower().strip())
    return slug.strip('-') or 'untitled'


def now_ms() -> int:
    return int(time.time() * 1000)


def generate_id(prefix: str) -> str:
    """Time + random id. Never contains '_' (see page_refs)."""
    return f'{prefix}-{now_ms()}-{uuid4().hex[:9]}'


def _unique(values):
    seen = []
    for value in values:
        if value not in seen:
            seen.append(value)
    return seen


def _check_translations(translations):
    if not isinstance(translations, dict):
        raise ValidationError('translations must be an object of language -> text')
    for language, value in translations.items():
        if not language or not isinstance(value, str):
            raise ValidationError('translations must map language codes to text')


def _check_text_fields(data, *fields):
    for field in fields:
        value = data.get(field)
        if value is not None and not isinstance(value, str):
            raise ValidationError(f'{field} must be a string')


def _check_languages(root_language, translation_languages):
    if not isinstance(translation_languages, list) or not all(
        isinstance(code, str) and code for code in translation_languages
    ):
        raise ValidationError('translationLanguages must be a list of language codes')
    if root_language in translation_languages:
        raise ValidationError('rootLanguage must not be one of the translationLanguages')


def root_page(page_group: dict) -> dict:
    """Legacy page view of a page group's root text."""
    return {
        'id': page_group['id'],
        'fileName': page_group['fileName'],
        'title': page_group['title'],
        'originalText': page_group['rootText'],
        'editedText': page_group['rootText'],
        'language': page_group['rootLanguage'],
        'status': page_group['status'],
        'imageUrl': page_group.get('imageUrl'),
        'translationPages': [
            translation_page_id(page_group['id'], language)
            for language in page_group['translations']
        ],
        'createdAt': page_group['createdAt'],
        'updatedAt': page_group['updatedAt'],
    }


def translation_page(page_group: dict, language: str) -> dict:
    """Legacy page view of one translation of a page group."""
    text_value = page_group['translations'][language]
    return {
        'id': translation_page_id(page_group['id'], language),
        'fileName': f"{page_group['fileName']}_{language}",
        'title': f"{page_group['title']} ({language})",
        'originalText': text_value,
        'editedText': text_value,
        'language': language,
        'status': page_group['status'],
        'rootPageId': page_group['id'],
        'createdAt': page_group['createdAt'],
        'updatedAt': page_group['updatedAt'],
    }


class ProjectService:
    """Projects, page groups and the links between them."""

    def __init__(self, project_cache=None, page_group_cache=None, storage=None):
        self.storage = storage if storage is not None else SupabaseImageStore()
        self.project_cache = project_cache if project_cache is not None else MemoryCache()
        self.page_group_cache = page_group_cache if page_group_cache is not None else MemoryCache()
        self._initialized = False

    # ------------------------------------------------------------------
    # Bootstrap
    # ------------------------------------------------------------------

    def initialize(self):
        """Create tables if they don't exist and check the connection."""
        if self._initialized:
            return

        db.create_all()
        db.session.execute(text('SELECT 1'))
        self._initialized = True
        logger.info('Project service initialized')

    def _commit(self):
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------

    def create_project(self, data: dict) -> dict:
        _check_text_fields(data, 'title', 'rootLanguage', 'fileName', 'description')
        title = (data.get('title') or '').strip()
        root_language = data.get('rootLanguage')
        translation_languages = data.get('translationLanguages') or []

        if not title or not root_language or not translation_languages:
            raise ValidationError('title, rootLanguage and at least one translation language are required')

        _check_languages(root_language, translation_languages)
        translation_languages = _unique(translation_languages)

        requested_file_name = (data.get('fileName') or '').strip()
        if requested_file_name:
            file_name = slugify(requested_file_name)
            if Project.query.filter_by(file_name=file_name).first() is not None:
                raise ValidationError(f'fileName "{file_name}" is already used by another project')
        else:
            file_name = f'{slugify(title)}-{now_ms()}'

        now = datetime.utcnow()
        project = Project(
            id=generate_id('project'),
            title=title,
            description=data.get('description') or '',
            file_name=file_name,
            root_language=root_language,
            translation_languages=translation_languages,
            status='active',
            created_at=now,
            updated_at=now,
        )
        db.session.add(project)
        self._commit()

        result = project.to_dict()
        self.project_cache.put(project.id, result)
        logger.info(f'Project saved to database: {project.id}')
        return result

    def get_projects(self) -> list:
        projects = (
            Project.query
            .options(selectinload(Project.links))
            .order_by(Project.created_at.desc(), Project.id.desc())
            .all()
        )
        result = [project.to_dict() for project in projects]

        for project in result:
            self.project_cache.put(project['id'], project)

        logger.debug(f'Returning {len(result)} projects from database')
        return result

    def get_project(self, project_id: str):
        cached = self.project_cache.get(project_id)
        if cached is not None:
            return cached

        project = db.session.get(Project, project_id)
        if project is None:
            logger.info(f'Project {project_id} not found')
            return None

        result = project.to_dict()
        self.project_cache.put(project_id, result)
        return result

    def update_project(self, project_id: str, data: dict):
        """Partial update. Fields that are absent or None keep their value."""
        project = db.session.get(Project, project_id)
        if project is None:
            return None

        _check_text_fields(data, 'title', 'rootLanguage', 'description')
        title = data.get('title')
        if title is not None and not str(title).strip():
            raise ValidationError('title must not be empty')
        status = data.get('status')
        if status is not None and status not in PROJECT_STATUSES:
            raise ValidationError(f"status must be one of {', '.join(PROJECT_STATUSES)}")

        root_language = data.get('rootLanguage') or project.root_language
        translation_languages = data.get('translationLanguages')
        if translation_languages is None:
            translation_languages = list(project.translation_languages or [])
        elif not translation_languages:
            raise ValidationError('at least one translation language is required')
        _check_languages(root_language, translation_languages)

        if title is not None:
            project.title = str(title).strip()
        if data.get('description') is not None:
            project.description = data['description']
        if status is not None:
            project.status = status
        project.root_language = root_language
        project.translation_languages = _unique(translation_languages)
        project.updated_at = datetime.utcnow()
        self._commit()

        self.project_cache.invalidate(project_id)
        return self.get_project(project_id)

    def delete_project(self, project_id: str) -> bool:
        """Delete a project together with its page groups and their images.

        Rows go in a single transaction; images are removed afterwards and a
        failed image delete only leaves an orphaned blob behind.
        """
        project = db.session.get(Project, project_id)
        if project is None:
            return False

        page_groups = [link.page_group for link in project.links]
        page_group_ids = [pg.id for pg in page_groups]
        images = [(pg.id, pg.image_blob_id) for pg in page_groups if pg.image_blob_id]
        affected_projects = {
            link.project_id for pg in page_groups for link in pg.links
        }

        for page_group in page_groups:
            db.session.delete(page_group)
        db.session.delete(project)
        self._commit()

        for page_group_id in page_group_ids:
            self.page_group_cache.invalidate(page_group_id)
        for other_id in affected_projects | {project_id}:
            self.project_cache.invalidate(other_id)

        for page_group_id, blob_id in images:
            self._delete_image(page_group_id, blob_id)

        logger.info(f'Project {project_id} deleted with {len(page_group_ids)} page groups')
        return True

    # ------------------------------------------------------------------
    # Page groups
    # ------------------------------------------------------------------

    def create_page_group(self, data: dict, image=None) -> dict:
        root_language = data.get('rootLanguage')
        if not root_language:
            raise ValidationError('rootLanguage is required')

        title = data.get('title') or data.get('fileName') or 'Untitled'
        file_name = data.get('fileName') or slugify(title)
        translations = data.get('translations') or {}
        _check_translations(translations)
        status = data.get('status') or 'draft'
        if status not in PAGE_GROUP_STATUSES:
            raise ValidationError(f"status must be one of {', '.join(PAGE_GROUP_STATUSES)}")

        image_url, image_blob_id = None, None
        if image is not None:
            image_url, image_blob_id = self._upload_image(file_name, image)

        now = datetime.utcnow()
        page_group_id = generate_id('pagegroup')
        page_group = PageGroup(
            id=page_group_id,
            title=title,
            file_name=file_name,
            root_language=root_language,
            root_text=data.get('rootText') or '',
            translations=dict(translations),
            image_url=image_url,
            image_blob_id=image_blob_id,
            status=status,
            created_at=now,
            updated_at=now,
        )
        db.session.add(page_group)
        try:
            self._commit()
        except Exception:
            # Don't leave the uploaded image behind without a row pointing at it
            if image_blob_id:
                self._delete_image(page_group_id, image_blob_id)
            raise

        result = page_group.to_dict()
        self.page_group_cache.put(page_group_id, result)
        logger.info(f'Page group saved to database: {page_group_id}')
        return result

    def create_page(self, data: dict, image=None) -> dict:
        """Create a page group from legacy page input and return it as a page."""
        if not data.get('language'):
            raise ValidationError('language is required')

        page_group = self.create_page_group({
            'title': data.get('title') or data.get('fileName') or 'Untitled',
            'fileName': data.get('fileName') or slugify(data.get('title') or 'untitled'),
            'rootLanguage': data['language'],
            'rootText': data.get('editedText') or '',
            'translations': {},
            'status': data.get('status') or 'approved',
        }, image=image)
        return root_page(page_group)

    def load_page_group(self, page_group_id: str):
        cached = self.page_group_cache.get(page_group_id)
        if cached is not None:
            return cached

        page_group = db.session.get(PageGroup, page_group_id)
        if page_group is None:
            return None

        result = page_group.to_dict()
        self.page_group_cache.put(page_group_id, result)
        return result

    # Name kept from the blob-backed storage era
    load_page_group_from_blob = load_page_group

    def get_page_groups(self) -> list:
        page_groups = PageGroup.query.order_by(PageGroup.created_at.desc(), PageGroup.id.desc()).all()
        return [page_group.to_dict() for page_group in page_groups]

    def update_page_group(self, page_group_id: str, data: dict):
        """Partial update of title, rootText, translations and status.

        translations replaces the whole mapping when given.
        """
        page_group = db.session.get(PageGroup, page_group_id)
        if page_group is None:
            return None

        if data.get('translations') is not None:
            _check_translations(data['translations'])
        if data.get('status') is not None and data['status'] not in PAGE_GROUP_STATUSES:
            raise ValidationError(f"status must be one of {', '.join(PAGE_GROUP_STATUSES)}")

        if data.get('title') is not None:
            page_group.title = data['title']
        if data.get('rootText') is not None:
            page_group.root_text = data['rootText']
        if data.get('translations') is not None:
            page_group.translations = dict(data['translations'])
        if data.get('status') is not None:
            page_group.status = data['status']

        page_group.updated_at = datetime.utcnow()
        self._commit()

        self.page_group_cache.invalidate(page_group_id)
        return self.load_page_group(page_group_id)

    def update_page_group_title(self, page_group_id: str, title: str):
        return self.update_page_group(page_group_id, {'title': title})

    def update_page_group_root_text(self, page_group_id: str, root_text: str):
        return self.update_page_group(page_group_id, {'rootText': root_text})

    def delete_page_group(self, page_group_id: str) -> bool:
        page_group = db.session.get(PageGroup, page_group_id)
        if page_group is None:
            return False

        blob_id = page_group.image_blob_id
        project_ids = [link.project_id for link in page_group.links]

        db.session.delete(page_group)
        self._commit()

        self.page_group_cache.invalidate(page_group_id)
        for project_id in project_ids:
            self.project_cache.invalidate(project_id)

        if blob_id:
            self._delete_image(page_group_id, blob_id)

        logger.info(f'Page group {page_group_id} deleted')
        return True

    def add_translation_to_page_group(self, page_group_id: str, language: str, translation_text: str):
        """Insert or overwrite one translation. None if the group is missing."""
        if not language:
            raise ValidationError('language is required')
        if not isinstance(translation_text, str):
            raise ValidationError('text must be a string')

        page_group = self.load_page_group(page_group_id)
        if page_group is None:
            return None

        translations = dict(page_group['translations'])
        translations[language] = translation_text
        logger.info(f'Setting {language} translation on page group {page_group_id} ({len(translation_text)} chars)')
        return self.update_page_group(page_group_id, {'translations': translations})

    def remove_translation_from_page_group(self, page_group_id: str, language: str):
        """Drop one translation. None if the group or the translation is missing."""
        page_group = self.load_page_group(page_group_id)
        if page_group is None or language not in page_group['translations']:
            return None

        translations = dict(page_group['translations'])
        del translations[language]
        return self.update_page_group(page_group_id, {'translations': translations})

    def _upload_image(self, file_name, image):
        """Upload a page image; (None, None) when it could not be stored.

        `image` is a folio.utils.images.UploadedImage.
        """
        try:
            image_url, blob_id, error = self.storage.upload_page_image(
                image.data,
                file_name,
                image.filename or '',
                image.content_type or 'image/jpeg',
            )
        except Exception as e:
            logger.error(f'Failed to upload image for {file_name}: {e}')
            return None, None

        if error:
            logger.warning(f'Image upload for {file_name} failed, continuing without image: {error}')
            return None, None
        return image_url, blob_id

    def _delete_image(self, page_group_id, blob_id):
        try:
            deleted, error = self.storage.delete_page_image(blob_id)
        except Exception as e:
            deleted, error = False, str(e)

        if not deleted:
            logger.error(f'Failed to delete image for page group {page_group_id}: {error}')

    # ------------------------------------------------------------------
    # Linking
    # ------------------------------------------------------------------

    def add_page_group_to_project(self, project_id: str, page_group_id: str) -> bool:
        project = db.session.get(Project, project_id)
        page_group = db.session.get(PageGroup, page_group_id)
        if project is None or page_group is None:
            logger.warning(f'Cannot link page group {page_group_id} to project {project_id}: not found')
            return False

        if db.session.get(ProjectPageGroup, (project_id, page_group_id)) is None:
            db.session.add(ProjectPageGroup(project_id=project_id, page_group_id=page_group_id))

        project.updated_at = datetime.utcnow()
        self._commit()

        self.project_cache.invalidate(project_id)
        logger.info(f'Added page group {page_group_id} to project {project_id}')
        return True

    def remove_page_group_from_project(self, project_id: str, page_group_id: str) -> bool:
        project = db.session.get(Project, project_id)
        link = db.session.get(ProjectPageGroup, (project_id, page_group_id))
        if project is None or link is None:
            logger.warning(f'Page group {page_group_id} is not linked to project {project_id}')
            return False

        db.session.delete(link)
        project.updated_at = datetime.utcnow()
        self._commit()

        self.project_cache.invalidate(project_id)
        logger.info(f'Removed page group {page_group_id} from project {project_id}')
        return True

    def add_page_to_project(self, project_id: str, page_id: str, language=None) -> bool:
        """Legacy alias. Any page of a group links the whole group."""
        return self.add_page_group_to_project(project_id, parse_page_ref(page_id).page_group_id)

    def remove_page_from_project(self, project_id: str, page_id: str, language=None) -> bool:
        """Legacy alias of remove_page_group_from_project."""
        return self.remove_page_group_from_project(project_id, parse_page_ref(page_id).page_group_id)

    def _project_ids_for(self, page_group_id):
        links = ProjectPageGroup.query.filter_by(page_group_id=page_group_id).all()
        return [link.project_id for link in links]

    def link_translation_page(self, root_page_id: str, translation_page_id: str) -> bool:
        """Merge a page into the root page's group as a translation.

        The translation page is either a standalone page (the root page of
        another group without translations of its own) or a translation of
        another group. Its text moves into the root group under its language
        and the source is removed.
        """
        root_ref = parse_page_ref(root_page_id)
        if not isinstance(root_ref, RootPageRef):
            return False
        root = self.load_page_group(root_ref.page_group_id)
        if root is None:
            return False

        ref = parse_page_ref(translation_page_id)
        if ref.page_group_id == root['id']:
            # Already part of this group
            return isinstance(ref, TranslationRef) and ref.language in root['translations']

        source = self.load_page_group(ref.page_group_id)
        if source is None:
            return False

        if isinstance(ref, TranslationRef):
            if ref.language not in source['translations'] or ref.language == root['rootLanguage']:
                return False
            if ref.language in root['translations']:
                return False
            self.add_translation_to_page_group(root['id'], ref.language, source['translations'][ref.language])
            self.remove_translation_from_page_group(source['id'], ref.language)
            return True

        if source['translations'] or source['rootLanguage'] == root['rootLanguage']:
            return False
        # Never overwrite a translation the root group already has
        if source['rootLanguage'] in root['translations']:
            return False
        self.add_translation_to_page_group(root['id'], source['rootLanguage'], source['rootText'])
        self.delete_page_group(source['id'])
        return True

    def unlink_translation_page(self, root_page_id: str, translation_page_id: str) -> bool:
        """Split a translation out of its group into a standalone page group.

        The new group joins every project the root group belongs to.
        """
        root_ref = parse_page_ref(root_page_id)
        ref = parse_page_ref(translation_page_id)
        if not isinstance(root_ref, RootPageRef) or not isinstance(ref, TranslationRef):
            return False
        if ref.page_group_id != root_ref.page_group_id:
            return False

        root = self.load_page_group(root_ref.page_group_id)
        if root is None or ref.language not in root['translations']:
            return False

        standalone = self.create_page_group({
            'title': f"{root['title']} ({ref.language})",
            'fileName': f"{root['fileName']}_{ref.language}",
            'rootLanguage': ref.language,
            'rootText': root['translations'][ref.language],
            'status': root['status'],
        })
        for project_id in self._project_ids_for(root['id']):
            self.add_page_group_to_project(project_id, standalone['id'])

        self.remove_translation_from_page_group(root['id'], ref.language)
        return True

    # ------------------------------------------------------------------
    # Aggregates and the legacy page view
    # ------------------------------------------------------------------

    def _linked_page_groups(self, project):
        for page_group_id in project['pageGroups']:
            page_group = self.load_page_group(page_group_id)
            if page_group is not None:
                yield page_group

    def get_project_with_pages(self, project_id: str):
        """Project plus its pages bucketed by language code."""
        project = self.get_project(project_id)
        if project is None:
            return None

        pages_by_language = {}
        for page_group in self._linked_page_groups(project):
            pages_by_language.setdefault(page_group['rootLanguage'], []).append(root_page(page_group))
            for language in page_group['translations']:
                pages_by_language.setdefault(language, []).append(translation_page(page_group, language))

        return {'project': project, 'pagesByLanguage': pages_by_language}

    def get_project_with_linked_pages(self, project_id: str):
        """Project plus one (root page, translations by language) entry per group."""
        project = self.get_project(project_id)
        if project is None:
            return None

        linked_page_groups = [
            {
                'rootPage': root_page(page_group),
                'translations': {
                    language: translation_page(page_group, language)
                    for language in page_group['translations']
                },
            }
            for page_group in self._linked_page_groups(project)
        ]
        return {'project': project, 'linkedPageGroups': linked_page_groups}

    def get_pages(self) -> list:
        pages = []
        for page_group in self.get_page_groups():
            pages.append(root_page(page_group))
            for language in page_group['translations']:
                pages.append(translation_page(page_group, language))
        return pages

    def get_pages_by_language(self, language: str) -> list:
        return [page for page in self.get_pages() if page['language'] == language]

    def load_page(self, page_id: str):
        ref = parse_page_ref(page_id)
        page_group = self.load_page_group(ref.page_group_id)
        if page_group is None:
            return None

        if isinstance(ref, TranslationRef):
            if ref.language not in page_group['translations']:
                return None
            return translation_page(page_group, ref.language)
        return root_page(page_group)

    load_page_from_blob = load_page

    def update_page(self, page_id: str, data: dict):
        ref = parse_page_ref(page_id)

        if isinstance(ref, TranslationRef):
            if self.load_page_group(ref.page_group_id) is None:
                return None
            if data.get('editedText') is not None:
                self.add_translation_to_page_group(ref.page_group_id, ref.language, data['editedText'])
            return self.load_page(page_id)

        updated = self.update_page_group(ref.page_group_id, {
            'title': data.get('title'),
            'rootText': data.get('editedText'),
            'status': data.get('status'),
        })
        if updated is None:
            return None
        return root_page(updated)

    def delete_page(self, page_id: str) -> bool:
        ref = parse_page_ref(page_id)

        if isinstance(ref, TranslationRef):
            return self.remove_translation_from_page_group(ref.page_group_id, ref.language) is not None
        return self.delete_page_group(ref.page_group_id)

    # ------------------------------------------------------------------
    # Data management
    # ------------------------------------------------------------------

    def initialize_from_sample_data(self) -> bool:
        """Seed one sample project unless the database already has projects."""
        self.initialize()

        if Project.query.count() > 0:
            logger.info('Database already contains data, skipping sample data')
            return False

        project = self.create_project({
            'title': 'Sample OCR Project',
            'description': 'A sample project for testing OCR and translation features',
            'fileName': 'sample-project',
            'rootLanguage': 'eng',
            'translationLanguages': ['ara', 'fra', 'spa'],
        })
        page_group = self.create_page_group({
            'title': 'Sample Document',
            'fileName': 'sample-document',
            'rootLanguage': 'eng',
            'rootText': (
                'This is a sample document for testing OCR and translation features. '
                'It contains some text that can be translated into multiple languages.'
            ),
            'translations': {
                'ara': 'هذه وثيقة عينة لاختبار ميزات التعرف الضوئي على الحروف والترجمة. '
                       'تحتوي على بعض النصوص التي يمكن ترجمتها إلى لغات متعددة.',
                'fra': "Ceci est un document d'exemple pour tester les fonctionnalités OCR et de traduction. "
                       'Il contient du texte qui peut être traduit en plusieurs langues.',
                'spa': 'Este es un documento de muestra para probar las funciones de OCR y traducción. '
                       'Contiene texto que se puede traducir a varios idiomas.',
            },
            'status': 'approved',
        })
        self.add_page_group_to_project(project['id'], page_group['id'])

        logger.info('Sample data initialized successfully')
        return True

    def clear_all_data(self):
        """Delete every row and image and empty both caches."""
        self.initialize()

        blob_ids = [
            (page_group_id, blob_id)
            for page_group_id, blob_id in db.session.query(PageGroup.id, PageGroup.image_blob_id)
            if blob_id
        ]

        ProjectPageGroup.query.delete()
        PageGroup.query.delete()
        Project.query.delete()
        self._commit()

        self.project_cache.clear()
        self.page_group_cache.clear()

        for page_group_id, blob_id in blob_ids:
            self._delete_image(page_group_id, blob_id)

        logger.info('All data cleared from database')

    def count_rows(self) -> dict:
        return {
            'projectCount': Project.query.count(),
            'pageGroupCount': PageGroup.query.count(),
        }


def get_project_service() -> ProjectService:
    """The ProjectService attached to the running app."""
    return current_app.extensions['project_service']
