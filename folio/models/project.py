"""Project model and its link table to page groups."""

from datetime import datetime
from folio import db


PROJECT_STATUSES = ('active', 'completed', 'archived')


class ProjectPageGroup(db.Model):
    """Membership of a page group in a project."""

    __tablename__ = 'project_page_groups'

    project_id = db.Column(
        db.String(255),
        db.ForeignKey('projects.id', ondelete='CASCADE'),
        primary_key=True
    )
    page_group_id = db.Column(
        db.String(255),
        db.ForeignKey('page_groups.id', ondelete='CASCADE'),
        primary_key=True,
        index=True
    )
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f'<ProjectPageGroup {self.project_id} -> {self.page_group_id}>'


class Project(db.Model):
    """A long-lived container of page groups with one root language."""

    __tablename__ = 'projects'

    id = db.Column(db.String(255), primary_key=True)
    title = db.Column(db.String(500), nullable=False)
    description = db.Column(db.Text, nullable=True)
    file_name = db.Column(db.String(255), nullable=False, index=True)
    root_language = db.Column(db.String(10), nullable=False)
    translation_languages = db.Column(db.JSON, nullable=False, default=list)  # Array of language codes
    status = db.Column(db.String(50), default='active', nullable=False)  # 'active', 'completed', 'archived'
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    links = db.relationship(
        'ProjectPageGroup',
        backref='project',
        order_by=(ProjectPageGroup.created_at, ProjectPageGroup.page_group_id),
        cascade='all, delete-orphan'
    )

    @property
    def page_group_ids(self):
        return [link.page_group_id for link in self.links]

    def to_dict(self):
        """Convert project to its API dictionary."""
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description or '',
            'fileName': self.file_name,
            'rootLanguage': self.root_language,
            'translationLanguages': list(self.translation_languages or []),
            'pageGroups': self.page_group_ids,
            'createdAt': self.created_at.isoformat(),
            'updatedAt': self.updated_at.isoformat(),
            'status': self.status,
        }

    def __repr__(self):
        return f'<Project {self.id}: {self.title}>'
