"""PageGroup model: one root text plus its per-language translations."""

from datetime import datetime
from folio import db


PAGE_GROUP_STATUSES = ('draft', 'approved', 'needs_review', 'processing', 'completed')


class PageGroup(db.Model):
    """The unit of translation."""

    __tablename__ = 'page_groups'

    id = db.Column(db.String(255), primary_key=True)
    title = db.Column(db.String(500), nullable=False)
    file_name = db.Column(db.String(255), nullable=False)
    root_language = db.Column(db.String(10), nullable=False)
    root_text = db.Column(db.Text, nullable=False, default='')
    translations = db.Column(db.JSON, nullable=False, default=dict)  # language code -> text
    image_url = db.Column(db.Text, nullable=True)
    image_blob_id = db.Column(db.String(255), nullable=True)
    status = db.Column(db.String(50), default='draft', nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    links = db.relationship(
        'ProjectPageGroup',
        backref='page_group',
        cascade='all, delete-orphan'
    )

    def to_dict(self):
        """Convert page group to its API dictionary."""
        return {
            'id': self.id,
            'title': self.title,
            'fileName': self.file_name,
            'rootLanguage': self.root_language,
            'rootText': self.root_text,
            'translations': dict(self.translations or {}),
            'imageUrl': self.image_url,
            'imageBlobId': self.image_blob_id,
            'status': self.status,
            'createdAt': self.created_at.isoformat(),
            'updatedAt': self.updated_at.isoformat(),
        }

    def __repr__(self):
        return f'<PageGroup {self.id}: {self.title}>'
