"""Database models for the folio application."""

from .project import Project, ProjectPageGroup
from .page_group import PageGroup

__all__ = ['Project', 'ProjectPageGroup', 'PageGroup']
