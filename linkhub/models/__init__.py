"""Models package - exports all SQLAlchemy models."""
# Workspace core
from linkhub.models.project import Project, CONVERSION_RESTRICTED_PLANS
from linkhub.models.user import User, ProjectUsers, WorkspaceRole
from linkhub.models.domain import Domain
from linkhub.models.folder import Folder, FolderUser, FolderAccessLevel, FolderUserRole
from linkhub.models.year_in_review import YearInReview

# Partner programs
from linkhub.models.program import Program, Partner, Discount, ProgramEnrollment

__all__ = [
    # Workspace core
    'Project', 'CONVERSION_RESTRICTED_PLANS',
    'User', 'ProjectUsers', 'WorkspaceRole',
    'Domain', 'Folder', 'FolderUser', 'FolderAccessLevel', 'FolderUserRole',
    'YearInReview',
    # Partner programs
    'Program', 'Partner', 'Discount', 'ProgramEnrollment',
]
