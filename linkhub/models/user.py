"""User model - platform users and their workspace memberships."""
import enum
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from linkhub.database import Base
from linkhub.utils.ids import create_id


class WorkspaceRole(enum.Enum):
    """User roles within a workspace."""
    OWNER = 'owner'
    MEMBER = 'member'


class User(Base):
    """User model - platform users."""

    __tablename__ = 'app_user'

    id = Column(String(40), primary_key=True, default=create_id)
    name = Column(String(200), nullable=True)
    email = Column(String(255), nullable=False, unique=True)
    image = Column(String(500), nullable=True)
    # Slug of the workspace opened after login; follows workspace renames
    default_workspace = Column(String(190), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    # Relationships
    projects = relationship('ProjectUsers', back_populates='user', cascade='all, delete-orphan')

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"


class ProjectUsers(Base):
    """ProjectUsers model - links users to workspaces with roles."""

    __tablename__ = 'project_users'

    id = Column(String(40), primary_key=True, default=create_id)
    role = Column(String(20), nullable=False, default=WorkspaceRole.MEMBER.value)
    user_id = Column(String(40), ForeignKey('app_user.id', ondelete='CASCADE'), nullable=False)
    project_id = Column(String(40), ForeignKey('project.id', ondelete='CASCADE'), nullable=False)
    default_folder_id = Column(String(40), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    # Relationships
    user = relationship('User', back_populates='projects')
    project = relationship('Project', back_populates='users')

    __table_args__ = (
        UniqueConstraint('user_id', 'project_id', name='uq_project_users_user_project'),
    )

    def __repr__(self):
        return f"<ProjectUsers(user_id={self.user_id}, project_id={self.project_id}, role='{self.role}')>"

    def is_owner(self):
        """Check if user is owner of the workspace."""
        return self.role == WorkspaceRole.OWNER.value
