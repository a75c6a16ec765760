"""Folder models - link folders and per-user folder roles."""
import enum
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from linkhub.database import Base
from linkhub.utils.ids import create_id


class FolderAccessLevel(enum.Enum):
    """Workspace-wide access granted to members without an explicit folder role."""
    READ = 'read'
    WRITE = 'write'


class FolderUserRole(enum.Enum):
    OWNER = 'owner'
    EDITOR = 'editor'
    VIEWER = 'viewer'


class Folder(Base):
    __tablename__ = 'folder'

    id = Column(String(40), primary_key=True, default=lambda: create_id('fold_'))
    name = Column(String(190), nullable=False)
    project_id = Column(String(40), ForeignKey('project.id', ondelete='CASCADE'), nullable=False)
    access_level = Column(String(20), nullable=True)  # None means private
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    project = relationship('Project', back_populates='folders')
    users = relationship('FolderUser', back_populates='folder', cascade='all, delete-orphan')

    __table_args__ = (
        UniqueConstraint('name', 'project_id', name='uq_folder_name_project'),
    )

    def __repr__(self):
        return f"<Folder(id={self.id}, name='{self.name}', access_level={self.access_level})>"


class FolderUser(Base):
    __tablename__ = 'folder_user'

    id = Column(String(40), primary_key=True, default=create_id)
    folder_id = Column(String(40), ForeignKey('folder.id', ondelete='CASCADE'), nullable=False)
    user_id = Column(String(40), ForeignKey('app_user.id', ondelete='CASCADE'), nullable=False)
    role = Column(String(20), nullable=False, default=FolderUserRole.VIEWER.value)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    folder = relationship('Folder', back_populates='users')

    __table_args__ = (
        UniqueConstraint('folder_id', 'user_id', name='uq_folder_user'),
    )
