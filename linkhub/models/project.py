"""Project model - a workspace (tenant) owning domains, folders, members and programs."""
from sqlalchemy import Column, String, Integer, Boolean, DateTime, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from linkhub.database import Base
from linkhub.utils.ids import create_id, nanoid


# Plans that cannot enable conversion tracking
CONVERSION_RESTRICTED_PLANS = ('free', 'pro')


class Project(Base):
    """Project model - each workspace. Legacy name kept for the table."""

    __tablename__ = 'project'

    id = Column(String(40), primary_key=True, default=create_id)
    name = Column(String(190), nullable=False)
    slug = Column(String(190), nullable=False, unique=True)  # URL-safe identifier
    logo = Column(String(500), nullable=True)
    invite_code = Column(String(40), nullable=True, unique=True, default=lambda: nanoid(24))
    plan = Column(String(40), nullable=False, default='free')

    conversion_enabled = Column(Boolean, nullable=False, default=False)
    allowed_hostnames = Column(JSON, nullable=True)
    default_folder_id = Column(String(40), nullable=True)

    # Usage and limits
    billing_cycle_start = Column(Integer, nullable=False, default=1)
    usage = Column(Integer, nullable=False, default=0)
    usage_limit = Column(Integer, nullable=False, default=1000)
    links_usage = Column(Integer, nullable=False, default=0)
    links_limit = Column(Integer, nullable=False, default=25)
    domains_limit = Column(Integer, nullable=False, default=3)
    tags_limit = Column(Integer, nullable=False, default=5)
    folders_usage = Column(Integer, nullable=False, default=0)
    folders_limit = Column(Integer, nullable=False, default=0)
    users_limit = Column(Integer, nullable=False, default=1)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    # Relationships
    users = relationship('ProjectUsers', back_populates='project', cascade='all, delete-orphan')
    domains = relationship('Domain', back_populates='project', cascade='all, delete-orphan',
                           order_by='Domain.created_at')
    folders = relationship('Folder', back_populates='project', cascade='all, delete-orphan')
    programs = relationship('Program', back_populates='workspace', cascade='all, delete-orphan')
    year_in_reviews = relationship('YearInReview', back_populates='workspace', cascade='all, delete-orphan')

    def __repr__(self):
        return f"<Project(id={self.id}, slug='{self.slug}', plan='{self.plan}')>"

    @property
    def can_enable_conversions(self):
        return self.plan not in CONVERSION_RESTRICTED_PLANS
