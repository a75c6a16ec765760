"""Domain model - custom short-link domains attached to a workspace."""
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from linkhub.database import Base
from linkhub.utils.ids import create_id


class Domain(Base):
    __tablename__ = 'domain'

    id = Column(String(40), primary_key=True, default=create_id)
    slug = Column(String(190), nullable=False, unique=True)
    verified = Column(Boolean, nullable=False, default=False)
    primary = Column(Boolean, nullable=False, default=False)
    project_id = Column(String(40), ForeignKey('project.id', ondelete='CASCADE'), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    project = relationship('Project', back_populates='domains')

    def __repr__(self):
        return f"<Domain(slug='{self.slug}', primary={self.primary})>"
