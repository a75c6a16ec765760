"""YearInReview model - yearly usage recap attached to a workspace."""
from sqlalchemy import Column, String, Integer, DateTime, JSON, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from linkhub.database import Base
from linkhub.utils.ids import create_id


class YearInReview(Base):
    __tablename__ = 'year_in_review'

    id = Column(String(40), primary_key=True, default=create_id)
    workspace_id = Column(String(40), ForeignKey('project.id', ondelete='CASCADE'), nullable=False)
    year = Column(Integer, nullable=False)
    total_links = Column(Integer, nullable=False, default=0)
    total_clicks = Column(Integer, nullable=False, default=0)
    top_links = Column(JSON, nullable=True)
    top_countries = Column(JSON, nullable=True)
    sent_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    workspace = relationship('Project', back_populates='year_in_reviews')

    def __repr__(self):
        return f"<YearInReview(workspace_id={self.workspace_id}, year={self.year})>"
