"""
Partner program models.

A workspace runs programs; partners enroll into a program and may be attached
to one of the program's discounts.
"""
from sqlalchemy import Column, String, Integer, DateTime, JSON, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from linkhub.database import Base
from linkhub.utils.ids import create_id


class Program(Base):
    __tablename__ = 'program'

    id = Column(String(40), primary_key=True, default=lambda: create_id('prog_'))
    workspace_id = Column(String(40), ForeignKey('project.id', ondelete='CASCADE'), nullable=False)
    name = Column(String(190), nullable=False)
    # List of application form field definitions (see schemas.program_application_form)
    application_form_data = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    workspace = relationship('Project', back_populates='programs')
    enrollments = relationship('ProgramEnrollment', back_populates='program', cascade='all, delete-orphan')
    discounts = relationship('Discount', back_populates='program', cascade='all, delete-orphan')

    def __repr__(self):
        return f"<Program(id={self.id}, name='{self.name}')>"


class Partner(Base):
    __tablename__ = 'partner'

    id = Column(String(40), primary_key=True, default=lambda: create_id('pn_'))
    name = Column(String(190), nullable=False)
    email = Column(String(255), nullable=True, unique=True)
    image = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    enrollments = relationship('ProgramEnrollment', back_populates='partner', cascade='all, delete-orphan')

    def __repr__(self):
        return f"<Partner(id={self.id}, name='{self.name}')>"


class Discount(Base):
    """Discount offered to customers referred by the eligible partners."""

    __tablename__ = 'discount'

    id = Column(String(40), primary_key=True, default=lambda: create_id('disc_'))
    program_id = Column(String(40), ForeignKey('program.id', ondelete='CASCADE'), nullable=False)
    amount = Column(Integer, nullable=False, default=0)
    type = Column(String(20), nullable=False, default='percentage')  # percentage, flat
    max_duration = Column(Integer, nullable=True)  # months; None means lifetime
    coupon_id = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    program = relationship('Program', back_populates='discounts')
    enrollments = relationship('ProgramEnrollment', back_populates='discount')

    def __repr__(self):
        return f"<Discount(id={self.id}, amount={self.amount}, type='{self.type}')>"


class ProgramEnrollment(Base):
    __tablename__ = 'program_enrollment'

    id = Column(String(40), primary_key=True, default=create_id)
    partner_id = Column(String(40), ForeignKey('partner.id', ondelete='CASCADE'), nullable=False)
    program_id = Column(String(40), ForeignKey('program.id', ondelete='CASCADE'), nullable=False)
    discount_id = Column(String(40), ForeignKey('discount.id', ondelete='SET NULL'), nullable=True)
    status = Column(String(20), nullable=False, default='approved')
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    partner = relationship('Partner', back_populates='enrollments')
    program = relationship('Program', back_populates='enrollments')
    discount = relationship('Discount', back_populates='enrollments')

    __table_args__ = (
        UniqueConstraint('partner_id', 'program_id', name='uq_program_enrollment_partner_program'),
    )
