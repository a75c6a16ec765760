"""
Unit tests for SQLAlchemy models.
"""

import pytest
import uuid
from sqlalchemy.exc import IntegrityError

from linkhub.models import Project, ProjectUsers, Domain, Folder, Program, Discount, ProgramEnrollment


class TestProjectModel:
    """Tests for Project model."""

    def test_create_project_defaults(self, session):
        suffix = str(uuid.uuid4())[:8]
        project = Project(name='Acme', slug=f'acme-{suffix}')
        session.add(project)
        session.commit()

        assert project.id.startswith('c')
        assert project.plan == 'free'
        assert project.conversion_enabled is False
        assert project.default_folder_id is None
        assert len(project.invite_code) == 24
        assert project.can_enable_conversions is False

    def test_project_slug_unique(self, session, workspace):
        session.add(Project(name='Duplicate', slug=workspace.slug))

        with pytest.raises(IntegrityError):
            session.commit()

    def test_delete_cascades_to_owned_rows(self, session, make_folder, owner, workspace):
        workspace_id = workspace.id
        session.add(Domain(slug='acme.link', project_id=workspace_id))
        make_folder(workspace)
        session.add(Program(workspace_id=workspace_id, name='Partners'))
        session.commit()

        session.delete(workspace)
        session.commit()

        assert session.query(Domain).count() == 0
        assert session.query(Folder).count() == 0
        assert session.query(Program).count() == 0
        assert session.query(ProjectUsers).filter_by(project_id=workspace_id).count() == 0


class TestProjectUsersModel:

    def test_membership_roles(self, session, owner, member, workspace):
        roles = {
            m.user_id: m.is_owner()
            for m in session.query(ProjectUsers).filter_by(project_id=workspace.id)
        }

        assert roles == {owner.id: True, member.id: False}

    def test_single_membership_per_workspace(self, session, owner, workspace):
        session.add(ProjectUsers(user_id=owner.id, project_id=workspace.id, role='member'))

        with pytest.raises(IntegrityError):
            session.commit()


class TestProgramModels:

    def test_ids_carry_type_prefix(self, program, discount, make_partner):
        partner = make_partner(program, 'Alice')

        assert program.id.startswith('prog_')
        assert discount.id.startswith('disc_')
        assert partner.id.startswith('pn_')

    def test_partner_enrolls_once_per_program(self, session, program, make_partner):
        partner = make_partner(program, 'Alice')
        session.add(ProgramEnrollment(partner_id=partner.id, program_id=program.id))

        with pytest.raises(IntegrityError):
            session.commit()

    def test_program_discounts_relationship(self, session, program, discount):
        assert [d.id for d in session.get(Program, program.id).discounts] == [discount.id]
        assert isinstance(discount, Discount)
