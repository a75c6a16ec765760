"""
Integration tests for the partner listings backing the discount partner picker.
"""

from linkhub.schemas.partners import DICEBEAR_AVATAR_URL


class TestSearchPartners:
    """Tests for GET /api/workspaces/<id_or_slug>/partners."""

    def test_lists_enrolled_partners_by_name(self, authenticated_client, make_partner, program, workspace):
        workspace_id = workspace.id
        make_partner(program, 'Zoe', email='zoe@example.com')
        make_partner(program, 'Alice', email='alice@example.com')

        response = authenticated_client.get(f'/api/workspaces/ws_{workspace_id}/partners')

        assert response.status_code == 200
        assert [p['name'] for p in response.get_json()] == ['Alice', 'Zoe']
        assert response.get_json()[0]['programId'] is None

    def test_partner_in_several_programs_listed_once(self, authenticated_client, session, make_partner,
                                                     program, workspace):
        from linkhub.models import Program, ProgramEnrollment

        workspace_id = workspace.id
        second_program = Program(workspace_id=workspace_id, name='Second')
        session.add(second_program)
        session.commit()
        alice_id = make_partner(program, 'Alice').id
        session.add(ProgramEnrollment(partner_id=alice_id, program_id=second_program.id))
        session.commit()

        response = authenticated_client.get(f'/api/workspaces/ws_{workspace_id}/partners?search=ali')

        assert [p['id'] for p in response.get_json()] == [alice_id]

    def test_scoped_to_program(self, authenticated_client, session, make_partner, program, workspace):
        from linkhub.models import Program

        workspace_id = workspace.id
        program_id = program.id
        other_program = Program(workspace_id=workspace_id, name='Other')
        session.add(other_program)
        session.commit()
        make_partner(program, 'Alice')
        make_partner(other_program, 'Bob')

        response = authenticated_client.get(f'/api/workspaces/ws_{workspace_id}/partners?programId={program_id}')

        partners = response.get_json()
        assert [p['name'] for p in partners] == ['Alice']
        assert partners[0]['programId'] == program_id
        assert partners[0]['status'] == 'approved'

    def test_search_matches_name_or_email(self, authenticated_client, make_partner, program, workspace):
        workspace_id = workspace.id
        make_partner(program, 'Alice', email='alice@example.com')
        make_partner(program, 'Bob', email='bob@shop.io')
        make_partner(program, 'Carol', email='carol@example.com')

        by_name = authenticated_client.get(f'/api/workspaces/ws_{workspace_id}/partners?search=ALI')
        by_email = authenticated_client.get(f'/api/workspaces/ws_{workspace_id}/partners?search=shop.io')

        assert [p['name'] for p in by_name.get_json()] == ['Alice']
        assert [p['name'] for p in by_email.get_json()] == ['Bob']

    def test_pagination(self, authenticated_client, make_partner, program, workspace):
        workspace_id = workspace.id
        for name in ('Ann', 'Ben', 'Cat'):
            make_partner(program, name)

        response = authenticated_client.get(f'/api/workspaces/ws_{workspace_id}/partners?page=2&pageSize=2')

        assert [p['name'] for p in response.get_json()] == ['Cat']

    def test_invalid_page_size(self, authenticated_client, workspace):
        response = authenticated_client.get(f'/api/workspaces/ws_{workspace.id}/partners?pageSize=500')

        assert response.status_code == 422

    def test_partners_of_other_workspaces_are_hidden(self, authenticated_client, session, make_workspace,
                                                     make_partner, program, workspace):
        from linkhub.models import Program

        workspace_id = workspace.id
        other_program = Program(workspace_id=make_workspace().id, name='Other')
        session.add(other_program)
        session.commit()
        make_partner(other_program, 'Mallory')
        make_partner(program, 'Alice')

        response = authenticated_client.get(f'/api/workspaces/ws_{workspace_id}/partners')

        assert [p['name'] for p in response.get_json()] == ['Alice']

    def test_member_can_read(self, login, member, make_partner, program, workspace):
        workspace_id = workspace.id
        make_partner(program, 'Alice')
        client = login(member.id)

        response = client.get(f'/api/workspaces/ws_{workspace_id}/partners')

        assert response.status_code == 200


class TestDiscountPartners:
    """Tests for GET /api/workspaces/<id_or_slug>/discounts/<discount_id>/partners."""

    def test_lists_partners_with_the_discount(self, authenticated_client, make_partner, program, discount,
                                              workspace):
        workspace_id = workspace.id
        discount_id = discount.id
        make_partner(program, 'Alice', discount=discount)
        make_partner(program, 'Bob')

        response = authenticated_client.get(f'/api/workspaces/ws_{workspace_id}/discounts/{discount_id}/partners')

        assert response.status_code == 200
        partners = response.get_json()
        assert [p['name'] for p in partners] == ['Alice']
        assert partners[0]['discountId'] == discount_id

    def test_unknown_discount(self, authenticated_client, workspace):
        response = authenticated_client.get(f'/api/workspaces/ws_{workspace.id}/discounts/disc_missing/partners')

        assert response.status_code == 404
        assert response.get_json()['error']['message'] == 'Discount not found.'

    def test_partner_rows_fall_back_to_generated_avatar(self, authenticated_client, make_partner, program,
                                                        discount, workspace):
        from linkhub.services.partner_selection import DiscountPartnerSelection

        workspace_id = workspace.id
        discount_id = discount.id
        alice_id = make_partner(program, 'Alice', discount=discount).id

        response = authenticated_client.get(f'/api/workspaces/ws_{workspace_id}/discounts/{discount_id}/partners')
        selection = DiscountPartnerSelection([alice_id], discount_partners=response.get_json())

        assert selection.rows() == [
            {'id': alice_id, 'name': 'Alice', 'email': None, 'image': f'{DICEBEAR_AVATAR_URL}Alice'}
        ]
