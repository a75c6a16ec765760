"""
Unit tests for the discount eligible-partner selection state.
"""

import pytest

from linkhub.schemas.partners import DICEBEAR_AVATAR_URL
from linkhub.services.partner_selection import DiscountPartnerSelection, SEARCH_DEBOUNCE_SECONDS


ALICE = {'id': 'pn_alice', 'name': 'Alice', 'email': 'alice@example.com', 'image': 'https://img.test/a.png'}
BOB = {'id': 'pn_bob', 'name': 'Bob', 'email': 'bob@example.com', 'image': None}
CAROL = {'id': 'pn_carol', 'name': 'Carol', 'email': 'carol@example.com', 'image': None}


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def searches():
    return []


@pytest.fixture
def selection(clock, searches):
    def search(query):
        searches.append(query)
        return [p for p in (ALICE, BOB, CAROL) if query.lower() in p['name'].lower()]

    return DiscountPartnerSelection(
        partner_ids=['pn_alice'],
        discount_partners=[ALICE, BOB],
        search_partners=search,
        clock=clock,
    )


class TestSync:

    def test_cache_holds_only_selected_partners(self, selection):
        assert [p['id'] for p in selection.selected_partners] == ['pn_alice']

    def test_resync_after_ids_change(self, selection):
        selection.partner_ids = ['pn_bob']
        selection.sync([ALICE, BOB])

        assert [p['id'] for p in selection.selected_partners] == ['pn_bob']


class TestSearch:

    def test_search_is_debounced(self, selection, clock, searches):
        selection.set_search('car')
        selection.search_options()

        clock.now += SEARCH_DEBOUNCE_SECONDS
        options = selection.search_options()

        assert searches == ['', 'car']
        assert options == [{'value': 'pn_carol', 'label': 'Carol', 'icon': f'{DICEBEAR_AVATAR_URL}Carol'}]

    def test_options_use_partner_image(self, selection):
        options = selection.search_options()

        assert options[0] == {'value': 'pn_alice', 'label': 'Alice', 'icon': 'https://img.test/a.png'}

    def test_selected_options(self, selection):
        selection.search_options()

        assert [o['value'] for o in selection.selected_options()] == ['pn_alice']


class TestSelect:

    def test_select_adds_ids_and_records(self, selection):
        options = selection.search_options()

        selection.select([o for o in options if o['value'] == 'pn_carol'])

        assert selection.partner_ids == ['pn_alice', 'pn_carol']
        assert [p['id'] for p in selection.selected_partners] == ['pn_alice', 'pn_carol']

    def test_select_is_idempotent(self, selection):
        options = selection.search_options()
        alice = [o for o in options if o['value'] == 'pn_alice']

        selection.select(alice)
        selection.select(alice)

        assert selection.partner_ids == ['pn_alice']
        assert len(selection.selected_partners) == 1

    def test_select_keeps_cached_record(self, clock):
        stale_alice = {**ALICE, 'name': 'Alice (cached)'}
        selection = DiscountPartnerSelection(
            partner_ids=['pn_alice'],
            discount_partners=[stale_alice],
            search_partners=lambda query: [ALICE],
            clock=clock,
        )
        options = selection.search_options()

        selection.select(options)

        assert selection.selected_partners == [
            {'id': 'pn_alice', 'name': 'Alice (cached)', 'email': 'alice@example.com',
             'image': 'https://img.test/a.png'}
        ]

    def test_unknown_option_only_adds_id(self, selection):
        selection.select([{'value': 'pn_ghost', 'label': 'Ghost', 'icon': ''}])

        assert selection.partner_ids == ['pn_alice', 'pn_ghost']
        assert [p['id'] for p in selection.selected_partners] == ['pn_alice']

    def test_change_callback_receives_new_ids(self, clock):
        changes = []
        selection = DiscountPartnerSelection(
            partner_ids=[],
            search_partners=lambda query: [BOB],
            on_partner_ids_change=changes.append,
            clock=clock,
        )

        selection.select(selection.search_options())
        selection.remove('pn_bob')

        assert changes == [['pn_bob'], []]


class TestRemove:

    def test_remove_drops_id_and_record(self, selection):
        selection.remove('pn_alice')

        assert selection.partner_ids == []
        assert selection.selected_partners == []
        assert selection.row_count == 0

    def test_remove_unknown_id_is_noop(self, selection):
        selection.remove('pn_nobody')

        assert selection.partner_ids == ['pn_alice']
        assert selection.row_count == 1


class TestTable:

    def test_rows_fall_back_to_generated_avatar(self, selection):
        selection.select([{'value': 'pn_bob', 'label': 'Bob', 'icon': ''}])
        selection.search_options()
        selection.select([{'value': 'pn_bob', 'label': 'Bob', 'icon': ''}])

        rows = selection.rows()

        assert rows[0]['image'] == 'https://img.test/a.png'
        assert rows[1]['image'] == f'{DICEBEAR_AVATAR_URL}Bob'

    @pytest.mark.parametrize('plural, expected', [(False, 'eligible partner'), (True, 'eligible partners')])
    def test_resource_name(self, plural, expected):
        assert DiscountPartnerSelection.resource_name(plural) == expected
