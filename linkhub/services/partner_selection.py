"""
Selection state for a discount's eligible partners.

Tracks the partner ids chosen for a discount (owned by the caller) together
with a local cache of their display records, driven by a debounced partner
search. The cache is display-only and never authoritative for saving.
"""
import time
from typing import Callable, Iterable, List, Optional

from linkhub.schemas.partners import partner_avatar_url

SEARCH_DEBOUNCE_SECONDS = 0.5

DISPLAY_FIELDS = ('id', 'name', 'email', 'image')


def _display_record(partner: dict) -> dict:
    return {field: partner.get(field) for field in DISPLAY_FIELDS}


class DiscountPartnerSelection:
    """
    Usage:
        selection = DiscountPartnerSelection(
            partner_ids=['pn_1'],
            discount_partners=current_partners,
            search_partners=lambda q: search_partners(session, workspace_id, search=q),
        )
        selection.set_search('ali')
        options = selection.search_options()
        selection.select([options[0]])
    """

    def __init__(self, partner_ids: Iterable[str], discount_partners: Optional[List[dict]] = None,
                 search_partners: Optional[Callable[[str], List[dict]]] = None,
                 on_partner_ids_change: Optional[Callable[[List[str]], None]] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.partner_ids: List[str] = list(partner_ids)
        self.selected_partners: List[dict] = []
        self.partners_map = {}
        self._options: List[dict] = []
        self._search_partners = search_partners
        self._on_partner_ids_change = on_partner_ids_change
        self._clock = clock
        self._search = ''
        self._pending_search = ''
        self._search_changed_at: Optional[float] = None

        if discount_partners is not None:
            self.sync(discount_partners)

    # Search

    def set_search(self, query: str) -> None:
        self._pending_search = query
        self._search_changed_at = self._clock()

    def debounced_search(self) -> str:
        """The search query, once it has been stable for SEARCH_DEBOUNCE_SECONDS."""
        if self._search_changed_at is not None and \
                self._clock() - self._search_changed_at >= SEARCH_DEBOUNCE_SECONDS:
            self._search = self._pending_search
            self._search_changed_at = None
        return self._search

    def search_options(self) -> List[dict]:
        """Combobox options for the settled search query."""
        partners = self._search_partners(self.debounced_search()) if self._search_partners else []
        self.partners_map = {partner['id']: _display_record(partner) for partner in partners}
        self._options = [
            {
                'value': partner['id'],
                'label': partner['name'],
                'icon': partner_avatar_url(partner),
            }
            for partner in partners
        ]
        return self._options

    def selected_options(self) -> List[dict]:
        return [option for option in self._options if option['value'] in self.partner_ids]

    # Selection

    def sync(self, discount_partners: List[dict]) -> None:
        """Reset the display cache from the discount's current partners."""
        self.selected_partners = [
            _display_record(partner) for partner in discount_partners
            if partner['id'] in self.partner_ids
        ]

    def _set_partner_ids(self, partner_ids: List[str]) -> None:
        self.partner_ids = partner_ids
        if self._on_partner_ids_change:
            self._on_partner_ids_change(list(partner_ids))

    def select(self, options: List[dict]) -> None:
        """
        Add the chosen options.

        Ids are merged with set semantics (existing order kept). Each chosen
        partner's display record comes from the cache when already known,
        otherwise from the latest search results; unknown ones are skipped.
        """
        chosen_ids = [option['value'] for option in options]
        self._set_partner_ids(list(dict.fromkeys(self.partner_ids + chosen_ids)))

        cached = {partner['id']: partner for partner in self.selected_partners}
        for partner_id in chosen_ids:
            if partner_id in cached:
                continue
            partner = self.partners_map.get(partner_id)
            if partner is not None:
                cached[partner_id] = partner
                self.selected_partners.append(partner)

    def remove(self, partner_id: str) -> None:
        self._set_partner_ids([pid for pid in self.partner_ids if pid != partner_id])
        self.selected_partners = [p for p in self.selected_partners if p['id'] != partner_id]

    # Table

    def rows(self) -> List[dict]:
        return [
            {**partner, 'image': partner_avatar_url(partner)}
            for partner in self.selected_partners
        ]

    @property
    def row_count(self) -> int:
        return len(self.selected_partners)

    @staticmethod
    def resource_name(plural: bool) -> str:
        return f"eligible partner{'s' if plural else ''}"
