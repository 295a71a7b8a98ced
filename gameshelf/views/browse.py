"""Browse view — facet strip, one page of game cards, and page controls."""

from __future__ import annotations

import logging

import gi

gi.require_version("Gtk", "4.0")
gi.require_version("Adw", "1")
from gi.repository import Adw, GObject, Gtk, Pango

from gameshelf.backend.catalogue import Catalogue
from gameshelf.backend.session import BrowseSession
from gameshelf.models.game_entry import STORE_LABELS, GameEntry

log = logging.getLogger(__name__)

_CARD_WIDTH = 200


# ---------------------------------------------------------------------------
# GameCard
# ---------------------------------------------------------------------------

class GameCard(Gtk.FlowBoxChild):
    """A single game tile in the browse grid."""

    def __init__(self, entry: GameEntry, genre_names: list[str]) -> None:
        super().__init__()
        self.entry = entry

        self.set_margin_start(6)
        self.set_margin_end(6)
        self.set_margin_top(6)
        self.set_margin_bottom(6)

        card = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=4)
        card.add_css_class("card")
        card.set_size_request(_CARD_WIDTH, -1)

        inner = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=4)
        inner.set_margin_start(10)
        inner.set_margin_end(10)
        inner.set_margin_top(10)
        inner.set_margin_bottom(10)
        card.append(inner)

        name_lbl = Gtk.Label(label=entry.name)
        name_lbl.add_css_class("heading")
        name_lbl.set_halign(Gtk.Align.START)
        name_lbl.set_ellipsize(Pango.EllipsizeMode.END)
        name_lbl.set_max_width_chars(_CARD_WIDTH // 10)
        inner.append(name_lbl)

        if genre_names:
            genres_lbl = Gtk.Label(label=", ".join(genre_names))
            genres_lbl.add_css_class("caption")
            genres_lbl.add_css_class("dim-label")
            genres_lbl.set_halign(Gtk.Align.START)
            genres_lbl.set_ellipsize(Pango.EllipsizeMode.END)
            inner.append(genres_lbl)

        if entry.is_multiplayer:
            mp_lbl = Gtk.Label(label="Multiplayer")
            mp_lbl.add_css_class("caption")
            mp_lbl.add_css_class("accent")
            mp_lbl.set_halign(Gtk.Align.START)
            inner.append(mp_lbl)

        stores = [STORE_LABELS[s] for s in STORE_LABELS if s in entry.store_links]
        if stores:
            stores_lbl = Gtk.Label(label=" · ".join(stores))
            stores_lbl.add_css_class("caption")
            stores_lbl.set_halign(Gtk.Align.START)
            stores_lbl.set_wrap(True)
            inner.append(stores_lbl)

        self.set_child(card)


# ---------------------------------------------------------------------------
# BrowseView
# ---------------------------------------------------------------------------

class BrowseView(Gtk.Box):
    """Main browse page: facet toggles, paged game grid, page controls."""

    __gsignals__ = {
        # Emitted when the user activates a game card.
        "game-selected": (GObject.SignalFlags.RUN_FIRST, None, (object,)),
    }

    def __init__(self) -> None:
        super().__init__(orientation=Gtk.Orientation.VERTICAL)

        self._session: BrowseSession | None = None
        self._catalogue: Catalogue | None = None

        # ── Facet strip ───────────────────────────────────────────────────
        self._facet_scroll = Gtk.ScrolledWindow()
        self._facet_scroll.set_policy(Gtk.PolicyType.AUTOMATIC, Gtk.PolicyType.NEVER)
        self._facet_scroll.set_visible(False)

        self._facet_box = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=6)
        self._facet_box.set_margin_start(12)
        self._facet_box.set_margin_end(12)
        self._facet_box.set_margin_top(8)
        self._facet_box.set_margin_bottom(8)
        self._facet_scroll.set_child(self._facet_box)
        self.append(self._facet_scroll)

        self._sep = Gtk.Separator(orientation=Gtk.Orientation.HORIZONTAL)
        self._sep.set_visible(False)
        self.append(self._sep)

        # ── Content stack (grid / status page) ───────────────────────────
        self._stack = Gtk.Stack()
        self._stack.set_vexpand(True)
        self._stack.set_transition_type(Gtk.StackTransitionType.CROSSFADE)
        self._stack.set_transition_duration(120)
        self.append(self._stack)

        self._grid_scroll = Gtk.ScrolledWindow()
        self._grid_scroll.set_policy(Gtk.PolicyType.NEVER, Gtk.PolicyType.AUTOMATIC)

        self._flow_box = Gtk.FlowBox()
        self._flow_box.set_valign(Gtk.Align.START)
        self._flow_box.set_min_children_per_line(2)
        self._flow_box.set_max_children_per_line(8)
        self._flow_box.set_selection_mode(Gtk.SelectionMode.NONE)
        self._flow_box.set_homogeneous(True)
        self._flow_box.set_margin_start(12)
        self._flow_box.set_margin_end(12)
        self._flow_box.set_margin_top(12)
        self._flow_box.set_margin_bottom(12)
        self._flow_box.connect("child-activated", self._on_card_activated)
        self._grid_scroll.set_child(self._flow_box)
        self._stack.add_named(self._grid_scroll, "grid")

        self._status = Adw.StatusPage()
        self._status.set_icon_name("applications-games-symbolic")
        self._stack.add_named(self._status, "status")

        # ── Page controls ─────────────────────────────────────────────────
        pager = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=12)
        pager.set_halign(Gtk.Align.CENTER)
        pager.set_margin_top(6)
        pager.set_margin_bottom(6)

        self._prev_button = Gtk.Button(icon_name="go-previous-symbolic")
        self._prev_button.set_tooltip_text("Previous Page")
        self._prev_button.connect("clicked", self._on_prev_clicked)
        pager.append(self._prev_button)

        self._page_label = Gtk.Label()
        self._page_label.add_css_class("numeric")
        pager.append(self._page_label)

        self._next_button = Gtk.Button(icon_name="go-next-symbolic")
        self._next_button.set_tooltip_text("Next Page")
        self._next_button.connect("clicked", self._on_next_clicked)
        pager.append(self._next_button)

        self._pager = pager
        self.append(pager)

        self._show_status("No Catalogue", "Configure a catalogue to browse games.")

    # ── Public API ────────────────────────────────────────────────────────

    def load_catalogue(self, catalogue: Catalogue, page_size: int) -> None:
        """Start a new browsing session over *catalogue*."""
        self._catalogue = catalogue
        self._session = BrowseSession(catalogue.games, page_size)
        self._rebuild_facets()
        if not catalogue.games:
            self._facet_scroll.set_visible(False)
            self._sep.set_visible(False)
            self._show_status("Empty Catalogue", "The catalogue contains no games.")
            return
        self._facet_scroll.set_visible(True)
        self._sep.set_visible(True)
        self._render_page()

    def show_error(self, title: str, description: str) -> None:
        """Display a full-page error / info message."""
        self._session = None
        self._catalogue = None
        self._facet_scroll.set_visible(False)
        self._sep.set_visible(False)
        self._show_status(title, description)

    def set_search_text(self, text: str) -> None:
        if self._session is None:
            return
        self._session.set_search_text(text)
        self._render_page()

    def set_page_size(self, page_size: int) -> None:
        if self._session is None:
            return
        self._session.set_page_size(page_size)
        self._render_page()

    # ── Internals ─────────────────────────────────────────────────────────

    def _rebuild_facets(self) -> None:
        while (child := self._facet_box.get_first_child()) is not None:
            self._facet_box.remove(child)
        if self._session is None or self._catalogue is None:
            return

        for facet in self._session.facet_set:
            btn = Gtk.ToggleButton(label=facet.label)
            btn.connect("toggled", self._on_facet_toggled, facet.name)
            self._facet_box.append(btn)

        present = set().union(*(e.genres for e in self._catalogue.games))
        for genre in self._catalogue.genres:
            if genre.id not in present:
                continue
            btn = Gtk.ToggleButton(label=genre.name)
            btn.add_css_class("flat")
            btn.connect("toggled", self._on_genre_toggled, genre.id)
            self._facet_box.append(btn)

        present = set().union(*(e.themes for e in self._catalogue.games))
        for theme in self._catalogue.themes:
            if theme.id not in present:
                continue
            btn = Gtk.ToggleButton(label=theme.name)
            btn.add_css_class("flat")
            btn.connect("toggled", self._on_theme_toggled, theme.id)
            self._facet_box.append(btn)

    def _render_page(self) -> None:
        while (child := self._flow_box.get_first_child()) is not None:
            self._flow_box.remove(child)

        session = self._session
        if session is None:
            return

        if session.cursor is None:
            self._pager.set_visible(False)
            if session.search_key:
                self._show_status(
                    "No Results",
                    f"No games match “{session.search_key}”.",
                )
            else:
                self._show_status("No Games Here", "No games match the selected filters.")
            return

        for entry in session.page_entries:
            genre_names = [self._catalogue.genre_name(g) for g in sorted(entry.genres)]
            self._flow_box.append(GameCard(entry, genre_names))

        self._page_label.set_label(f"{session.page_index + 1} / {session.page_count}")
        self._prev_button.set_sensitive(session.has_previous)
        self._next_button.set_sensitive(session.has_next)
        self._pager.set_visible(session.page_count > 1)
        self._grid_scroll.get_vadjustment().set_value(0)
        self._stack.set_visible_child_name("grid")

    def _show_status(self, title: str, description: str) -> None:
        self._status.set_title(title)
        self._status.set_description(description)
        self._pager.set_visible(False)
        self._stack.set_visible_child_name("status")

    def _on_facet_toggled(self, button: Gtk.ToggleButton, name: str) -> None:
        if self._session is not None:
            self._session.set_facet(name, button.get_active())
            self._render_page()

    def _on_genre_toggled(self, button: Gtk.ToggleButton, genre_id: int) -> None:
        if self._session is not None:
            self._session.set_genre(genre_id, button.get_active())
            self._render_page()

    def _on_theme_toggled(self, button: Gtk.ToggleButton, theme_id: int) -> None:
        if self._session is not None:
            self._session.set_theme(theme_id, button.get_active())
            self._render_page()

    def _on_prev_clicked(self, _button: Gtk.Button) -> None:
        if self._session is not None and self._session.previous_page():
            self._render_page()

    def _on_next_clicked(self, _button: Gtk.Button) -> None:
        if self._session is not None and self._session.next_page():
            self._render_page()

    def _on_card_activated(self, _flow_box: Gtk.FlowBox, child: GameCard) -> None:
        log.debug("Game selected: %s", child.entry.slug)
        self.emit("game-selected", child.entry)
