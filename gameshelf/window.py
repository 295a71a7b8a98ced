"""Main application window."""

from __future__ import annotations

import logging
import os

import gi

gi.require_version("Gtk", "4.0")
gi.require_version("Adw", "1")
from gi.repository import Adw, Gio, GLib, Gtk

from gameshelf.backend import config
from gameshelf.backend.catalogue import CatalogueError, load_catalogue
from gameshelf.views.browse import BrowseView

log = logging.getLogger(__name__)


class GameshelfWindow(Adw.ApplicationWindow):
    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.set_title("Gameshelf")
        self.set_default_size(1100, 760)

        self._page_size = config.load_page_size()

        # ── Header bar ────────────────────────────────────────────────────
        header = Adw.HeaderBar()

        self.search_entry = Gtk.SearchEntry(placeholder_text="Search games")
        self.search_entry.set_hexpand(True)
        self.search_entry.connect("search-changed", self._on_search_changed)
        header.set_title_widget(self.search_entry)

        self.refresh_button = Gtk.Button(icon_name="view-refresh-symbolic")
        self.refresh_button.set_tooltip_text("Reload Catalogue")
        self.refresh_button.connect("clicked", self._on_refresh_clicked)
        header.pack_start(self.refresh_button)

        menu = Gio.Menu()
        sizes = Gio.Menu()
        for size in config.PAGE_SIZES:
            sizes.append(f"{size} per page", f"win.page-size({size})")
        menu.append_section("Page Size", sizes)
        menu_button = Gtk.MenuButton(icon_name="open-menu-symbolic", menu_model=menu)
        header.pack_end(menu_button)

        page_size_action = Gio.SimpleAction.new_stateful(
            "page-size",
            GLib.VariantType.new("i"),
            GLib.Variant.new_int32(self._page_size),
        )
        page_size_action.connect("activate", self._on_page_size_activated)
        self.add_action(page_size_action)

        # ── Content ───────────────────────────────────────────────────────
        self.toast_overlay = Adw.ToastOverlay()
        self._browse = BrowseView()
        self._browse.set_vexpand(True)
        self._browse.connect("game-selected", self._on_game_selected)
        self.toast_overlay.set_child(self._browse)

        toolbar = Adw.ToolbarView()
        toolbar.add_top_bar(header)
        toolbar.set_content(self.toast_overlay)
        self.set_content(toolbar)

        self.connect("realize", lambda _w: self._load_catalogue())

    # ── Catalogue loading ─────────────────────────────────────────────────

    def _load_catalogue(self) -> None:
        path = os.environ.get("GAMESHELF_CATALOGUE", "") or config.load_catalogue_path()
        if not path:
            self._browse.show_error(
                "No Catalogue Configured",
                "Set GAMESHELF_CATALOGUE or add “catalogue” to "
                f"{config.data_dir() / 'config.json'}.",
            )
            return

        self.refresh_button.set_sensitive(False)
        try:
            catalogue = load_catalogue(path)
        except CatalogueError as exc:
            log.error("Failed to load catalogue: %s", exc)
            self._browse.show_error("Could Not Load Catalogue", str(exc))
            return
        finally:
            self.refresh_button.set_sensitive(True)

        self._browse.load_catalogue(catalogue, self._page_size)
        self._browse.set_search_text(self.search_entry.get_text())

    # ── Signal handlers ───────────────────────────────────────────────────

    def _on_search_changed(self, entry: Gtk.SearchEntry) -> None:
        self._browse.set_search_text(entry.get_text())

    def _on_refresh_clicked(self, _button: Gtk.Button) -> None:
        self._load_catalogue()

    def _on_page_size_activated(self, action: Gio.SimpleAction, param: GLib.Variant) -> None:
        size = param.get_int32()
        action.set_state(param)
        self._page_size = size
        config.save_page_size(size)
        self._browse.set_page_size(size)

    def _on_game_selected(self, _browse, entry) -> None:
        self.toast_overlay.add_toast(Adw.Toast(title=entry.name))
