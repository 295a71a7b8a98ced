"""GApplication entry point for Gameshelf."""

import logging
import os
import sys

import gi

gi.require_version("Gtk", "4.0")
gi.require_version("Adw", "1")
from gi.repository import Adw, Gio  # noqa: E402


class GameshelfApplication(Adw.Application):
    def __init__(self):
        super().__init__(
            application_id="io.github.gameshelf",
            flags=Gio.ApplicationFlags.DEFAULT_FLAGS,
        )

    def do_activate(self):
        from gameshelf.window import GameshelfWindow

        win = self.props.active_window
        if not win:
            win = GameshelfWindow(application=self)
        win.present()


def main():
    logging.basicConfig(
        level=logging.DEBUG if os.environ.get("GAMESHELF_DEBUG") else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    app = GameshelfApplication()
    return app.run(sys.argv)


if __name__ == "__main__":
    sys.exit(main())
