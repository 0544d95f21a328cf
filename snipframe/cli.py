"""Command line entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .app import App
from .clipboard import CLIPBOARD_DAEMON_ID, run_clipboard_daemon
from .config import parse_config
from .screenshot import ScreenshotError, take_screenshot

log = logging.getLogger(__name__)


def _ask_save_path() -> Optional[Path]:
    """Ask where to save the image; None if the dialog was closed or is unavailable."""
    try:
        import tkinter
        from tkinter import filedialog
    except ImportError:
        log.warning("no file dialog is available to choose where to save the image")
        return None
    try:
        root = tkinter.Tk()
        root.withdraw()
        try:
            name = filedialog.asksaveasfilename(title="Save Screenshot", parent=root)
        finally:
            root.destroy()
    except tkinter.TclError as err:
        log.warning("could not open the file dialog: %s", err)
        return None
    return Path(name) if name else None


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Take a screenshot and let the user select, copy or save part of it."""
    args = list(sys.argv[1:] if argv is None else argv)

    # the clipboard daemon is this same program started with a marker argument
    if args and args[0] == CLIPBOARD_DAEMON_ID:
        run_clipboard_daemon(args)
        return 0

    logging.basicConfig(level=logging.WARNING)
    config = parse_config(args)

    try:
        screenshot = take_screenshot()
    except ScreenshotError as err:
        print(f"Failed to take a screenshot of the desktop: {err}", file=sys.stderr)
        return 1

    from .render import run

    app = App(screenshot, config)
    run(app)

    if app.saved_image is not None:
        # closing the dialog without choosing a path is not an error
        path = _ask_save_path()
        if path is not None:
            try:
                app.saved_image.save(path)
            except (OSError, ValueError) as err:
                print(f"Failed to save the image: {err}", file=sys.stderr)
                return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())