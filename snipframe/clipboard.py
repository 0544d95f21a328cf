"""Putting text and images on the system clipboard.

On Linux the clipboard is owned by a running process, so copying starts a
small background process that keeps serving the data until something else
is copied.
"""

from __future__ import annotations

import io
import logging
import os
import shutil
import subprocess
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union

from PIL import Image

log = logging.getLogger(__name__)

#: First argument that makes this module run as the clipboard daemon.
CLIPBOARD_DAEMON_ID = "__snipframe_clipboard_daemon"

_WAYLAND_TEXT = "text/plain;charset=utf-8"
_X11_TEXT = "UTF8_STRING"
_PNG = "image/png"


class ClipboardError(Exception):
    """The clipboard could not be written."""


@dataclass(frozen=True)
class TextRequest:
    """Daemon request to serve text."""

    text: str


@dataclass(frozen=True)
class ImageRequest:
    """Daemon request to serve an RGBA image stored as raw bytes in ``path``."""

    width: int
    height: int
    path: Path


DaemonRequest = Union[TextRequest, ImageRequest]


def _is_linux() -> bool:
    return sys.platform.startswith("linux")


def _spawn_daemon(args: Sequence[str]) -> None:
    subprocess.Popen(
        [sys.executable, "-m", "snipframe.clipboard", CLIPBOARD_DAEMON_ID, *args],
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        cwd="/",
        start_new_session=True,
    )


def _run(cmd: List[str], data: bytes) -> None:
    try:
        subprocess.run(
            cmd,
            input=data,
            check=True,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except FileNotFoundError as err:
        raise ClipboardError(f"clipboard tool not found: {cmd[0]}") from err
    except subprocess.CalledProcessError as err:
        raise ClipboardError(f"{cmd[0]} failed with exit status {err.returncode}") from err


def _linux_command(wayland_type: str, x11_target: str, wait: bool) -> List[str]:
    if os.environ.get("WAYLAND_DISPLAY") and shutil.which("wl-copy"):
        return ["wl-copy", "--type", wayland_type] + (["--foreground"] if wait else [])
    if shutil.which("xclip"):
        cmd = ["xclip", "-selection", "clipboard", "-t", x11_target, "-i"]
        return cmd + (["-quiet"] if wait else [])
    raise ClipboardError("no clipboard tool found; install wl-copy or xclip")


def _write_text(text: str, wait: bool) -> None:
    data = text.encode("utf-8")
    if _is_linux():
        _run(_linux_command(_WAYLAND_TEXT, _X11_TEXT, wait), data)
    elif sys.platform == "darwin":
        _run(["pbcopy"], data)
    elif sys.platform.startswith("win"):
        _run(
            ["powershell", "-NoProfile", "-Command",
             "Set-Clipboard -Value ([Console]::In.ReadToEnd())"],
            data,
        )
    else:
        raise ClipboardError(f"clipboard is not supported on {sys.platform}")


def _write_png(png: bytes, wait: bool) -> None:
    if _is_linux():
        _run(_linux_command(_PNG, _PNG, wait), png)
        return
    with tempfile.TemporaryDirectory() as directory:
        path = Path(directory) / "clipboard.png"
        path.write_bytes(png)
        if sys.platform == "darwin":
            quoted = str(path).replace("\\", "\\\\").replace('"', '\\"')
            script = f'set the clipboard to (read (POSIX file "{quoted}") as «class PNGf»)'
            _run(["osascript", "-e", script], b"")
        elif sys.platform.startswith("win"):
            quoted = str(path).replace("'", "''")
            script = (
                "Add-Type -AssemblyName System.Windows.Forms,System.Drawing; "
                "[System.Windows.Forms.Clipboard]::SetImage("
                f"[System.Drawing.Image]::FromFile('{quoted}'))"
            )
            _run(["powershell", "-NoProfile", "-STA", "-Command", script], b"")
        else:
            raise ClipboardError(f"clipboard is not supported on {sys.platform}")


def _rgba_to_png(width: int, height: int, data: bytes) -> bytes:
    buffer = io.BytesIO()
    Image.frombytes("RGBA", (width, height), data).save(buffer, "PNG")
    return buffer.getvalue()


def set_text(text: str) -> None:
    """Put ``text`` on the clipboard."""
    if _is_linux():
        _spawn_daemon(["text", text])
    else:
        _write_text(text, wait=False)


def set_image(width: int, height: int, data: bytes) -> Path:
    """Put an RGBA image on the clipboard.

    Returns the temporary file holding the raw pixels.
    """
    if width < 0 or height < 0 or len(data) != width * height * 4:
        raise ValueError(
            f"{len(data)} bytes do not make a {width}x{height} RGBA image"
        )
    with tempfile.NamedTemporaryFile(prefix="snipframe-", delete=False) as handle:
        handle.write(data)
        path = Path(handle.name)
    try:
        if _is_linux():
            _spawn_daemon(["image", str(width), str(height), str(path)])
        else:
            _write_png(_rgba_to_png(width, height, data), wait=False)
    except Exception:
        path.unlink(missing_ok=True)
        raise
    return path


def _parse_size(value: str, name: str) -> int:
    if not value.isdigit():
        raise ValueError(f"invalid image {name}: {value!r}")
    return int(value)


def parse_daemon_args(argv: Sequence[str]) -> DaemonRequest:
    """Parse the daemon's arguments (without the program name)."""
    args = list(argv)
    if not args or args[0] != CLIPBOARD_DAEMON_ID:
        raise ValueError("this function must be invoked from a daemon process")
    if len(args) < 2:
        raise ValueError("missing copy type")
    kind, rest = args[1], args[2:]
    if kind == "image":
        if len(rest) < 3:
            raise ValueError("expected width, height and image path")
        if len(rest) > 3:
            raise ValueError("unexpected extra args")
        width = _parse_size(rest[0], "width")
        height = _parse_size(rest[1], "height")
        return ImageRequest(width, height, Path(rest[2]))
    if kind == "text":
        if not rest:
            raise ValueError("expected text")
        if len(rest) > 1:
            raise ValueError("unexpected extra args")
        return TextRequest(rest[0])
    raise ValueError("invalid copy type, expected `image` or `text`")


def run_clipboard_daemon(argv: Optional[Sequence[str]] = None) -> None:
    """Serve the requested data on the clipboard until it is replaced."""
    if argv is None:
        argv = sys.argv[1:]
    log.info("Spawned clipboard daemon with arguments: %r", list(argv))
    request = parse_daemon_args(argv)
    if isinstance(request, TextRequest):
        _write_text(request.text, wait=True)
        return
    data = request.path.read_bytes()
    if request.width * request.height * 4 != len(data):
        raise ValueError("every 4 bytes in the image file must represent a single RGBA pixel")
    _write_png(_rgba_to_png(request.width, request.height, data), wait=True)
    request.path.unlink()


if __name__ == "__main__":
    run_clipboard_daemon()