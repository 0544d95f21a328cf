import pytest

from snipframe.clipboard import CLIPBOARD_DAEMON_ID
from snipframe.cli import main


def test_daemon_rejects_unknown_copy_type():
    with pytest.raises(ValueError, match="invalid copy type"):
        main([CLIPBOARD_DAEMON_ID, "bogus"])


def test_daemon_requires_copy_type():
    with pytest.raises(ValueError, match="missing copy type"):
        main([CLIPBOARD_DAEMON_ID])


def test_daemon_image_needs_all_arguments():
    with pytest.raises(ValueError, match="width, height and image path"):
        main([CLIPBOARD_DAEMON_ID, "image", "1"])


def test_daemon_text_rejects_extra_arguments():
    with pytest.raises(ValueError, match="unexpected extra args"):
        main([CLIPBOARD_DAEMON_ID, "text", "a", "b"])


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--version"])
    assert exc.value.code == 0
    assert "0.2.0" in capsys.readouterr().out


def test_help_mentions_instant(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--help"])
    assert exc.value.code == 0
    assert "--instant" in capsys.readouterr().out


def test_unknown_option_is_rejected():
    with pytest.raises(SystemExit) as exc:
        main(["--no-such-option"])
    assert exc.value.code == 2