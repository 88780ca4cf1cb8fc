import pytest

from molecular import __version__
from molecular.app import _parse_args, main


def test_defaults():
    args = _parse_args([])
    assert args.scheme == "abyss"
    assert args.quality == 50
    assert args.density == 9000.0
    assert args.seed is None
    assert args.particle_color is None


def test_list_schemes_exits_cleanly(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--list-schemes"])

    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert "abyss" in out
    assert "ember" in out


@pytest.mark.parametrize(
    "argv, message",
    [
        (["--quality", "5"], "--quality must be 15"),
        (["--density", "10"], "--density must be"),
        (["--width", "100"], "at least 320x240"),
        (["--scheme", "plaid"], "Unknown scheme 'plaid'"),
        (["--particle-color", "blue"], "Expected a #rrggbb"),
    ],
)
def test_invalid_arguments_exit_with_error(argv, message, capsys, monkeypatch):
    monkeypatch.setattr("molecular.app._check_deps", lambda: [])

    with pytest.raises(SystemExit) as exc:
        main(argv)

    assert exc.value.code == 1
    assert message in capsys.readouterr().err


def test_missing_dependencies_exit_with_error(capsys, monkeypatch):
    monkeypatch.setattr("molecular.app._check_deps", lambda: ["PyQt5"])

    with pytest.raises(SystemExit) as exc:
        main(["--quality", "50"])

    assert exc.value.code == 1
    assert "Missing packages: PyQt5" in capsys.readouterr().err


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as exc:
        _parse_args(["--version"])

    assert exc.value.code == 0
    assert __version__ in capsys.readouterr().out
