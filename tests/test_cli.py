import pytest

from termpic.cli import build_parser, main, options_from_args
from termpic.geometry import CellSize
from termpic.options import Action
from tests.conftest import parse_commands


@pytest.fixture(autouse=True)
def no_cell_size_env(monkeypatch):
    monkeypatch.delenv("TERMPIC_CELL_SIZE", raising=False)


def parse(*argv):
    parser = build_parser()
    return options_from_args(parser, parser.parse_args(list(argv)))


def test_default_action_without_id():
    assert parse("img.png").action is Action.DISPLAY


def test_default_action_with_id():
    assert parse("img.png", "--id", "3").action is Action.LOAD_AND_DISPLAY


def test_explicit_action_and_geometry():
    options = parse("img.png", "-a", "load", "-i", "4", "-c", "20", "-r", "10", "-x", "1", "-y", "2", "-u")
    assert options.action is Action.LOAD
    assert (options.id, options.cols, options.rows, options.x, options.y) == (4, 20, 10, 1, 2)
    assert options.upscale
    assert str(options.path) == "img.png"


def test_clear_needs_no_image():
    options = parse("-a", "clear")
    assert options.action is Action.CLEAR
    assert options.path is None


def test_display_needs_image():
    with pytest.raises(SystemExit):
        parse("-a", "display")


def test_cell_size_flag():
    assert parse("img.png", "--cell-size", "8x16").cell_size == CellSize(8, 16)


def test_cell_size_from_environment(monkeypatch):
    monkeypatch.setenv("TERMPIC_CELL_SIZE", "12x24")
    assert parse("img.png").cell_size == CellSize(12, 24)


def test_bad_cell_size_flag():
    with pytest.raises(SystemExit):
        parse("img.png", "--cell-size", "big")


def test_rejects_negative_position():
    with pytest.raises(SystemExit):
        parse("img.png", "-x", "-1")


def test_main_clear(capsysbinary):
    main(["-a", "clear"])
    assert capsysbinary.readouterr().out == b"\x1b_Ga=d,d=a;\x1b\\"


def test_main_display(capsysbinary, image_path):
    main([str(image_path), "--cell-size", "10x20", "-c", "5"])
    ((control, payload),) = parse_commands(capsysbinary.readouterr().out)
    assert control == "a=T,t=t,f=32,s=100,v=40,c=5,r=1,q=2"
    assert payload


def test_main_missing_file(capsys, tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / "missing.png")])
    assert excinfo.value.code == 1
    assert "File not found" in capsys.readouterr().err


def test_main_load_without_id(capsys, image_path):
    with pytest.raises(SystemExit) as excinfo:
        main([str(image_path), "-a", "load"])
    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert "termpic:" in captured.err
    assert captured.out == ""


def test_main_bad_image(capsys, tmp_path):
    path = tmp_path / "bad.png"
    path.write_text("nope")
    with pytest.raises(SystemExit) as excinfo:
        main([str(path)])
    assert excinfo.value.code == 1
    assert "Cannot decode" in capsys.readouterr().err
