import pytest

from pngops.canvas import Canvas
from pngops.cli import build_config, build_parser, main, parse_color, parse_points
from pngops.codec import load_canvas, save_canvas
from pngops.config import CollageOptions, InfoOptions, RectOptions, TriangleOptions
from pngops.errors import (
    EXIT_ARGUMENT,
    EXIT_FILE,
    EXIT_OK,
    EXIT_OPERATION_FLAG,
    EXIT_PNG_FORMAT,
    ArgumentError,
)

from helpers import BLACK, GREEN, RED


@pytest.fixture
def input_png(tmp_path):
    canvas = Canvas(4, 4)
    canvas.rect(1, 1, 2, 2, RED)
    path = tmp_path / "in.png"
    save_canvas(canvas, path)
    return path


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("PNGOPS_OUTPUT", raising=False)
    monkeypatch.delenv("PNGOPS_PREVIEW_SCALE", raising=False)


def config_for(*argv):
    return build_config(build_parser().parse_args(list(argv)))


# ---------------------------------------------------------------------------
# Value parsing
# ---------------------------------------------------------------------------

def test_parse_color():
    assert parse_color("255.0.7") == (255, 0, 7)


@pytest.mark.parametrize("text", ["256.0.0", "1.2", "1.2.3.4", "a.b.c", "-1.0.0", ""])
def test_parse_color_rejects(text):
    with pytest.raises(ArgumentError):
        parse_color(text)


def test_parse_points_allows_negative():
    assert parse_points("0.0.100.-5.50.80") == ((0, 0), (100, -5), (50, 80))


@pytest.mark.parametrize("text", ["1.2.3.4.5", "1.2.3.4.5.6.7", "1.x.3.4.5.6", None])
def test_parse_points_rejects(text):
    with pytest.raises(ArgumentError):
        parse_points(text)


# ---------------------------------------------------------------------------
# Config building
# ---------------------------------------------------------------------------

def test_triangle_config(input_png):
    config = config_for("--triangle", "--points", "0.0.3.0.0.3", "--thickness", "2",
                        "--color", "255.0.0", "--fill", "--fill_color", "0.255.0", str(input_png))
    assert config.operation == TriangleOptions(
        points=((0, 0), (3, 0), (0, 3)), thickness=2, line_color=RED, fill=True, fill_color=GREEN,
    )
    assert config.input_path == str(input_png)
    assert config.output_path == "out.png"


def test_rect_config_with_input_flag():
    config = config_for("--biggest_rect", "--old_color", "1.2.3", "--new_color", "4.5.6",
                        "-i", "a.png", "-o", "b.png")
    assert config.operation == RectOptions((1, 2, 3), (4, 5, 6))
    assert (config.input_path, config.output_path) == ("a.png", "b.png")


def test_collage_and_info_config():
    assert config_for("--collage", "--number_x", "2", "--number_y", "3", "a.png").operation == \
        CollageOptions(2, 3)
    assert config_for("--info", "a.png").operation == InfoOptions()


def test_output_from_environment(monkeypatch):
    monkeypatch.setenv("PNGOPS_OUTPUT", "from_env.png")
    monkeypatch.setenv("PNGOPS_PREVIEW_SCALE", "3")
    config = config_for("--info", "a.png")
    assert config.output_path == "from_env.png"
    assert config.preview_scale == 3


def test_config_is_frozen():
    config = config_for("--info", "a.png")
    with pytest.raises(AttributeError):
        config.output_path = "x.png"


# ---------------------------------------------------------------------------
# main(): exit codes
# ---------------------------------------------------------------------------

def test_no_arguments_prints_help(capsys):
    assert main([]) == EXIT_OK
    assert "usage" in capsys.readouterr().out


def test_help_flag_exits_cleanly(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--help"])
    assert exc.value.code == 0
    assert "--biggest_rect" in capsys.readouterr().out


@pytest.mark.parametrize("argv,code", [
    (["--triangle", "--biggest_rect", "in.png"], EXIT_OPERATION_FLAG),
    (["--collage", "--info", "in.png"], EXIT_ARGUMENT),
    (["--info", "--triangle", "--biggest_rect", "in.png"], EXIT_OPERATION_FLAG),
    (["--info"], EXIT_FILE),
    (["in.png"], EXIT_OPERATION_FLAG),
    (["--collage", "--number_x", "2", "--number_y", "2"], EXIT_FILE),
    (["--collage", "--number_x", "0", "--number_y", "2", "in.png"], EXIT_ARGUMENT),
    (["--collage", "--number_x", "2", "in.png"], EXIT_ARGUMENT),
    (["--triangle", "--points", "0.0.1.1.2.0", "--thickness", "0", "--color", "1.1.1", "in.png"], EXIT_ARGUMENT),
    (["--triangle", "--points", "0.0.1.1.2.0", "--color", "1.1.1", "in.png"], EXIT_ARGUMENT),
    (["--triangle", "--points", "0.0.1.1.2.0", "--thickness", "1", "--color", "1.1.1", "--fill", "in.png"],
     EXIT_ARGUMENT),
    (["--biggest_rect", "--old_color", "300.0.0", "--new_color", "0.0.0", "in.png"], EXIT_ARGUMENT),
    (["--biggest_rect", "--old_color", "1.0.0", "in.png"], EXIT_ARGUMENT),
    (["--collage", "--number_x", "two", "--number_y", "2", "in.png"], EXIT_ARGUMENT),
    (["--bogus"], EXIT_ARGUMENT),
])
def test_validation_exit_codes(argv, code, input_png, capsys):
    assert main(argv) == code
    assert capsys.readouterr().err.startswith("Error: ")


def test_validation_happens_before_reading(tmp_path):
    # input does not exist, but the bad thickness is reported first
    argv = ["--triangle", "--points", "0.0.1.1.2.0", "--thickness", "-1", "--color", "1.1.1",
            str(tmp_path / "missing.png")]
    assert main(argv) == EXIT_ARGUMENT


def test_missing_input_file(tmp_path):
    assert main(["--collage", "--number_x", "1", "--number_y", "1", str(tmp_path / "missing.png")]) == EXIT_FILE


def test_non_png_input(tmp_path):
    path = tmp_path / "bad.png"
    path.write_bytes(b"plain text")
    assert main(["--info", str(path)]) == EXIT_PNG_FORMAT


# ---------------------------------------------------------------------------
# main(): operations end to end
# ---------------------------------------------------------------------------

def test_biggest_rect_end_to_end(input_png, tmp_path, capsys):
    out = tmp_path / "rect.png"
    code = main(["--biggest_rect", "--old_color", "255.0.0", "--new_color", "0.255.0",
                 str(input_png), "-o", str(out)])
    assert code == EXIT_OK
    stdout = capsys.readouterr().out
    assert "Recolored rectangle 2x2 at (1, 1) to 0.255.0" in stdout
    assert f"Output: {out}" in stdout
    result = load_canvas(out)
    assert result.get(1, 1) == GREEN and result.get(2, 2) == GREEN
    assert result.get(0, 0) == BLACK and result.get(3, 3) == BLACK


def test_biggest_rect_not_found(input_png, tmp_path, capsys):
    out = tmp_path / "same.png"
    code = main(["--biggest_rect", "--old_color", "9.9.9", "--new_color", "0.255.0",
                 "-i", str(input_png), "-o", str(out)])
    assert code == EXIT_OK
    assert "No rectangle of color 9.9.9 found" in capsys.readouterr().out
    assert load_canvas(out) == load_canvas(input_png)


def test_triangle_end_to_end(input_png, tmp_path):
    out = tmp_path / "tri.png"
    code = main(["--triangle", "--points", "0.0.3.0.0.3", "--thickness", "1", "--color", "0.0.255",
                 "--fill", "--fill_color", "0.255.0", str(input_png), "--output", str(out)])
    assert code == EXIT_OK
    result = load_canvas(out)
    assert result.get(0, 0) == (0, 0, 255)
    assert result.get(3, 0) == (0, 0, 255)
    assert result.get(1, 1) == GREEN
    assert result.get(3, 3) == BLACK


def test_collage_end_to_end(input_png, tmp_path):
    out = tmp_path / "collage.png"
    assert main(["--collage", "--number_x", "3", "--number_y", "2", str(input_png), "-o", str(out)]) == EXIT_OK
    result = load_canvas(out)
    assert (result.width, result.height) == (12, 8)
    assert result.get(4 + 1, 4 + 2) == RED
    assert result.get(8, 4) == BLACK


def test_default_output_path(input_png, tmp_path):
    assert main(["--collage", "--number_x", "1", "--number_y", "1", str(input_png)]) == EXIT_OK
    assert (tmp_path / "out.png").exists()


def test_info(input_png, tmp_path, capsys):
    assert main(["--info", str(input_png)]) == EXIT_OK
    stdout = capsys.readouterr().out
    assert "Width: 4" in stdout
    assert "Height: 4" in stdout
    assert "Color type: RGBA (6)" in stdout
    assert not (tmp_path / "out.png").exists()


def test_verbose_diagnostics(input_png, tmp_path, capsys):
    out = tmp_path / "v.png"
    main(["--collage", "--number_x", "2", "--number_y", "1", str(input_png), "-o", str(out), "--verbose"])
    stdout = capsys.readouterr().out
    assert "[pngops] Loaded" in stdout
    assert "[pngops] Collage is 8x4" in stdout


def test_preview_is_opened(input_png, tmp_path, monkeypatch):
    shown = []

    class FakePreview:
        def __init__(self, canvas, scale, title):
            shown.append((canvas.width, canvas.height, scale))

        def show(self):
            shown.append("shown")

    monkeypatch.setattr("pngops.preview.Preview", FakePreview)
    out = tmp_path / "p.png"
    assert main(["--collage", "--number_x", "2", "--number_y", "2", str(input_png),
                 "-o", str(out), "--preview"]) == EXIT_OK
    assert shown == [(8, 8, 8), "shown"]


def test_info_with_operation_only_prints_info(input_png, tmp_path, capsys):
    assert config_for("--info", "--collage", "--number_x", "2", "--number_y", "2", "a.png").operation == \
        InfoOptions()
    code = main(["--info", "--collage", "--number_x", "2", "--number_y", "2", str(input_png)])
    assert code == EXIT_OK
    stdout = capsys.readouterr().out
    assert "Width: 4" in stdout
    assert "Operation completed" not in stdout
    assert not (tmp_path / "out.png").exists()
