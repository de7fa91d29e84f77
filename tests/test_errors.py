from cubraycaster import errors
from cubraycaster.errors import CubError


def test_carries_its_message():
    err = CubError(errors.INVALID_MAP)
    assert err.message == errors.INVALID_MAP
    assert str(err) == errors.INVALID_MAP


def test_defaults_have_no_line():
    err = CubError(errors.MISSING)
    assert err.line is None
    assert err.line_number == 0


def test_plain_format_without_line():
    err = CubError(errors.MISSING)
    assert err.format(color=False) == "Error\n" + errors.MISSING + "\n"


def test_plain_format_with_line_strips_newlines():
    err = CubError(errors.INVALID_ELEMENT, "XX foo\n", 7)
    report = err.format(color=False)
    assert report.startswith("Error\n" + errors.INVALID_ELEMENT + " at line:7 | ")
    assert report.endswith("`XX foo`\n")


def test_coloured_format_uses_ansi_codes():
    err = CubError(errors.DUP_COLOR, "F 1,2,3\n", 3)
    report = err.format(color=True)
    assert report.startswith("\x1b[1;31mError\x1b[34m\n")
    assert "\x1b[30mline:3 " in report
    assert report.endswith("`F 1,2,3`\x1b[0m\n")


def test_empty_line_text_still_reported():
    report = CubError(errors.INVALID_ELEMENT, "", 2).format(color=False)
    assert "line:2" in report
    assert report.endswith("``\n")