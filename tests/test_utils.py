import pytest

from bohr import utils


def test_format_number():
    assert utils.format_number(30.0) == "30"
    assert utils.format_number(1.23456) == "1.235"
    assert utils.format_number(-0.0001) == "0"
    assert utils.format_number(-7.5) == "-7.5"
    assert utils.format_number(2.0 / 3.0, precision=2) == "0.67"


def test_normalize_selector():
    assert utils.normalize_selector("#atom") == "atom"
    assert utils.normalize_selector("atom-2") == "atom-2"
    assert utils.normalize_selector("  #diagram_1 ") == "diagram_1"
    for bad in ["", "#", ".atom", "div > #atom", "#1abc"]:
        with pytest.raises(ValueError):
            utils.normalize_selector(bad)


def test_slugify_and_parent_dir(tmp_path):
    assert utils.slugify("Calcium") == "calcium"
    assert utils.slugify("Ununennium (119)") == "ununennium-119"
    assert utils.slugify("!!!") == "diagram"

    target = tmp_path / "nested" / "dir" / "file.svg"
    utils.ensure_parent_dir(target)
    assert target.parent.is_dir()
