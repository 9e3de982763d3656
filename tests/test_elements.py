from pathlib import Path

import pytest

from bohr.elements import (
    ElementDataError,
    ElementRecord,
    PeriodicTable,
    UnknownElement,
    default_table,
    load_periodic_table,
    lookup,
)


def write_dataset(path: Path, body: str) -> Path:
    path.write_text(body, encoding="utf-8")
    return path


def test_default_table_covers_first_118_elements():
    table = default_table()
    assert len(table) == 118
    assert table.supported_range == (1, 118)
    assert list(table)[:3] == [1, 2, 3]


def test_every_configuration_sums_to_atomic_number():
    for number, record in default_table().items():
        assert sum(record.electron_configuration) == number
        assert record.electron_count == number
        assert all(count > 0 for count in record.electron_configuration)


def test_lookup_known_elements():
    helium = lookup(2)
    assert helium.symbol == "He"
    assert helium.electron_configuration == (2,)

    calcium = lookup(20)
    assert calcium.name == "Calcium"
    assert calcium.electron_configuration == (2, 8, 8, 2)
    assert calcium.orbit_count == 4


@pytest.mark.parametrize("number", [0, -1, 119, 500])
def test_lookup_unknown_number(number):
    with pytest.raises(UnknownElement) as excinfo:
        lookup(number)
    assert excinfo.value.key == number
    assert excinfo.value.supported == (1, 118)
    assert "1-118" in str(excinfo.value)


@pytest.mark.parametrize("value", [2.0, "2", True, None])
def test_lookup_rejects_non_integers(value):
    with pytest.raises(UnknownElement):
        default_table().lookup(value)


def test_unknown_element_is_lookup_error():
    with pytest.raises(LookupError):
        lookup(119)


def test_symbol_and_resolve():
    table = default_table()
    assert table.by_symbol("ca").atomic_number == 20
    assert table.by_symbol(" Og ").atomic_number == 118
    assert table.resolve("20").symbol == "Ca"
    assert table.resolve("Fe").atomic_number == 26
    assert table.resolve(8).symbol == "O"
    # "No" must stay a symbol, not a YAML boolean
    assert table.by_symbol("No").atomic_number == 102
    with pytest.raises(UnknownElement):
        table.by_symbol("Xx")
    with pytest.raises(UnknownElement):
        table.resolve("0")


def test_load_custom_dataset(tmp_path):
    dataset = write_dataset(
        tmp_path / "mini.yaml",
        "elements:\n"
        "  - {number: 1, symbol: H, name: Hydrogen, shells: [1]}\n"
        "  - {number: 3, symbol: Li, name: Lithium, shells: [2, 0, 1]}\n",
    )
    table = load_periodic_table(dataset)
    assert len(table) == 2
    assert table.lookup(3).electron_configuration == (2, 0, 1)
    with pytest.raises(UnknownElement):
        table.lookup(2)


@pytest.mark.parametrize(
    "body, fragment",
    [
        ("elements:\n  - {number: 2, symbol: He, shells: [1]}\n", "sum to 1"),
        ("elements:\n  - {number: 2, symbol: He, shells: [3, -1]}\n", "non-negative"),
        ("elements:\n  - {number: 0, symbol: X, shells: []}\n", "invalid number"),
        ("elements:\n  - {number: 1, symbol: H}\n", "'shells' must be a list"),
        ("elements:\n  - just-a-string\n", "not a mapping"),
        ("items: []\n", "'elements' list"),
        (
            "elements:\n  - {number: 1, shells: [1]}\n  - {number: 1, shells: [1]}\n",
            "duplicate",
        ),
    ],
)
def test_load_rejects_bad_entries(tmp_path, body, fragment):
    dataset = write_dataset(tmp_path / "bad.yaml", body)
    with pytest.raises(ElementDataError) as excinfo:
        load_periodic_table(dataset)
    assert fragment in excinfo.value.message
    assert excinfo.value.path == dataset


def test_load_missing_and_invalid_yaml(tmp_path):
    with pytest.raises(ElementDataError):
        load_periodic_table(tmp_path / "missing.yaml")
    broken = write_dataset(tmp_path / "broken.yaml", "elements: [unclosed\n")
    with pytest.raises(ElementDataError) as excinfo:
        load_periodic_table(broken)
    assert "invalid YAML" in excinfo.value.message


def test_periodic_table_mapping_behaviour():
    records = [
        ElementRecord(2, "He", "Helium", (2,)),
        ElementRecord(1, "H", "Hydrogen", (1,)),
    ]
    table = PeriodicTable(records)
    assert list(table) == [1, 2]
    assert table[2].symbol == "He"
    assert 1 in table and 3 not in table
    assert PeriodicTable([]).supported_range is None
