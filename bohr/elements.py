"""Element dataset and lookup for Bohr diagrams.

This module loads the periodic table dataset (atomic number, symbol, name and
electrons per shell) and answers lookups by atomic number or symbol.

Key classes:
- ElementRecord: One element with its electron configuration.
- PeriodicTable: Read-only mapping of atomic number to ElementRecord.
- UnknownElement: Raised when a lookup has no matching record.
- ElementDataError: Raised when a dataset file is malformed.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

# Dataset shipped with the package
DEFAULT_DATASET = Path(__file__).parent / "data" / "elements.yaml"


class UnknownElement(LookupError):
    """Error raised when no element matches the requested key.

    Attributes:
        key: The atomic number or symbol that was requested.
        supported: Inclusive (low, high) range of loaded atomic numbers.
    """

    def __init__(self, key: int | str, supported: tuple[int, int] | None = None):
        self.key = key
        self.supported = supported
        message = f"Unknown element: {key!r}"
        if supported:
            message += f" (supported atomic numbers: {supported[0]}-{supported[1]})"
        super().__init__(message)


class ElementDataError(ValueError):
    """Error raised when an element dataset cannot be used.

    Attributes:
        path: Dataset file that was being loaded.
        message: Human-readable description of the problem.
    """

    def __init__(self, path: Path, message: str):
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}")


@dataclass(frozen=True)
class ElementRecord:
    """An element and its electron configuration.

    Attributes:
        atomic_number: Number of protons (and electrons in the neutral atom).
        symbol: Chemical symbol, e.g. "Ca".
        name: English element name.
        electron_configuration: Electrons per orbit, innermost first.
    """

    atomic_number: int
    symbol: str
    name: str
    electron_configuration: tuple[int, ...]

    @property
    def orbit_count(self) -> int:
        return len(self.electron_configuration)

    @property
    def electron_count(self) -> int:
        return sum(self.electron_configuration)


class PeriodicTable(Mapping[int, ElementRecord]):
    """Mapping of atomic number to ElementRecord with lookup helpers."""

    def __init__(self, records: Iterable[ElementRecord]):
        self._records = {r.atomic_number: r for r in records}
        self._symbols = {r.symbol.lower(): r for r in self._records.values()}

    def __getitem__(self, key: int) -> ElementRecord:
        return self._records[key]

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._records))

    def __len__(self) -> int:
        return len(self._records)

    @property
    def supported_range(self) -> tuple[int, int] | None:
        if not self._records:
            return None
        return min(self._records), max(self._records)

    def lookup(self, atomic_number: int) -> ElementRecord:
        """Return the record for an atomic number.

        Args:
            atomic_number: Positive atomic number.

        Returns:
            The matching ElementRecord.

        Raises:
            UnknownElement: If the number is not an integer or not in the dataset.
        """
        if isinstance(atomic_number, bool) or not isinstance(atomic_number, int):
            raise UnknownElement(atomic_number, self.supported_range)
        record = self._records.get(atomic_number)
        if record is None:
            raise UnknownElement(atomic_number, self.supported_range)
        return record

    def by_symbol(self, symbol: str) -> ElementRecord:
        """Return the record for a chemical symbol (case-insensitive)."""
        record = self._symbols.get(symbol.strip().lower())
        if record is None:
            raise UnknownElement(symbol, self.supported_range)
        return record

    def resolve(self, key: int | str) -> ElementRecord:
        """Look up by atomic number or symbol.

        Strings made of digits are treated as atomic numbers, so CLI input
        like "20" and "Ca" both work.
        """
        if isinstance(key, str):
            cleaned = key.strip()
            if cleaned.lstrip("-").isdigit():
                return self.lookup(int(cleaned))
            return self.by_symbol(cleaned)
        return self.lookup(key)

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"PeriodicTable({len(self._records)} elements)"


def load_periodic_table(path: Path | None = None) -> PeriodicTable:
    """Load an element dataset from YAML.

    The file holds an ``elements`` list; each entry has ``number``,
    ``symbol``, ``name`` and ``shells`` keys.

    Args:
        path: Dataset file. Defaults to the dataset shipped with the package.

    Returns:
        PeriodicTable with every record from the file.

    Raises:
        ElementDataError: If the file is missing, unparsable, or an entry is invalid.
    """
    source = Path(path) if path is not None else DEFAULT_DATASET
    if not source.exists():
        raise ElementDataError(source, "dataset file not found")
    try:
        with open(source, encoding="utf-8") as f:
            payload = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ElementDataError(source, f"invalid YAML: {exc}") from exc

    entries = payload.get("elements") if isinstance(payload, dict) else None
    if not isinstance(entries, list):
        raise ElementDataError(source, "expected a top-level 'elements' list")

    records = []
    seen: set[int] = set()
    for index, entry in enumerate(entries):
        record = _parse_entry(source, index, entry)
        if record.atomic_number in seen:
            raise ElementDataError(
                source, f"duplicate atomic number {record.atomic_number}"
            )
        seen.add(record.atomic_number)
        records.append(record)
    return PeriodicTable(records)


def _parse_entry(source: Path, index: int, entry: Any) -> ElementRecord:
    """Validate one dataset entry and build its record.

    Zero entries are allowed in ``shells``; they are skipped at render time.
    """
    if not isinstance(entry, dict):
        raise ElementDataError(source, f"entry {index} is not a mapping")
    number = entry.get("number")
    if isinstance(number, bool) or not isinstance(number, int) or number < 1:
        raise ElementDataError(source, f"entry {index}: invalid number {number!r}")
    shells = entry.get("shells")
    if not isinstance(shells, list) or not shells:
        raise ElementDataError(source, f"element {number}: 'shells' must be a list")
    if any(isinstance(s, bool) or not isinstance(s, int) or s < 0 for s in shells):
        raise ElementDataError(
            source, f"element {number}: shell counts must be non-negative integers"
        )
    if sum(shells) != number:
        raise ElementDataError(
            source,
            f"element {number}: shells {shells} sum to {sum(shells)}, expected {number}",
        )
    return ElementRecord(
        atomic_number=number,
        symbol=str(entry.get("symbol") or number),
        name=str(entry.get("name") or ""),
        electron_configuration=tuple(shells),
    )


_default_table: PeriodicTable | None = None


def default_table() -> PeriodicTable:
    """Return the shipped periodic table, loading it on first use."""
    global _default_table
    if _default_table is None:
        _default_table = load_periodic_table()
    return _default_table


def lookup(atomic_number: int) -> ElementRecord:
    """Look up an atomic number in the shipped periodic table."""
    return default_table().lookup(atomic_number)
