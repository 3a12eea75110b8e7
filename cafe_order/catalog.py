"""Menu catalog and menu file loading."""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Iterable, Iterator

from loguru import logger

from cafe_order.models import MenuLine

_FIELD_SPLIT = re.compile(r"\s*;\s*")


class MenuCatalog:
    """Ordered, read-only list of menu lines with ids 1..n."""

    def __init__(self, lines: Iterable[MenuLine] = ()) -> None:
        self._lines: tuple[MenuLine, ...] = tuple(lines)
        for expected_id, line in enumerate(self._lines, start=1):
            if line.item_id != expected_id:
                raise ValueError(f"Menu ids must be dense from 1, got {line.item_id} at position {expected_id}")

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, Decimal | int | str]]) -> MenuCatalog:
        """Build a catalog from already-validated (name, price) pairs."""
        return cls(
            MenuLine(item_id=idx, name=name, unit_price=Decimal(str(price)))
            for idx, (name, price) in enumerate(pairs, start=1)
        )

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[MenuLine]:
        return iter(self._lines)

    def __bool__(self) -> bool:
        return bool(self._lines)

    def is_valid_id(self, item_id: int) -> bool:
        if isinstance(item_id, bool) or not isinstance(item_id, int):
            return False
        return 1 <= item_id <= len(self._lines)

    def get(self, item_id: int) -> MenuLine | None:
        if not self.is_valid_id(item_id):
            return None
        return self._lines[item_id - 1]


@dataclass(frozen=True)
class MenuProblem:
    """A menu file line that was skipped."""

    source: str
    line_number: int
    text: str
    reason: str


def parse_menu(lines: Iterable[str], source: str = "<menu>") -> tuple[list[MenuLine], list[MenuProblem]]:
    """Parse ``name ; price`` lines into menu lines, collecting skipped lines."""
    items: list[MenuLine] = []
    problems: list[MenuProblem] = []
    seen_names: set[str] = set()

    for line_number, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        fields = _FIELD_SPLIT.split(line)
        reason = None
        price = Decimal(0)
        if len(fields) != 2:
            reason = "expected 'name ; price'"
        else:
            name, price_text = fields
            try:
                price = Decimal(price_text)
            except InvalidOperation:
                reason = f"invalid price {price_text!r}"
            else:
                if not name:
                    reason = "empty name"
                elif name in seen_names:
                    reason = f"duplicate name {name!r}"
                elif not price.is_finite() or price <= 0:
                    reason = f"price must be positive, got {price_text!r}"

        if reason is not None:
            problems.append(MenuProblem(source=source, line_number=line_number, text=line, reason=reason))
            continue

        seen_names.add(name)
        items.append(MenuLine(item_id=len(items) + 1, name=name, unit_price=price))

    return items, problems


def load_menu(path: Path) -> MenuCatalog:
    """Load the menu file. A missing file yields an empty catalog."""
    try:
        with path.open("r", encoding="utf-8") as fh:
            items, problems = parse_menu(fh, source=str(path))
    except OSError as exc:
        logger.error("Could not read menu file {}: {}", path, exc)
        return MenuCatalog()

    for problem in problems:
        logger.warning(
            "Invalid menu data in {}, line {}: {} ({!r})",
            problem.source,
            problem.line_number,
            problem.reason,
            problem.text,
        )
    if not items:
        logger.error("Menu file {} contains no valid items", path)
    else:
        logger.info("Loaded {} menu items from {}", len(items), path)
    return MenuCatalog(items)
