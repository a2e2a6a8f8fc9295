"""Pay code and rate matrix lookups."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from decimal import Decimal

from payroll_worksheet.models.rates import PayCodeDefinition, PayLevel


class DuplicatePayCodeError(ValueError):
    """Raised when two definitions share a code or label (case-insensitive)."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Pay code identifier '{key}' is defined more than once")


class RateCatalog:
    """Read-only view over pay code definitions and the pay level matrix.

    Codes and labels share one case-insensitive namespace, so any
    identifier resolves to at most one definition.
    """

    def __init__(
        self,
        definitions: Iterable[PayCodeDefinition],
        pay_levels: Mapping[str, PayLevel] | None = None,
    ):
        self._definitions = tuple(definitions)
        self._pay_levels = dict(pay_levels or {})
        self._index: dict[str, PayCodeDefinition] = {}

        for definition in self._definitions:
            keys = {definition.code.strip().lower(), definition.label.strip().lower()}
            for key in keys:
                if key in self._index:
                    raise DuplicatePayCodeError(key)
                self._index[key] = definition

    @property
    def definitions(self) -> tuple[PayCodeDefinition, ...]:
        return self._definitions

    @property
    def pay_levels(self) -> dict[str, PayLevel]:
        return dict(self._pay_levels)

    def find_pay_code(self, identifier: str) -> PayCodeDefinition | None:
        """Match an identifier against codes and labels, ignoring case."""
        return self._index.get(identifier.strip().lower())

    def rate_for(self, pay_level: str, pay_code: str) -> Decimal | None:
        """Matrix rate for a level and code, or None if not configured."""
        level = self._pay_levels.get(pay_level)
        if level is None:
            return None
        return level.rates.get(pay_code)

    def sorted_levels(self) -> list[tuple[str, PayLevel]]:
        """Pay levels ordered by rank, then name."""
        return sorted(self._pay_levels.items(), key=lambda item: (item[1].rank, item[0]))
