"""Category naming conventions — mandatory list, accessory suffix, alias table.

Categories are not stored entities; they are the ``category`` string of each
question.  Two conventions are layered on top of those strings:

  - **mandatory** categories form a fixed, ordered list.  They are always
    shown and always count as selected.
  - **accessory** categories end with a fixed suffix (``" - wyposażenie"``).
    Their base category is the name with the suffix stripped, corrected
    through a small alias table because the catalog spells some base names
    differently (plural vs. singular).

All string handling for these conventions lives here so the tables can be
tested and overridden independently of the planner.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from rental_questionnaire.constants import (
    ACCESSORY_SUFFIX,
    CATEGORY_ALIASES,
    MANDATORY_CATEGORIES,
)


def collation_key(name: str) -> tuple[str, str]:
    """Sort key approximating a locale-aware alphabetical comparison.

    Compares accent- and case-insensitively first ("Łyżka" sorts with
    "L..."), falling back to the raw string so the order stays total.
    """
    decomposed = unicodedata.normalize("NFKD", name)
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    # NFKD leaves the Polish stroked L intact
    stripped = stripped.replace("ł", "l").replace("Ł", "L")
    return stripped.casefold(), name


@dataclass(frozen=True)
class CategoryRules:
    """The naming tables that drive category planning.

    The defaults come from :mod:`rental_questionnaire.constants`; a catalog
    file may supply its own via :meth:`from_mapping`.
    """

    mandatory: tuple[str, ...] = MANDATORY_CATEGORIES
    accessory_suffix: str = ACCESSORY_SUFFIX
    aliases: Mapping[str, str] = field(default_factory=lambda: dict(CATEGORY_ALIASES))

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any] | None) -> CategoryRules:
        """Build rules from a ``categories:`` block, keeping defaults for missing keys."""
        if not raw:
            return cls()
        return cls(
            mandatory=tuple(raw.get("mandatory", MANDATORY_CATEGORIES)),
            accessory_suffix=raw.get("accessory_suffix", ACCESSORY_SUFFIX),
            aliases=dict(raw.get("aliases", CATEGORY_ALIASES)),
        )

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def is_mandatory(self, category: str) -> bool:
        return category in self.mandatory

    def is_accessory(self, category: str) -> bool:
        return (
            category.endswith(self.accessory_suffix)
            and len(category) > len(self.accessory_suffix)
        )

    def base_category(self, accessory: str) -> str:
        """Return the equipment category an accessory category belongs to.

        Raises:
            ValueError: if ``accessory`` does not carry the accessory suffix.
        """
        if not self.is_accessory(accessory):
            raise ValueError(f"Not an accessory category: {accessory!r}")
        base = accessory[: -len(self.accessory_suffix)]
        return self.aliases.get(base, base)

    def accessories_of(self, category: str, known: Iterable[str]) -> set[str]:
        """Return the accessory categories among ``known`` bound to ``category``.

        Includes the literal ``category + suffix`` even when it is not in
        ``known``, so purging works before the catalog is fully loaded.
        """
        result = {f"{category}{self.accessory_suffix}"}
        for name in known:
            if self.is_accessory(name) and self.base_category(name) == category:
                result.add(name)
        return result

    # ------------------------------------------------------------------
    # Ordering
    # ------------------------------------------------------------------

    def order_general(self, categories: Iterable[str]) -> list[str]:
        """Mandatory categories first in canonical order, the rest alphabetically."""
        names = set(categories)
        head = [c for c in self.mandatory if c in names]
        tail = sorted((c for c in names if not self.is_mandatory(c)), key=collation_key)
        return head + tail

    def order_equipment(self, categories: Iterable[str]) -> list[str]:
        return sorted(set(categories), key=collation_key)


DEFAULT_RULES = CategoryRules()
