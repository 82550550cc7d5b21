"""
Name Resolver

Turns raw table/column names read from a database into aliases usable as
code symbols:
1. Strip punctuation and whitespace (including full-width forms)
2. Cut a prefix before the first underscore and tbl/table markers
3. Fix casing (all-lower or all-upper names become Capitalized)
4. Keep column aliases unique inside their table
"""
from __future__ import annotations

from typing import Optional

from .identifiers import IdentifierPolicy, create_identifier_policy
from ..config import ResolverConfig
from ..schema.models import DataColumn
from ..utils import get_logger

logger = get_logger(__name__)

DISPLAY_NAME_DELIMITERS = (".", "。", "\r", "\n")


def _is_ascii_lower(c: str) -> bool:
    return "a" <= c <= "z"


def _is_ascii_upper(c: str) -> bool:
    return "A" <= c <= "Z"


class NameResolver:
    """
    Derives aliases and display names from raw names.

    Usage:
        resolver = NameResolver()
        resolver.resolve_alias("tbl_user")      # "User"
        resolver.normalize_case("isactive")     # "IsActive"
    """

    def __init__(
        self,
        policy: Optional[IdentifierPolicy] = None,
        config: Optional[ResolverConfig] = None,
    ):
        self.config = config or ResolverConfig()
        self.policy = policy or create_identifier_policy(self.config.target_language)
        self._reserved = {n.lower() for n in self.config.reserved_names}

    def resolve_column_alias(self, column: DataColumn) -> Optional[str]:
        """Alias for a column, renamed with a numeric suffix if a sibling already uses it"""
        name = self.resolve_alias(column.name)
        if not name or column.table is None:
            return name

        candidate = name
        index = 0
        siblings = column.table.columns
        i = 0
        while i < len(siblings):
            item = siblings[i]
            if (
                item is not column
                and item.name != column.name
                and item.alias
                and candidate.lower() == item.alias.lower()
            ):
                index += 1
                candidate = f"{name}{index}"
                # rescan from the first sibling
                i = 0
                continue
            i += 1

        if candidate != name:
            logger.debug(f"Column alias {name} taken in {column.table.name}, using {candidate}")
        return candidate

    def resolve_alias(self, name: Optional[str]) -> Optional[str]:
        """Alias for any raw table or column name"""
        if not name:
            return name

        for c in self.config.strip_characters:
            name = name.replace(c, "")

        return self.normalize_case(self.strip_prefix(name))

    def strip_prefix(self, name: Optional[str]) -> Optional[str]:
        """Drop the part before the first underscore and tbl/table markers"""
        if not name:
            return name

        n = name.find("_")
        # at least two characters after the underscore, the first not another underscore
        if 0 <= n < len(name) - 2 and name[n + 1] != "_":
            rest = name[n + 1:]
            if not self.is_reserved_identifier(rest):
                name = rest

        for prefix in self.config.table_prefixes:
            if len(name) <= len(prefix):
                continue
            if name.startswith(prefix):
                rest = name[len(prefix):]
            elif name.endswith(prefix):
                rest = name[:-len(prefix)]
            else:
                continue
            if not self.is_reserved_identifier(rest):
                name = rest

        return name

    def normalize_case(self, name: Optional[str]) -> Optional[str]:
        """Capitalize names written in a single case; IsXxx flags get a capital third letter"""
        if not name:
            return name

        if name.lower() == "id":
            return "ID"

        if len(name) <= 2:
            return name

        lower_count = sum(1 for c in name if _is_ascii_lower(c))
        upper_count = sum(1 for c in name if _is_ascii_upper(c))

        if lower_count <= 1 or upper_count < 1:
            name = name.lower()
            if _is_ascii_lower(name[0]):
                name = name[0].upper() + name[1:]

        if name.startswith("Is") and len(name) >= 3 and _is_ascii_lower(name[2]):
            name = name[:2] + name[2].upper() + name[3:]

        return name

    def is_reserved_identifier(self, name: Optional[str]) -> bool:
        """True if the name cannot be used as an alias without disambiguation"""
        if not name:
            return False

        if name.lower() in self._reserved:
            return True

        # anything with a capital letter is never a keyword
        if any(_is_ascii_upper(c) for c in name):
            return False

        return not self.policy.is_valid_identifier(name)

    def get_display_name(self, name: Optional[str], description: Optional[str]) -> Optional[str]:
        """First sentence of the description, or the name when there is none"""
        if not description:
            return name

        text = description.strip()
        positions = [p for p in (text.find(d) for d in DISPLAY_NAME_DELIMITERS) if p >= 0]
        if positions:
            p = min(positions)
            # a leading delimiter is ignored
            if p > 0:
                text = text[:p].strip()

        return text
