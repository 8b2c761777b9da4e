"""ConsistencyMapper — session-scoped identity -> replacement store.

Design goals:
  - Consistent: the same real value (same type, any casing/whitespace) always
    maps to the same replacement within a session
  - Coherent: linked values (a company, its domain, its contact emails) get
    replacements derived from each other rather than independently
  - Portable: the whole state round-trips through ``export()`` / ``import_data()``

Keys are ``"type:normalized original"``, e.g. ``"properNoun:acme corp"``.

Usage:
    mapper = ConsistencyMapper()           # one per tab/session
    mapper.link_related("properNoun", "TechFlow Inc", "url", "techflow.com")
    mapper.set("properNoun", "TechFlow Inc", "DataBridge Corp")
    mapper.propagate_to_related("properNoun", "TechFlow Inc", "DataBridge Corp")
    mapper.get("url", "TECHFLOW.COM")      # "databridge.com"
"""

from __future__ import annotations
import logging
import re
from typing import Any, Iterable

from .kinds import (
    domain_token,
    host_of,
    kind_of,
    looks_like_company,
)
from .types import DetectedEntity, EntityType

logger = logging.getLogger(__name__)

_KEY_FORMAT = re.compile(r"^[A-Za-z][A-Za-z0-9_]*:", re.DOTALL)


def normalize(original: str) -> str:
    return (original or "").strip().lower()


def make_key(entity_type: EntityType | str, original: str) -> str:
    type_name = entity_type.value if isinstance(entity_type, EntityType) else str(entity_type)
    return f"{type_name}:{normalize(original)}"


def split_key(key: str) -> tuple[str, str]:
    type_name, _, normalized = key.partition(":")
    return type_name, normalized


def _valid_key(key: Any) -> bool:
    return isinstance(key, str) and bool(_KEY_FORMAT.match(key))


class ConsistencyMapper:
    """Replacement map plus a symmetric relation graph, scoped to a session."""

    __slots__ = ("_map", "_related", "_derived_from")

    def __init__(self) -> None:
        self._map: dict[str, str | None] = {}           # key -> replacement
        self._related: dict[str, dict[str, None]] = {}  # key -> ordered set of keys
        self._derived_from: dict[str, str] = {}         # key -> key it was propagated from

    # ------------------------------------------------------------------
    # Core API
    # ------------------------------------------------------------------

    def set(self, entity_type: EntityType | str, original: str, replacement: str | None) -> None:
        """Store a replacement.  A direct set is never overwritten by propagation."""
        key = make_key(entity_type, original)
        self._map[key] = replacement
        self._derived_from.pop(key, None)

    def get(self, entity_type: EntityType | str, original: str) -> str | None:
        """Stored replacement, or None if unseen or explicitly stored as None."""
        return self._map.get(make_key(entity_type, original))

    def has(self, entity_type: EntityType | str, original: str) -> bool:
        return make_key(entity_type, original) in self._map

    def link_related(
        self,
        type_a: EntityType | str,
        original_a: str,
        type_b: EntityType | str,
        original_b: str,
    ) -> None:
        """Link two values both ways.  Re-linking an existing pair is a no-op."""
        key_a = make_key(type_a, original_a)
        key_b = make_key(type_b, original_b)
        if key_a == key_b:
            return
        self._related.setdefault(key_a, {})[key_b] = None
        self._related.setdefault(key_b, {})[key_a] = None

    def get_related(self, entity_type: EntityType | str, original: str) -> list[str]:
        return list(self._related.get(make_key(entity_type, original), ()))

    def propagate_to_related(
        self,
        entity_type: EntityType | str,
        original: str,
        replacement: str | None,
    ) -> list[str]:
        """Derive replacements for every value linked to this one.

        A linked value is written only if it has no replacement yet, or if its
        current replacement was itself propagated from this same value.
        Direct ``set()`` calls always win.  Returns the keys written.
        """
        if replacement is None:
            return []
        source_type = EntityType.parse(entity_type)
        source_key = make_key(source_type, original)
        written: list[str] = []

        for related_key in self._related.get(source_key, ()):
            type_name, related_original = split_key(related_key)
            try:
                related_kind = kind_of(type_name)
            except (KeyError, ValueError):
                logger.debug(f"No kind for related key {related_key!r}, skipping")
                continue

            if related_key in self._map and self._derived_from.get(related_key) != source_key:
                logger.debug(f"Keeping existing replacement for {related_key!r}")
                continue

            derived = related_kind.derive_related(
                source_type,
                original,
                replacement,
                related_original,
                self._map.get(related_key),
            )
            if derived is None:
                continue

            self._map[related_key] = derived
            self._derived_from[related_key] = source_key
            written.append(related_key)
            logger.debug(f"Propagated {source_key!r} -> {related_key!r}")

        return written

    # ------------------------------------------------------------------
    # Auto-linking
    # ------------------------------------------------------------------

    def auto_link_related(self, entities: Iterable[DetectedEntity]) -> int:
        """Link entities from one document that look like the same party.

        - company names <-> URLs with a matching domain
        - company names <-> emails at a matching domain
        - URLs <-> emails on the same domain
        - person names <-> emails whose local part contains a name part

        Returns the number of links made.  No match is not an error.
        """
        valid = [e for e in entities if e is not None and isinstance(e.original, str) and e.original.strip()]
        proper_nouns = [e for e in valid if e.type is EntityType.PROPER_NOUN]
        companies = [e for e in proper_nouns if self._looks_like_company(e.original)]
        names = [e for e in proper_nouns if not self._looks_like_company(e.original)]
        urls = [e for e in valid if e.type is EntityType.URL]
        emails = [e for e in valid if e.type is EntityType.EMAIL]

        links = 0
        for company in companies:
            company_base = self._extract_company_base(company.original)
            for url in urls:
                if self._are_similar(company_base, self._extract_domain_base(url.original)):
                    self.link_related(company.type, company.original, url.type, url.original)
                    links += 1
            for email in emails:
                domain = email.original.rpartition("@")[2]
                if self._are_similar(company_base, self._extract_domain_base(domain)):
                    self.link_related(company.type, company.original, email.type, email.original)
                    links += 1

        for url in urls:
            url_host = host_of(url.original)
            for email in emails:
                if url_host and host_of(email.original.rpartition("@")[2]) == url_host:
                    self.link_related(url.type, url.original, email.type, email.original)
                    links += 1

        for name in names:
            parts = [p for p in re.split(r"\s+", name.original.lower().strip()) if len(p) > 1]
            for email in emails:
                local = email.original.partition("@")[0].lower()
                if any(part in local for part in parts):
                    self.link_related(name.type, name.original, email.type, email.original)
                    links += 1

        if links:
            logger.debug(f"Auto-linked {links} related entity pairs")
        return links

    def _looks_like_company(self, text: str) -> bool:
        return looks_like_company(text)

    def _extract_company_base(self, company: str) -> str:
        """"Acme Corporation" -> "acme" """
        return domain_token(company)

    def _extract_domain_base(self, url: str) -> str:
        """"https://www.example.com/x" -> "example" """
        label = host_of(url).split(".", 1)[0]
        return re.sub(r"[^a-z0-9]", "", label)

    def _are_similar(self, a: str, b: str) -> bool:
        """Equal, or one is a prefix of the other (case-insensitive)."""
        a, b = a.lower(), b.lower()
        if not a or not b:
            return False
        return a == b or a.startswith(b) or b.startswith(a)

    # ------------------------------------------------------------------
    # Introspection & persistence
    # ------------------------------------------------------------------

    @property
    def size(self) -> int:
        return len(self._map)

    def __len__(self) -> int:
        return len(self._map)

    def clear(self) -> None:
        self._map.clear()
        self._related.clear()
        self._derived_from.clear()

    def export(self) -> dict[str, list]:
        """Serializable copy of the full state."""
        return {
            "mappings": [[key, value] for key, value in self._map.items()],
            "relations": [[key, list(values)] for key, values in self._related.items()],
            "derivations": [[key, source] for key, source in self._derived_from.items()],
        }

    def import_data(self, data: dict[str, Any]) -> int:
        """Replace the current state with exported data.

        Bad records are skipped with a warning; returns the number skipped.
        """
        self.clear()
        if not isinstance(data, dict):
            logger.warning(f"Ignoring mapper state that is not a mapping: {type(data).__name__}")
            return 1
        skipped = 0

        for record in data.get("mappings") or []:
            if (
                not isinstance(record, (list, tuple)) or len(record) != 2
                or not _valid_key(record[0])
                or not (record[1] is None or isinstance(record[1], str))
            ):
                logger.warning(f"Skipping malformed mapping record: {record!r}")
                skipped += 1
                continue
            self._map[record[0]] = record[1]

        for record in data.get("relations") or []:
            if (
                not isinstance(record, (list, tuple)) or len(record) != 2
                or not _valid_key(record[0])
                or not isinstance(record[1], (list, tuple))
            ):
                logger.warning(f"Skipping malformed relation record: {record!r}")
                skipped += 1
                continue
            key, values = record
            for other in values:
                if not _valid_key(other) or other == key:
                    logger.warning(f"Skipping dangling relation {key!r} -> {other!r}")
                    skipped += 1
                    continue
                self._related.setdefault(key, {})[other] = None
                self._related.setdefault(other, {})[key] = None

        for record in data.get("derivations") or []:
            if (
                isinstance(record, (list, tuple)) and len(record) == 2
                and record[0] in self._map and _valid_key(record[1])
            ):
                self._derived_from[record[0]] = record[1]
            else:
                logger.warning(f"Skipping malformed derivation record: {record!r}")
                skipped += 1

        return skipped
