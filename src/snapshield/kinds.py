"""Per-type behaviour: one variant per EntityType.

Each kind knows three things about its type:
  - ``priority``: rank used to arbitrate overlapping detections
  - ``synthesize``: how to invent a fresh replacement (delegates to the
    generator, which owns the pools and the random source)
  - ``derive_related``: how to compute a replacement for an entity of this
    kind from a replacement just decided for a *linked* entity of another
    kind (company -> domain, name -> email, ...).  ``None`` means the pair
    has no derivation rule and nothing is propagated.
"""

from __future__ import annotations
import hashlib
import re
from typing import TYPE_CHECKING

from . import dictionary
from .types import EntityType

if TYPE_CHECKING:
    from .generator import ReplacementGenerator

_COMPANY_WORDS = re.compile(
    r"\b(Inc|Corp|LLC|Ltd|Limited|Company|Co\.?|Corporation|Group|Partners|Associates"
    r"|Holdings|Industries|Technologies|Systems|Solutions|Labs|Bank|University"
    r"|Institute|Foundation)\b",
    re.IGNORECASE,
)
_COMPANY_SUFFIX_TAIL = re.compile(
    r",?\s+(inc|corp|llc|ltd|limited|company|co\.?|corporation|group|partners|associates)\b.*$",
    re.IGNORECASE,
)
_SCHEME_WWW = re.compile(r"^(https?://)?(www\.)?", re.IGNORECASE)


def looks_like_company(text: str) -> bool:
    """Organisation-style name (suffix or org keyword) rather than a person."""
    return bool(_COMPANY_WORDS.search(text or ""))


def company_suffix(text: str) -> str:
    """The trailing corporate suffix of a name ("" if none), e.g. " Corp"."""
    m = _COMPANY_SUFFIX_TAIL.search(text or "")
    return m.group(0) if m else ""


def domain_token(name: str) -> str:
    """"DataBridge Corp" -> "databridge" """
    base = _COMPANY_SUFFIX_TAIL.sub("", name.strip())
    return re.sub(r"[^a-z0-9]", "", base.lower())


def host_of(url: str) -> str:
    """Bare host of a URL or domain, without scheme, ``www.``, port or path."""
    rest = _SCHEME_WWW.sub("", url.strip())
    return re.split(r"[/:?#]", rest, maxsplit=1)[0].lower()


def name_from_domain(url: str) -> str:
    """"https://www.data-bridge.io" -> "Data Bridge" """
    label = host_of(url).split(".", 1)[0]
    return " ".join(w[:1].upper() + w[1:] for w in label.split("-") if w)


def name_from_email(email: str) -> str:
    """"jane.smith@x.com" -> "Jane Smith" """
    local = email.split("@", 1)[0]
    return " ".join(w[:1].upper() + w[1:] for w in re.split(r"[._]", local) if w)


def _rebuild_url(original: str, host: str) -> str:
    """Swap the host of ``original`` while keeping its scheme and www prefix."""
    m = _SCHEME_WWW.match(original.strip())
    prefix = m.group(0) if m else ""
    return f"{prefix}{host}"


def _split_email(email: str | None) -> tuple[str | None, str | None]:
    if not email or "@" not in email:
        return None, None
    local, _, domain = email.partition("@")
    return local or None, domain or None


def pseudonym_local(original: str) -> str:
    """Stable fake local part for an email, never taken from ``original``.

    "john.doe@techflow.com" -> e.g. "karen.walker".  Same input, same output.
    """
    real = (_split_email(original)[0] or "").lower()
    firsts = dictionary.FIRST_NAMES["male"] + dictionary.FIRST_NAMES["female"]
    lasts = dictionary.LAST_NAMES
    seed = int(hashlib.sha256(original.strip().lower().encode("utf-8")).hexdigest(), 16)
    for step in range(len(firsts)):
        candidate = f"{firsts[(seed + step) % len(firsts)]}.{lasts[(seed // len(firsts)) % len(lasts)]}".lower()
        if candidate != real:
            return candidate
    return "contact"


class EntityKind:
    """Base variant.  Subclasses set ``type`` and ``priority``."""

    type: EntityType
    priority: int = 0

    def synthesize(self, generator: ReplacementGenerator, original: str) -> str:
        raise NotImplementedError

    def derive_related(
        self,
        source_type: EntityType,
        source_original: str,
        replacement: str,
        original: str,
        current: str | None,
    ) -> str | None:
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(priority={self.priority})"


class DateKind(EntityKind):
    type = EntityType.DATE
    priority = 90

    def synthesize(self, generator, original):
        return generator.replace_date(original)


class AddressKind(EntityKind):
    type = EntityType.ADDRESS
    priority = 85

    def synthesize(self, generator, original):
        return generator.replace_address(original)


class MoneyKind(EntityKind):
    type = EntityType.MONEY
    priority = 80

    def synthesize(self, generator, original):
        return generator.replace_money(original)


class SsnKind(EntityKind):
    type = EntityType.SSN
    priority = 80

    def synthesize(self, generator, original):
        return generator.replace_ssn(original)


class CreditCardKind(EntityKind):
    type = EntityType.CREDIT_CARD
    priority = 80

    def synthesize(self, generator, original):
        return generator.replace_credit_card(original)


class EmailKind(EntityKind):
    type = EntityType.EMAIL
    priority = 75

    def synthesize(self, generator, original):
        return generator.replace_email(original)

    def derive_related(self, source_type, source_original, replacement, original, current):
        local, domain = _split_email(current)
        local = local or pseudonym_local(original)
        if source_type is EntityType.PROPER_NOUN:
            if looks_like_company(source_original):
                token = domain_token(replacement)
                return f"{local}@{token}.com" if token else None
            person = ".".join(re.sub(r"[^a-z0-9\s]", "", replacement.lower()).split())
            return f"{person}@{domain or 'example.com'}" if person else None
        if source_type is EntityType.URL:
            host = host_of(replacement)
            return f"{local}@{host}" if host else None
        return None


class PhoneKind(EntityKind):
    type = EntityType.PHONE
    priority = 75

    def synthesize(self, generator, original):
        return generator.replace_phone(original)


class ProperNounKind(EntityKind):
    type = EntityType.PROPER_NOUN
    priority = 70

    def synthesize(self, generator, original):
        return generator.replace_proper_noun(original)

    def derive_related(self, source_type, source_original, replacement, original, current):
        if source_type is EntityType.URL:
            name = name_from_domain(replacement)
            return f"{name}{company_suffix(original)}" if name else None
        if source_type is EntityType.EMAIL:
            if looks_like_company(original):
                _, domain = _split_email(replacement)
                name = name_from_domain(domain or "")
                return f"{name}{company_suffix(original)}" if name else None
            return name_from_email(replacement) or None
        return None


class UrlKind(EntityKind):
    type = EntityType.URL
    priority = 65

    def synthesize(self, generator, original):
        return generator.replace_url(original)

    def derive_related(self, source_type, source_original, replacement, original, current):
        if source_type is EntityType.PROPER_NOUN:
            token = domain_token(replacement)
            return _rebuild_url(original, f"{token}.com") if token else None
        if source_type is EntityType.EMAIL:
            _, domain = _split_email(replacement)
            return _rebuild_url(original, domain) if domain else None
        return None


class IpKind(EntityKind):
    type = EntityType.IP
    priority = 65

    def synthesize(self, generator, original):
        return generator.replace_ip(original)


class QuantityKind(EntityKind):
    type = EntityType.QUANTITY
    priority = 60

    def synthesize(self, generator, original):
        return generator.replace_quantity(original)


class LocationKind(EntityKind):
    type = EntityType.LOCATION
    priority = 50

    def synthesize(self, generator, original):
        return generator.replace_location(original)


KINDS: dict[EntityType, EntityKind] = {
    kind.type: kind
    for kind in (
        DateKind(), AddressKind(), MoneyKind(), SsnKind(), CreditCardKind(),
        EmailKind(), PhoneKind(), ProperNounKind(), UrlKind(), IpKind(),
        QuantityKind(), LocationKind(),
    )
}

DEFAULT_PRIORITIES: dict[EntityType, int] = {t: k.priority for t, k in KINDS.items()}


def kind_of(entity_type: EntityType | str) -> EntityKind:
    return KINDS[EntityType.parse(entity_type)]
