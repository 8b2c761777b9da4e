"""ReplacementGenerator — invents plausible stand-ins for detected values.

Every draw comes from the one ``random.Random`` handed to the generator (and
shared with its pools), so a seeded generator makes a whole run reproducible.

Two modes, chosen once per session:
  - ``random``: type-appropriate fake values that keep the original's format
  - ``blackout``: solid bars shaped like the original words, nothing else

Usage:
    gen = ReplacementGenerator(random.Random(7), variance_percent=30)
    gen.replace_money("$1,250.00")     # e.g. "$1,411.25"
    gen.resolve(entity, mapper)        # cached, or synthesized + stored
"""

from __future__ import annotations
import logging
import math
import random
import re
from datetime import date, timedelta
from decimal import Decimal, ROUND_CEILING, ROUND_FLOOR, ROUND_HALF_UP

from .exceptions import ConfigurationError
from .kinds import kind_of, looks_like_company
from .mapper import ConsistencyMapper
from .pools import CompanyPool, LocationPool, NamePool
from .types import DetectedEntity

from . import dictionary

logger = logging.getLogger(__name__)

REDACTION_MODES = ("random", "blackout")
BLACKOUT_CHAR = "█"

_NUMBER = re.compile(r"\d+(?:,\d{3})*(?:\.\d+)?|\.\d+")
_CURRENCY_SYMBOL = re.compile(r"[$€£¥₹]")
_CURRENCY_CODE = re.compile(r"\b(?:USD|EUR|GBP|JPY|INR|CAD|AUD)\b", re.IGNORECASE)
_UNIT = re.compile(
    r"\b(?:items|units|pieces|kg|lbs|oz|g|ml|l|meters|feet|inches|cm|mm|km|miles|%)\b|%",
    re.IGNORECASE,
)

_SHORT_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_LONG_MONTHS = (
    "January", "February", "March", "April", "May", "June", "July",
    "August", "September", "October", "November", "December",
)
_ISO_DATE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")
_NUMERIC_DATE = re.compile(r"^(\d{1,2})([/\-.])(\d{1,2})\2(\d{4})$")
_TEXT_DATE = re.compile(r"^([A-Za-z]{3,9})\.?\s+(\d{1,2})(?:st|nd|rd|th)?(,?)\s+(\d{4})$")


def generate_blackout(text: str) -> str:
    """Replace each word with a bar about as wide; keep the whitespace."""
    return "".join(
        part if not part or part.isspace() else BLACKOUT_CHAR * math.ceil(len(part) * 0.9)
        for part in re.split(r"(\s+)", text)
    )


def _parse_number(text: str) -> Decimal:
    return Decimal(text.replace(",", ""))


def _decimal_places(number_text: str) -> int:
    return len(number_text.split(".", 1)[1]) if "." in number_text else 0


def _format_number(value: Decimal, places: int, commas: bool) -> str:
    return f"{value:,.{places}f}" if commas else f"{value:.{places}f}"


def _month_index(name: str) -> int | None:
    lower = name.lower()
    for i, (short, full) in enumerate(zip(_SHORT_MONTHS, _LONG_MONTHS)):
        if lower in (short.lower(), full.lower()) or (lower == "sept" and i == 8):
            return i
    return None


class ReplacementGenerator:
    """Per-type replacement synthesis plus the lookup-or-create path."""

    def __init__(
        self,
        rng: random.Random | None = None,
        *,
        mode: str = "random",
        variance_percent: float = 30,
        date_variance_days: int = 60,
        preserve_format: bool = True,
    ) -> None:
        if mode not in REDACTION_MODES:
            raise ConfigurationError(f"redaction mode must be one of {REDACTION_MODES}, got {mode!r}")
        if not 0 <= variance_percent <= 100:
            raise ConfigurationError(f"variance_percent must be between 0 and 100, got {variance_percent}")
        if date_variance_days < 0:
            raise ConfigurationError(f"date_variance_days must be >= 0, got {date_variance_days}")

        self.rng = rng or random.Random()
        self.mode = mode
        self.variance = Decimal(str(variance_percent)) / 100
        self.date_variance_days = date_variance_days
        self.preserve_format = preserve_format

        self.name_pool = NamePool(self.rng)
        self.company_pool = CompanyPool(self.rng)
        self.location_pool = LocationPool(self.rng)

        self._money_multiplier: Decimal | None = None
        self._quantity_multiplier: Decimal | None = None

    # ------------------------------------------------------------------
    # Lookup-or-create
    # ------------------------------------------------------------------

    def resolve(self, entity: DetectedEntity, mapper: ConsistencyMapper) -> str | None:
        """Replacement for ``entity``: mapper first, else synthesize and store."""
        if mapper.has(entity.type, entity.original):
            logger.debug(f"Using cached replacement for {entity.type.value}:{entity.original!r}")
            return mapper.get(entity.type, entity.original)

        replacement = self.synthesize(entity)
        mapper.set(entity.type, entity.original, replacement)
        # Bars carry no information to derive from; linked values get their own.
        if self.mode == "random":
            mapper.propagate_to_related(entity.type, entity.original, replacement)
        return replacement

    def synthesize(self, entity: DetectedEntity) -> str:
        if self.mode == "blackout":
            return generate_blackout(entity.original)
        return kind_of(entity.type).synthesize(self, entity.original)

    # ------------------------------------------------------------------
    # Numeric values
    # ------------------------------------------------------------------

    def reset_multipliers(self) -> None:
        """Start a new session: money and quantities each get a fresh factor."""
        self._money_multiplier = self._draw_multiplier()
        self._quantity_multiplier = self._draw_multiplier()

    def _draw_multiplier(self) -> Decimal:
        offset = Decimal(str(self.rng.uniform(-1, 1)))
        return 1 + offset * self.variance

    def _scale(self, value: Decimal, multiplier: Decimal, places: int) -> Decimal:
        """value * multiplier rounded to ``places``, never outside value*(1±v)."""
        exp = Decimal(1).scaleb(-places)
        bound = abs(value) * self.variance
        lower, upper = value - bound, value + bound
        scaled = (value * multiplier).quantize(exp, rounding=ROUND_HALF_UP)
        if scaled > upper:
            scaled = upper.quantize(exp, rounding=ROUND_FLOOR)
        elif scaled < lower:
            scaled = lower.quantize(exp, rounding=ROUND_CEILING)
        return scaled

    def _replace_numeric(self, original: str, multiplier: Decimal) -> tuple[str, str] | None:
        m = _NUMBER.search(original)
        if not m:
            return None
        number_text = m.group()
        places = _decimal_places(number_text)
        value = self._scale(_parse_number(number_text), multiplier, places)
        return number_text, _format_number(value, places, "," in number_text)

    def replace_money(self, original: str) -> str:
        if self._money_multiplier is None:
            self._money_multiplier = self._draw_multiplier()
        replaced = self._replace_numeric(original, self._money_multiplier)
        if replaced is None:
            return generate_blackout(original)
        number_text, formatted = replaced

        if self.preserve_format:
            return original.replace(number_text, formatted, 1)

        symbol = _CURRENCY_SYMBOL.search(original)
        if symbol:
            before = symbol.start() < original.find(number_text)
            return f"{symbol.group()}{formatted}" if before else f"{formatted}{symbol.group()}"
        code = _CURRENCY_CODE.search(original)
        if code:
            return f"{formatted} {code.group().upper()}"
        return f"${formatted}"

    def replace_quantity(self, original: str) -> str:
        if self._quantity_multiplier is None:
            self._quantity_multiplier = self._draw_multiplier()
        replaced = self._replace_numeric(original, self._quantity_multiplier)
        if replaced is None:
            return generate_blackout(original)
        number_text, formatted = replaced

        if self.preserve_format:
            return original.replace(number_text, formatted, 1)
        unit = _UNIT.search(original[original.find(number_text) + len(number_text):])
        return f"{formatted} {unit.group()}" if unit else formatted

    # ------------------------------------------------------------------
    # Names, places, contact details
    # ------------------------------------------------------------------

    def replace_proper_noun(self, original: str) -> str:
        if looks_like_company(original):
            return self.company_pool.get_random_company()
        if len(original.split()) >= 2:
            return self.name_pool.get_random_full_name()
        return self.name_pool.get_random_first_name()

    def replace_location(self, original: str) -> str:
        return self.location_pool.get_similar_replacement(original)

    def replace_email(self, original: str) -> str:
        first = self.name_pool.get_random_first_name().lower()
        last = self.name_pool.get_random_last_name().lower()
        domain = self.company_pool.get_domain_name()
        formats = (
            f"{first}.{last}@{domain}",
            f"{first}{last}@{domain}",
            f"{first[0]}{last}@{domain}",
            f"{first}@{domain}",
        )
        return formats[self.rng.randrange(len(formats))]

    def replace_phone(self, original: str) -> str:
        """New digits, same layout.  A leading +country code is kept."""
        prefix = ""
        body = original
        m = re.match(r"^\s*\+\d{1,3}(?=[\s\-.(])", original)
        if m:
            prefix, body = m.group(), original[m.end():]

        out: list[str] = []
        first = True
        for ch in body:
            if ch.isdigit():
                # Area codes and exchanges never start with 0 or 1.
                out.append(str(self.rng.randint(2, 9)) if first else str(self.rng.randint(0, 9)))
                first = False
            else:
                out.append(ch)
        return prefix + "".join(out)

    def replace_url(self, original: str) -> str:
        domain = self.company_pool.get_domain_name()
        m = re.match(r"^(?P<scheme>[a-z][a-z0-9+.\-]*://)?(?P<www>www\.)?(?P<host>[^/:?#\s]+)(?P<rest>.*)$",
                     original.strip(), re.IGNORECASE)
        if not m:
            return domain
        scheme = m.group("scheme") or ""
        www = m.group("www") or ""
        return f"{scheme}{www}{domain}{m.group('rest')}"

    def replace_address(self, original: str) -> str:
        number = self.rng.randint(1, 9999)
        street = self.rng.choice(dictionary.STREET_NAMES)
        street_type = self.rng.choice(dictionary.STREET_TYPES)
        return f"{number} {street} {street_type}"

    def replace_ip(self, original: str) -> str:
        if ":" in original:
            groups = original.split(":")
            groups[-1] = f"{self.rng.randrange(65536):04x}"
            return ":".join(groups)
        return f"192.168.{self.rng.randrange(256)}.{self.rng.randrange(256)}"

    def replace_ssn(self, original: str) -> str:
        area = self.rng.randint(100, 665)
        group = self.rng.randint(1, 99)
        serial = self.rng.randint(1, 9999)
        digits = f"{area:03d}{group:02d}{serial:04d}"
        return self._fill_digits(original, digits)

    def replace_credit_card(self, original: str) -> str:
        count = sum(ch.isdigit() for ch in original)
        digits = "".join(str(self.rng.randint(0, 9)) for _ in range(count))
        return self._fill_digits(original, digits)

    @staticmethod
    def _fill_digits(template: str, digits: str) -> str:
        it = iter(digits)
        return "".join(next(it, "0") if ch.isdigit() else ch for ch in template)

    # ------------------------------------------------------------------
    # Dates
    # ------------------------------------------------------------------

    def replace_date(self, original: str) -> str:
        """Shift by up to ``date_variance_days`` and re-render in the same format."""
        text = original.strip()
        offset = timedelta(days=self.rng.randint(-self.date_variance_days, self.date_variance_days))

        m = _ISO_DATE.match(text)
        if m:
            parsed = self._safe_date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
            if parsed:
                return self._shift(parsed, offset).isoformat()

        m = _NUMERIC_DATE.match(text)
        if m:
            first, sep, second, year = m.group(1), m.group(2), m.group(3), m.group(4)
            parsed = self._safe_date(int(year), int(first), int(second))
            if parsed:
                shifted = self._shift(parsed, offset)
                month = f"{shifted.month:02d}" if len(first) == 2 else str(shifted.month)
                day = f"{shifted.day:02d}" if len(second) == 2 else str(shifted.day)
                return f"{month}{sep}{day}{sep}{shifted.year}"

        m = _TEXT_DATE.match(text)
        if m:
            month_name, day, comma, year = m.groups()
            index = _month_index(month_name)
            parsed = self._safe_date(int(year), index + 1, int(day)) if index is not None else None
            if parsed:
                shifted = self._shift(parsed, offset)
                long_form = month_name.lower() == _LONG_MONTHS[index].lower()
                names = _LONG_MONTHS if long_form else _SHORT_MONTHS
                return f"{names[shifted.month - 1]} {shifted.day}{comma} {shifted.year}"

        logger.debug(f"Unrecognized date format {original!r}, masking")
        return generate_blackout(original)

    @staticmethod
    def _shift(value: date, offset: timedelta) -> date:
        """Shift by ``offset``, mirrored or clamped at the ends of the calendar."""
        for candidate in (offset, -offset):
            try:
                return value + candidate
            except OverflowError:
                continue
        return date.max if offset > timedelta(0) else date.min

    @staticmethod
    def _safe_date(year: int, month: int, day: int) -> date | None:
        try:
            return date(year, month, day)
        except ValueError:
            return None
