"""Replacement pools — plausible stand-ins for names, companies and places.

Pools wrap read-only data (see ``dictionary``) plus the random source they
were given.  Two pools built on the same seeded ``random.Random`` produce the
same sequence, which is what makes a whole pipeline run reproducible.

Usage:
    rng = random.Random(42)
    locations = LocationPool(rng)
    locations.get_similar_replacement("Pacific Ocean")   # another feature
    locations.get_random_locations(5, "city")            # 5 distinct cities
"""

from __future__ import annotations
import random
import re
from typing import Sequence, TypeVar

from . import dictionary
from .exceptions import PoolExhaustedError

T = TypeVar("T")

LOCATION_TYPES = ("city", "region", "country", "feature")

_COMPANY_TAIL = re.compile(r",?\s*\b(Inc|LLC|Corp|Ltd|Co|LP|LLP|PC|PLLC|PLC)\.?$", re.IGNORECASE)


def _pick(rng: random.Random, values: Sequence[T], pool: str) -> T:
    if not values:
        raise PoolExhaustedError(f"{pool} pool is empty")
    return values[rng.randrange(len(values))]


def _sample_unique(rng: random.Random, values: Sequence[T], count: int) -> list[T]:
    """Up to ``count`` distinct values; all of them if the pool is smaller."""
    distinct = list(dict.fromkeys(values))
    return rng.sample(distinct, min(max(count, 0), len(distinct)))


class NamePool:
    """Person names."""

    def __init__(
        self,
        rng: random.Random | None = None,
        *,
        first_names: dict[str, Sequence[str]] | None = None,
        last_names: Sequence[str] | None = None,
    ) -> None:
        self.rng = rng or random.Random()
        self.first_names = first_names if first_names is not None else dictionary.FIRST_NAMES
        self.last_names = last_names if last_names is not None else dictionary.LAST_NAMES

    def get_random_first_name(self, gender: str | None = None) -> str:
        selected = gender.lower() if gender else self.rng.choice(("male", "female"))
        names = self.first_names.get(selected) or self.first_names.get("male", ())
        return _pick(self.rng, names, "first name")

    def get_random_last_name(self) -> str:
        return _pick(self.rng, self.last_names, "last name")

    def get_random_full_name(self, gender: str | None = None) -> str:
        return f"{self.get_random_first_name(gender)} {self.get_random_last_name()}"

    def get_random_names(self, count: int, gender: str | None = None) -> list[str]:
        """Distinct full names, capped by the number of possible combinations."""
        if gender:
            firsts = list(self.first_names.get(gender.lower()) or self.first_names.get("male", ()))
        else:
            firsts = [n for names in self.first_names.values() for n in names]
        combos = [f"{f} {l}" for f in dict.fromkeys(firsts) for l in dict.fromkeys(self.last_names)]
        return _sample_unique(self.rng, combos, count)

    def is_likely_name(self, word: str) -> bool:
        if not re.fullmatch(r"[A-Z][a-z]+", word):
            return False
        return any(word in names for names in self.first_names.values()) or word in self.last_names


class CompanyPool:
    """Company names and domains."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()
        self.prefixes = dictionary.COMPANY_PREFIXES
        self.types = dictionary.COMPANY_TYPES
        self.suffixes = dictionary.COMPANY_SUFFIXES
        self.single_word = dictionary.COMPANY_SINGLE_WORD
        self.tlds = dictionary.TLDS

    def get_random_company(self, style: str | None = None) -> str:
        """``style`` is "full" (default), "short" or "domain"."""
        if style == "short":
            return self.get_short_company_name()
        if style == "domain":
            return self.get_domain_name()
        return self.get_full_company_name()

    def get_full_company_name(self) -> str:
        """e.g. "Apex Analytics, Inc" (suffix about 70% of the time)"""
        name = f"{_pick(self.rng, self.prefixes, 'company prefix')} {_pick(self.rng, self.types, 'company type')}"
        if self.rng.random() > 0.3:
            return f"{name}, {_pick(self.rng, self.suffixes, 'company suffix')}"
        return name

    def get_short_company_name(self) -> str:
        if self.rng.random() > 0.6:
            return _pick(self.rng, self.single_word, "company word")
        return f"{_pick(self.rng, self.prefixes, 'company prefix')} {_pick(self.rng, self.types, 'company type')}"

    def get_domain_name(self) -> str:
        """e.g. "apex-labs.io" or "zentrix.com" """
        tld = _pick(self.rng, self.tlds, "tld")
        if self.rng.random() > 0.5:
            return f"{_pick(self.rng, self.single_word, 'company word').lower()}{tld}"
        prefix = _pick(self.rng, self.prefixes, "company prefix").lower()
        kind = _pick(self.rng, self.types, "company type").lower()
        separator = "-" if self.rng.random() > 0.5 else ""
        return f"{prefix}{separator}{kind}{tld}"

    def get_related_domain(self, company_name: str) -> str:
        """Domain built from the first significant word of a company name."""
        words = [w for w in _COMPANY_TAIL.sub("", company_name).split() if len(w) > 2]
        if not words:
            return self.get_domain_name()
        main = re.sub(r"[^a-z0-9]", "", words[0].lower())
        return f"{main}{_pick(self.rng, self.tlds, 'tld')}"

    def get_random_companies(self, count: int, style: str | None = None) -> list[str]:
        """Distinct company names.  Never loops forever on a small pool."""
        seen: dict[str, None] = {}
        misses = 0
        while len(seen) < count and misses < 200:
            name = self.get_random_company(style)
            if name in seen:
                misses += 1
            else:
                seen[name] = None
                misses = 0
        return list(seen)

    def is_likely_company(self, text: str) -> bool:
        if _COMPANY_TAIL.search(text):
            return True
        return any(part in text for part in (*self.prefixes, *self.types, *self.single_word))


class LocationPool:
    """Cities, regions, countries and geographic features."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()
        self.cities = dictionary.LOCATION_CITIES
        self.regions = dictionary.LOCATION_REGIONS
        self.countries = dictionary.LOCATION_COUNTRIES
        self.features = dictionary.LOCATION_FEATURES

    def _sub_pool(self, location_type: str) -> Sequence[str]:
        return {
            "city": self.cities,
            "region": self.regions,
            "country": self.countries,
            "feature": self.features,
        }[location_type]

    def get_random_location(self, location_type: str | None = None) -> str:
        """Sample from one sub-pool; pick the sub-pool at random if untyped."""
        if location_type not in LOCATION_TYPES:
            location_type = self.rng.choice(LOCATION_TYPES)
        return _pick(self.rng, self._sub_pool(location_type), location_type)

    def infer_location_type(self, original: str) -> str:
        """Guess whether ``original`` names a feature, region, country or city."""
        lower = original.lower()
        words = set(re.findall(r"[a-z]+", lower))  # whole words: "Seattle" is not a sea
        if words & set(dictionary.FEATURE_KEYWORDS):
            return "feature"
        if words & set(dictionary.REGION_KEYWORDS):
            return "region"
        stripped = lower.strip()
        if any(stripped == country.lower() for country in dictionary.KNOWN_COUNTRIES):
            return "country"
        if len(original.split()) >= 2:
            return "region"
        return "city"

    def get_similar_replacement(self, original: str) -> str:
        return self.get_random_location(self.infer_location_type(original))

    def get_random_locations(self, count: int, location_type: str | None = None) -> list[str]:
        """Distinct locations, at most as many as the pool holds."""
        if location_type in LOCATION_TYPES:
            values: Sequence[str] = self._sub_pool(location_type)
        else:
            values = (*self.cities, *self.regions, *self.countries, *self.features)
        return _sample_unique(self.rng, values, count)

    def get_stats(self) -> dict[str, int]:
        return {
            "cities": len(self.cities),
            "regions": len(self.regions),
            "countries": len(self.countries),
            "features": len(self.features),
            "total": len(self.cities) + len(self.regions) + len(self.countries) + len(self.features),
        }
