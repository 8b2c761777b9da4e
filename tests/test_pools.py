"""Tests for the name, company and location pools."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import random

import pytest

from snapshield import CompanyPool, LocationPool, NamePool, PoolExhaustedError
from snapshield import dictionary


# ── Names ────────────────────────────────────────────────────────────

def test_first_name_respects_gender():
    pool = NamePool(random.Random(1))
    for _ in range(20):
        assert pool.get_random_first_name("female") in dictionary.FIRST_NAMES["female"]
        assert pool.get_random_first_name("male") in dictionary.FIRST_NAMES["male"]


def test_full_name_has_two_parts():
    first, last = NamePool(random.Random(2)).get_random_full_name().split(" ")
    assert last in dictionary.LAST_NAMES


def test_random_names_are_distinct_and_capped():
    pool = NamePool(random.Random(3))
    names = pool.get_random_names(25)
    assert len(names) == 25
    assert len(set(names)) == 25

    firsts = {n for names in dictionary.FIRST_NAMES.values() for n in names}
    everything = pool.get_random_names(100_000)
    assert len(everything) == len(firsts) * len(set(dictionary.LAST_NAMES))


def test_is_likely_name():
    pool = NamePool()
    assert pool.is_likely_name(dictionary.FIRST_NAMES["male"][0])
    assert pool.is_likely_name(dictionary.LAST_NAMES[0])
    assert not pool.is_likely_name("lowercase")
    assert not pool.is_likely_name("Zzzzzz")


def test_empty_pool_raises():
    pool = NamePool(random.Random(0), last_names=())
    with pytest.raises(PoolExhaustedError):
        pool.get_random_last_name()


# ── Companies ────────────────────────────────────────────────────────

def test_domain_name_has_known_tld():
    pool = CompanyPool(random.Random(4))
    for _ in range(20):
        domain = pool.get_domain_name()
        assert any(domain.endswith(tld) for tld in dictionary.TLDS)
        assert domain == domain.lower()


def test_related_domain_uses_first_significant_word():
    domain = CompanyPool(random.Random(5)).get_related_domain("Globex Widgets, Inc")
    assert domain.startswith("globex")


def test_random_companies_distinct_and_terminate():
    pool = CompanyPool(random.Random(6))
    companies = pool.get_random_companies(5)
    assert len(companies) == 5
    assert len(set(companies)) == 5

    # Far more than the pool can produce: returns what it has instead of hanging.
    short = pool.get_random_companies(500, "short")
    assert len(short) == len(set(short))
    assert len(short) < 500


def test_is_likely_company():
    pool = CompanyPool()
    assert pool.is_likely_company("Initech LLC")
    assert pool.is_likely_company("Apex Analytics")
    assert not pool.is_likely_company("Jane Smith")


# ── Locations ────────────────────────────────────────────────────────

@pytest.mark.parametrize("original, expected", [
    ("Pacific Ocean", "feature"),
    ("Mount Rainier Peak", "feature"),
    ("Greater Boston Area", "region"),
    ("Pacific Northwest", "region"),
    ("France", "country"),
    ("united states", "country"),
    ("Seattle", "city"),
    ("Riverside", "city"),
])
def test_infer_location_type(original, expected):
    assert LocationPool().infer_location_type(original) == expected


def test_similar_replacement_stays_in_sub_pool():
    pool = LocationPool(random.Random(7))
    assert pool.get_similar_replacement("Pacific Ocean") in dictionary.LOCATION_FEATURES
    assert pool.get_similar_replacement("Seattle") in dictionary.LOCATION_CITIES
    assert pool.get_similar_replacement("Canada") in dictionary.LOCATION_COUNTRIES


def test_random_locations_distinct_and_bounded():
    pool = LocationPool(random.Random(8))
    cities = pool.get_random_locations(5, "city")
    assert len(set(cities)) == 5
    assert all(c in dictionary.LOCATION_CITIES for c in cities)

    countries = pool.get_random_locations(1000, "country")
    assert len(countries) == len(set(dictionary.LOCATION_COUNTRIES))


def test_location_stats():
    stats = LocationPool().get_stats()
    assert stats["cities"] == len(dictionary.LOCATION_CITIES)
    assert stats["total"] == (
        stats["cities"] + stats["regions"] + stats["countries"] + stats["features"]
    )


def test_same_seed_same_sequence():
    a = LocationPool(random.Random(42))
    b = LocationPool(random.Random(42))
    assert [a.get_random_location() for _ in range(10)] == [b.get_random_location() for _ in range(10)]
