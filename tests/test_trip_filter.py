"""
Tests for trip facets, price range and search filters.
"""

from rezervasyon.domain import trip_filter
from rezervasyon.domain.collation import search_fold, sort_values
from tests.conftest import make_trip


# ========== unique_companies ==========

def test_unique_companies_sorted_and_deduplicated(sample_trips):
    companies = trip_filter.unique_companies(sample_trips)
    assert companies == ["Kamil Koç", "Metro Turizm", "THY"]
    assert companies.count("Metro Turizm") == 1


def test_unique_companies_empty():
    assert trip_filter.unique_companies([]) == []


# ========== unique_departures / unique_destinations ==========

def test_unique_departures(sample_trips):
    assert trip_filter.unique_departures(sample_trips) == ["Ankara", "İstanbul"]


def test_unique_destinations(sample_trips):
    assert trip_filter.unique_destinations(sample_trips) == ["Ankara", "Antalya", "İzmir"]


def test_unique_places_empty():
    assert trip_filter.unique_departures([]) == []
    assert trip_filter.unique_destinations([]) == []


# ========== unique_dates ==========

def test_unique_dates(sample_trips):
    dates = trip_filter.unique_dates(sample_trips)
    assert dates == ["2025-01-15", "2025-01-16", "2025-01-17"]
    assert len(dates) <= len(sample_trips)


def test_unique_dates_empty():
    assert trip_filter.unique_dates([]) == []


# ========== price_range ==========

def test_price_range(sample_trips):
    assert trip_filter.price_range(sample_trips) == (500.0, 1500.0)


def test_price_range_empty_defaults():
    assert trip_filter.price_range([]) == (0.0, 1000.0)


def test_price_range_single_trip():
    assert trip_filter.price_range([make_trip(price=750.0)]) == (750.0, 750.0)


# ========== filter_by_query ==========

def test_blank_query_returns_all_in_order(sample_trips):
    assert trip_filter.filter_by_query(sample_trips, "") == sample_trips
    assert trip_filter.filter_by_query(sample_trips, "   ") == sample_trips
    assert trip_filter.filter_by_query(sample_trips, None) == sample_trips


def test_query_matches_company_case_insensitive(sample_trips):
    result = trip_filter.filter_by_query(sample_trips, "metro")
    assert [t.id for t in result] == [1, 4]


def test_query_matches_departure_or_destination(sample_trips):
    result = trip_filter.filter_by_query(sample_trips, "ankara")
    assert [t.id for t in result] == [1, 2]


def test_query_folds_dotted_and_dotless_i(sample_trips):
    assert [t.id for t in trip_filter.filter_by_query(sample_trips, "izmir")] == [2, 3]
    assert [t.id for t in trip_filter.filter_by_query(sample_trips, "IZMIR")] == [2, 3]
    assert [t.id for t in trip_filter.filter_by_query(sample_trips, "istanbul")] == [1, 3, 4]


def test_query_without_match(sample_trips):
    assert trip_filter.filter_by_query(sample_trips, "Trabzon") == []


# ========== filter_trips ==========

def test_filter_trips_by_facets(sample_trips):
    result = trip_filter.filter_trips(sample_trips, departure="İstanbul", date="2025-01-15")
    assert [t.id for t in result] == [1, 3]


def test_filter_trips_by_price_window(sample_trips):
    result = trip_filter.filter_trips(sample_trips, min_price=600.0, max_price=800.0)
    assert [t.id for t in result] == [2, 4]


def test_filter_trips_without_constraints(sample_trips):
    assert trip_filter.filter_trips(sample_trips) == sample_trips


# ========== collation ==========

def test_turkish_alphabet_order():
    cities = ["Zonguldak", "Çanakkale", "Bursa", "Ankara", "Ağrı"]
    assert sort_values(cities, "tr") == ["Ağrı", "Ankara", "Bursa", "Çanakkale", "Zonguldak"]


def test_dotless_i_sorts_before_dotted_i():
    cities = ["Ödemiş", "İzmir", "Ordu", "Isparta"]
    assert sort_values(cities, "tr_TR") == ["Isparta", "İzmir", "Ordu", "Ödemiş"]


def test_non_turkish_locale_falls_back_to_casefold():
    assert sort_values(["beta", "Alpha", "gamma"], "en") == ["Alpha", "beta", "gamma"]


def test_search_fold():
    assert search_fold("İSTANBUL") == search_fold("istanbul") == "istanbul"
    assert search_fold("Iğdır") == "iğdir"
