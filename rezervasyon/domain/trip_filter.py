"""
Facets and filters over a collection of trips.

All functions are pure and accept any objects exposing the trip attributes
(ORM rows, schemas, test doubles).
"""

from typing import Iterable, List, Optional, Sequence, Tuple

from rezervasyon.domain.collation import search_fold, sort_values

DEFAULT_PRICE_RANGE = (0.0, 1000.0)

SEARCHABLE_FIELDS = ("company_name", "departure", "destination")


def _unique(trips: Iterable, field: str, locale: str) -> List[str]:
    return sort_values({getattr(trip, field) for trip in trips}, locale)


def unique_companies(trips: Iterable, locale: str = "tr") -> List[str]:
    return _unique(trips, "company_name", locale)


def unique_departures(trips: Iterable, locale: str = "tr") -> List[str]:
    return _unique(trips, "departure", locale)


def unique_destinations(trips: Iterable, locale: str = "tr") -> List[str]:
    return _unique(trips, "destination", locale)


def unique_dates(trips: Iterable, locale: str = "tr") -> List[str]:
    return _unique(trips, "date", locale)


def price_range(trips: Iterable) -> Tuple[float, float]:
    prices = [trip.price for trip in trips]
    if not prices:
        return DEFAULT_PRICE_RANGE
    return min(prices), max(prices)


def filter_by_query(trips: Sequence, query: Optional[str]) -> List:
    if query is None or not query.strip():
        return list(trips)
    needle = search_fold(query)
    return [
        trip for trip in trips
        if any(needle in search_fold(getattr(trip, field)) for field in SEARCHABLE_FIELDS)
    ]


def filter_trips(
    trips: Sequence,
    company: Optional[str] = None,
    departure: Optional[str] = None,
    destination: Optional[str] = None,
    date: Optional[str] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
) -> List:
    """Narrow trips by exact facet values and an inclusive price window."""
    facets = {
        "company_name": company,
        "departure": departure,
        "destination": destination,
        "date": date,
    }
    facets = {field: value for field, value in facets.items() if value}

    result = []
    for trip in trips:
        if any(getattr(trip, field) != value for field, value in facets.items()):
            continue
        if min_price is not None and trip.price < min_price:
            continue
        if max_price is not None and trip.price > max_price:
            continue
        result.append(trip)
    return result
