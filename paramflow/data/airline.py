"""
Sample Domain - Airline Booking

A small flight schedule and two equivalent field specs over it:
- the validator form, where each rule decides validity and allowed options
  itself (suited to validating an LLM tool call in one pass),
- the options form, where each rule only fetches candidates (suited to
  interactive elicitation, where the same fetcher powers the prompts).

The dependency chain is departure -> arrival -> date -> passengers.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, Field

from ..domain.models import (
    FieldCheckContext,
    FieldRule,
    OptionChoice,
    ValidationErr,
    ValidationOk,
    ValidationResult,
    ValidationSkip,
    same_value,
)
from ..domain.registry import FieldSpecRegistry, SpecBuilder

MAX_PASSENGERS_PER_BOOKING = 9


class AirlineBooking(BaseModel):
    """The domain object: every field is required once resolved."""
    departure: str = Field(..., min_length=1, description="City of departure")
    arrival: str = Field(..., min_length=1, description="City of arrival")
    date: str = Field(..., min_length=1, description="Date of departure")
    passengers: int = Field(..., ge=1, description="Number of passengers")


@dataclass(frozen=True)
class FlightEntry:
    departure: str
    arrival: str
    date: str
    seats: int


FLIGHTS: List[FlightEntry] = [
    FlightEntry("London", "New York", "2026-10-01", 100),
    FlightEntry("London", "New York", "2026-10-02", 1),
    FlightEntry("Berlin", "New York", "2026-10-03", 2),
    FlightEntry("Berlin", "London", "2026-10-04", 2),
    FlightEntry("Paris", "Tokyo", "2026-10-05", 50),
    FlightEntry("New York", "Los Angeles", "2026-10-06", 25),
]


def uniq(values: Iterable[Any]) -> List[Any]:
    """Distinct values, first occurrence order."""
    return list(dict.fromkeys(values))


class AirlineSchedule:
    def __init__(self, flights: Iterable[FlightEntry] = FLIGHTS):
        self.flights = list(flights)

    def get_available_flights(
        self,
        departure: Optional[str] = None,
        arrival: Optional[str] = None,
        date: Optional[str] = None,
        passengers: Optional[int] = None,
    ) -> List[FlightEntry]:
        """Flights matching every given filter; omitted filters match anything."""
        return [
            flight
            for flight in self.flights
            if (departure is None or flight.departure == departure)
            and (arrival is None or flight.arrival == arrival)
            and (date is None or flight.date == date)
            and (passengers is None or flight.seats >= passengers)
        ]

    def max_seats(self, **filters: Any) -> int:
        return max((flight.seats for flight in self.get_available_flights(**filters)), default=0)


# ==============================================================================
# Validator form
# ==============================================================================

def _choose(value: Any, allowed: List[Any]) -> ValidationResult:
    if value is None:
        return ValidationSkip(allowed_options=allowed)
    if any(same_value(option, value) for option in allowed):
        return ValidationOk(normalized_value=value, allowed_options=allowed)
    return ValidationErr(refusal_reason="no matching options", allowed_options=allowed)


def build_airline_validation_spec(schedule: Optional[AirlineSchedule] = None) -> FieldSpecRegistry:
    schedule = schedule or AirlineSchedule()

    def validate_departure(value: Optional[str], context: Dict[str, Any]) -> ValidationResult:
        flights = schedule.get_available_flights(arrival=context.get("arrival"))
        return _choose(value, uniq(f.departure for f in flights))

    async def validate_arrival(value: Optional[str], context: Dict[str, Any]) -> ValidationResult:
        flights = schedule.get_available_flights(departure=context["departure"], date=context.get("date"))
        return _choose(value, uniq(f.arrival for f in flights))

    async def validate_date(value: Optional[str], context: Dict[str, Any]) -> ValidationResult:
        flights = schedule.get_available_flights(
            departure=context["departure"],
            arrival=context["arrival"],
            passengers=context.get("passengers"),
        )
        return _choose(value, uniq(f.date for f in flights))

    async def validate_passengers(value: Optional[int], context: Dict[str, Any]) -> ValidationResult:
        most = schedule.max_seats(
            departure=context["departure"], arrival=context["arrival"], date=context["date"]
        )
        allowed = list(range(1, most + 1))
        if type(value) is int and value > most:
            return ValidationErr(
                refusal_reason=f"not enough seats available ({value} passengers, max is {most})",
                allowed_options=allowed,
            )
        return _choose(value, allowed)

    return (
        SpecBuilder.for_model(AirlineBooking)
        .field(
            "departure",
            influenced_by=["arrival"],
            description="City of departure",
            validate=validate_departure,
        )
        .field(
            "arrival",
            requires=["departure"],
            influenced_by=["date"],
            description="City of arrival",
            validate=validate_arrival,
        )
        .field(
            "date",
            requires=["departure", "arrival"],
            influenced_by=["passengers"],
            description="Date of departure",
            validate=validate_date,
        )
        .field(
            "passengers",
            requires=["departure", "arrival", "date"],
            description="Number of passengers",
            validate=validate_passengers,
        )
        .build()
    )


# ==============================================================================
# Options form
# ==============================================================================

def parse_passengers(raw: Any) -> Optional[int]:
    """Accepts positive integers, or strings holding one; anything else is absent."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw.isdigit():
            return None
        raw = int(raw)
    if isinstance(raw, int) and raw > 0:
        return raw
    return None


def check_booking_size(value: int, context: FieldCheckContext) -> Optional[str]:
    if value > MAX_PASSENGERS_PER_BOOKING:
        return f"at most {MAX_PASSENGERS_PER_BOOKING} passengers per booking"
    return None


def build_airline_flow_spec(schedule: Optional[AirlineSchedule] = None) -> FieldSpecRegistry:
    schedule = schedule or AirlineSchedule()

    async def departures(filters: Dict[str, Any]) -> List[OptionChoice]:
        flights = schedule.get_available_flights(arrival=filters.get("arrival"))
        return [OptionChoice.of(city) for city in uniq(f.departure for f in flights)]

    async def arrivals(filters: Dict[str, Any]) -> List[OptionChoice]:
        flights = schedule.get_available_flights(departure=filters["departure"], date=filters.get("date"))
        return [OptionChoice.of(city) for city in uniq(f.arrival for f in flights)]

    async def dates(filters: Dict[str, Any]) -> List[OptionChoice]:
        flights = schedule.get_available_flights(
            departure=filters["departure"],
            arrival=filters["arrival"],
            passengers=filters.get("passengers"),
        )
        return [OptionChoice.of(date) for date in uniq(f.date for f in flights)]

    def passenger_counts(filters: Dict[str, Any]) -> List[OptionChoice]:
        most = schedule.max_seats(
            departure=filters["departure"], arrival=filters["arrival"], date=filters["date"]
        )
        return [OptionChoice.of(count) for count in range(1, most + 1)]

    return FieldSpecRegistry({
        "departure": FieldRule(
            influenced_by=("arrival",),
            description="City of departure",
            fetch_options=departures,
        ),
        "arrival": FieldRule(
            requires=("departure",),
            influenced_by=("date",),
            description="City of arrival",
            fetch_options=arrivals,
        ),
        "date": FieldRule(
            requires=("departure", "arrival"),
            influenced_by=("passengers",),
            description="Date of departure",
            fetch_options=dates,
        ),
        "passengers": FieldRule(
            requires=("departure", "arrival", "date"),
            description="Number of passengers",
            fetch_options=passenger_counts,
            normalize=parse_passengers,
            validate=check_booking_size,
        ),
    })
