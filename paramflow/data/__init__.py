"""
Sample Domains

Ready-made field specs used by the tests and as worked examples.
"""

from paramflow.data.airline import (
    FLIGHTS,
    AirlineBooking,
    AirlineSchedule,
    FlightEntry,
    build_airline_flow_spec,
    build_airline_validation_spec,
)

__all__ = [
    "FLIGHTS",
    "AirlineBooking",
    "AirlineSchedule",
    "FlightEntry",
    "build_airline_flow_spec",
    "build_airline_validation_spec",
]
