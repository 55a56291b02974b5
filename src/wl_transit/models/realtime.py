"""Pydantic models and validation for the realtime monitor feed.

These models represent the subset of the monitor response we actually use.
The API returns many more fields (stop geometry, line colours, traffic info
category groups, ...); unknown fields are ignored so upstream additions never
break validation. Primitive kinds are checked strictly: a countdown sent as
"5" is a schema failure, not a coercion.
"""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr, ValidationError
from pydantic.alias_generators import to_camel

from wl_transit.errors import SchemaIssue, SchemaValidationError

NonNegativeStrictInt = Annotated[StrictInt, Field(ge=0)]


class _FeedModel(BaseModel):
    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class TrafficInfoCategory(_FeedModel):
    """Category of traffic info (e.g. elevator outages)."""

    id: NonNegativeStrictInt
    name: StrictStr
    title: StrictStr


class TrafficInfoTime(_FeedModel):
    start: StrictStr
    end: StrictStr


class TrafficInfo(_FeedModel):
    """A single disruption or advisory, e.g. an outage."""

    ref_traffic_info_category_id: NonNegativeStrictInt
    title: StrictStr
    description: StrictStr
    time: TrafficInfoTime
    related_lines: list[StrictStr]
    related_stops: list[NonNegativeStrictInt]


class DepartureTime(_FeedModel):
    time_planned: StrictStr  # ISO-like timestamp, kept opaque
    time_real: StrictStr | None = None
    countdown: NonNegativeStrictInt  # minutes


class DepartureVehicle(_FeedModel):
    """Per-departure line details.

    Individual departures can deviate from their line, e.g. a vehicle
    terminating early.
    """

    name: StrictStr
    towards: StrictStr
    direction: StrictStr  # "H" or "R"
    barrier_free: StrictBool
    folding_ramp: StrictBool | None = None
    realtime_supported: StrictBool
    trafficjam: StrictBool
    type: StrictStr
    line_id: NonNegativeStrictInt | None = None


class Departure(_FeedModel):
    departure_time: DepartureTime
    vehicle: DepartureVehicle | None = None


class Departures(_FeedModel):
    departure: list[Departure] | None = None


class MonitoredLine(_FeedModel):
    """A line at a monitored stop with its next departures."""

    name: StrictStr
    towards: StrictStr
    direction: StrictStr  # "H" or "R" to distinguish the two directions
    barrier_free: StrictBool | None = None
    realtime_supported: StrictBool | None = None
    trafficjam: StrictBool | None = None
    type: StrictStr
    line_id: NonNegativeStrictInt | None = None
    departures: Departures


class LocationStopProperties(_FeedModel):
    name: StrictStr  # the DIVA number, as a string
    title: StrictStr


class LocationStop(_FeedModel):
    properties: LocationStopProperties


class StopMonitor(_FeedModel):
    """Departures for one monitored stop."""

    location_stop: LocationStop
    lines: list[MonitoredLine] | None = None

    @property
    def diva(self) -> int | None:
        """The monitored stop group's DIVA, if the name is numeric."""
        name = self.location_stop.properties.name
        return int(name) if name.isdecimal() else None


class MonitorData(_FeedModel):
    traffic_info_categories: list[TrafficInfoCategory] | None = None
    traffic_infos: list[TrafficInfo] | None = None
    monitors: list[StopMonitor]


class MonitorResponse(_FeedModel):
    """Top-level response from the monitor endpoint."""

    data: MonitorData


def validate_monitor_response(payload: Any) -> MonitorResponse:
    """Validate a decoded JSON payload against the monitor feed contract.

    Pure function: no I/O, safe to call on any value.

    Args:
        payload: The decoded JSON body (any type).

    Returns:
        The validated MonitorResponse.

    Raises:
        SchemaValidationError: If any required field is missing or has the
            wrong kind. Nothing partial is returned.
    """
    try:
        return MonitorResponse.model_validate(payload)
    except ValidationError as e:
        issues = [
            SchemaIssue(
                path=".".join(str(part) for part in error["loc"]),
                message=error["msg"],
                kind=error["type"],
            )
            for error in e.errors()
        ]
        raise SchemaValidationError(issues) from e
