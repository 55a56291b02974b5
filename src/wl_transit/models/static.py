"""Pydantic models for the static network snapshot.

Mirrors the JSON produced by the CSV export: camelCase on the wire,
snake_case attributes in Python. Scalars are strict, so "301" is not an id
and "yes" is not a boolean.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, StrictBool, StrictFloat, StrictInt, StrictStr
from pydantic.alias_generators import to_camel


class VehicleKind(str, Enum):
    """Means of transport a line is operated with."""

    METRO = "ptMetro"
    TRAM = "ptTram"
    TRAM_WLB = "ptTramWLB"  # Badner Bahn
    RUF_BUS = "ptRufBus"  # on-demand bus
    BUS_CITY = "ptBusCity"
    BUS_NIGHT = "ptBusNight"
    TRAIN_S = "ptTrainS"


class _SnapshotModel(BaseModel):
    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Line(_SnapshotModel):
    """A transit line (e.g. tram "1" has id 101, metro "U1" has id 301)."""

    id: StrictInt
    name: StrictStr
    realtime: StrictBool
    vehicle: VehicleKind


class StopPoint(_SnapshotModel):
    """A single physical platform, served by one or more lines."""

    id: StrictInt
    diva: StrictInt  # stop group this point belongs to
    name: StrictStr
    municipality: StrictStr
    municipality_id: StrictInt
    longitude: StrictFloat
    latitude: StrictFloat
    lines: list[StrictInt]  # line ids stopping here


class StopGroup(_SnapshotModel):
    """All stop points sharing one DIVA area code."""

    diva: StrictInt
    name: StrictStr
    municipality: StrictStr
    municipality_id: StrictInt
    longitude: StrictFloat
    latitude: StrictFloat
    stops: list[StrictInt]  # stop point ids


class StaticDataset(_SnapshotModel):
    """The static snapshot as a whole, as stored in one JSON file."""

    lines: list[Line] = []
    stop_points: list[StopPoint] = []
    stop_groups: list[StopGroup] = []
