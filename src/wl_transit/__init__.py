"""Static network catalog and realtime monitor polling for Wiener Linien."""

__version__ = "0.1.0"

from wl_transit.data.catalog import StaticCatalog, load_dataset
from wl_transit.data.config import MonitorConfig, get_monitor_config
from wl_transit.errors import (
    DecodeError,
    FeedError,
    ParseError,
    SchemaValidationError,
    TransportError,
    WLTransitError,
)
from wl_transit.models.realtime import MonitorResponse, validate_monitor_response
from wl_transit.models.static import Line, StaticDataset, StopGroup, StopPoint, VehicleKind
from wl_transit.services.realtime_poller import RealtimePoller

__all__ = [
    # Static data
    "StaticCatalog",
    "load_dataset",
    "StaticDataset",
    "Line",
    "StopPoint",
    "StopGroup",
    "VehicleKind",
    # Realtime
    "RealtimePoller",
    "MonitorResponse",
    "validate_monitor_response",
    # Config
    "MonitorConfig",
    "get_monitor_config",
    # Errors
    "WLTransitError",
    "ParseError",
    "FeedError",
    "TransportError",
    "DecodeError",
    "SchemaValidationError",
]
