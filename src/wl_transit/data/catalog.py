"""Read-only lookup tables over the static network snapshot."""

import logging
from pathlib import Path

from pydantic import ValidationError

from wl_transit.errors import ParseError
from wl_transit.models.static import Line, StaticDataset, StopGroup, StopPoint

logger = logging.getLogger(__name__)


def load_dataset(path: Path) -> StaticDataset:
    """Load and validate the static snapshot JSON file.

    Args:
        path: Path to the snapshot (e.g. data/wl-data.json).

    Returns:
        The parsed StaticDataset.

    Raises:
        FileNotFoundError: If the snapshot file doesn't exist.
        ParseError: If the file is not JSON or a field has the wrong type.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Static snapshot not found at {path}")

    try:
        dataset = StaticDataset.model_validate_json(path.read_bytes())
    except ValidationError as e:
        raise ParseError(f"Malformed static snapshot {path}: {e}") from e

    logger.info(
        f"Loaded {len(dataset.lines):,} lines, {len(dataset.stop_points):,} stop points "
        f"and {len(dataset.stop_groups):,} stop groups from {path}"
    )
    return dataset


class StaticCatalog:
    """Immutable id-indexed view over a StaticDataset.

    Dangling references (a group listing an unknown stop, a stop listing an
    unknown line) never fail construction; they are skipped on resolution.
    """

    def __init__(self, dataset: StaticDataset):
        self._lines = tuple(dataset.lines)
        self._lines_by_id: dict[int, Line] = {line.id: line for line in self._lines}

        self._stop_points = tuple(dataset.stop_points)
        self._stop_points_by_id: dict[int, StopPoint] = {sp.id: sp for sp in self._stop_points}

        self._stop_groups = tuple(dataset.stop_groups)
        self._stop_groups_by_diva: dict[int, StopGroup] = {g.diva: g for g in self._stop_groups}

    @classmethod
    def from_file(cls, path: Path) -> "StaticCatalog":
        """Build a catalog from a snapshot file. See load_dataset()."""
        return cls(load_dataset(path))

    def get_lines(self) -> list[Line]:
        return list(self._lines)

    def get_line_by_id(self, line_id: int) -> Line | None:
        """Get a line by its id (e.g. tram "1" has id 101)."""
        return self._lines_by_id.get(line_id)

    def get_stop_points(self) -> list[StopPoint]:
        return list(self._stop_points)

    def get_stop_point_by_id(self, stop_id: int) -> StopPoint | None:
        return self._stop_points_by_id.get(stop_id)

    def get_stop_points_by_diva(self, diva: int) -> list[StopPoint]:
        """Get the stop points of a stop group, in the group's recorded order.

        Args:
            diva: Area code of the stop group.

        Returns:
            Resolvable stop points of the group; empty if the group is unknown.
        """
        group = self.get_stop_group_by_diva(diva)
        if group is None:
            return []

        points: list[StopPoint] = []
        for stop_id in group.stops:
            point = self._stop_points_by_id.get(stop_id)
            if point is None:
                continue
            points.append(point)
        return points

    def get_stop_groups(self) -> list[StopGroup]:
        return list(self._stop_groups)

    def get_stop_group_by_diva(self, diva: int) -> StopGroup | None:
        return self._stop_groups_by_diva.get(diva)

    def find_stop_points_by_name(self, name: str) -> list[StopPoint]:
        """Find stop points whose name contains the query (case-insensitive).

        Args:
            name: Stop name or partial name (e.g. "Volkstheater").

        Returns:
            Matching stop points in snapshot order.
        """
        query = name.strip().casefold()
        if not query:
            return []
        return [sp for sp in self._stop_points if query in sp.name.casefold()]

    def get_lines_for_stop_group(self, diva: int) -> list[Line]:
        """Get the distinct lines serving any stop point of a group.

        Lines are returned in first-seen order across the group's stop points;
        unknown line ids are skipped.
        """
        seen: set[int] = set()
        lines: list[Line] = []
        for point in self.get_stop_points_by_diva(diva):
            for line_id in point.lines:
                if line_id in seen:
                    continue
                seen.add(line_id)
                line = self._lines_by_id.get(line_id)
                if line is not None:
                    lines.append(line)
        return lines
