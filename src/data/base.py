"""Protocol definitions for overlay data sources.

Each dataset pairs a fetcher (network collaborator, returns the raw payload)
with an adapter (pure parser, returns a sub-area -> value map). The engine
only ever sees the adapter's output.
"""

from typing import Any, Protocol, runtime_checkable


class DatasetFetchError(Exception):
    """Upstream source could not be read. Never cached; the resolver degrades to empty data."""


@runtime_checkable
class DatasetAdapter(Protocol):
    def parse(self, payload: Any) -> dict[str, float]:
        """Turn a raw payload into a sub-area -> value map.

        Missing, sentinel and unparseable observations are omitted, never
        mapped to None or zero.
        """
        ...


@runtime_checkable
class MeasureAdapter(DatasetAdapter, Protocol):
    measure_names: list[str]

    def parse_measures(self, payload: Any) -> dict[str, dict[str, float]]:
        """Per-sub-area table of the individual measures behind a composite."""
        ...


@runtime_checkable
class DatasetFetcher(Protocol):
    async def fetch(self) -> Any:
        """Fetch the raw payload. Raises DatasetFetchError if the source is unreachable."""
        ...
