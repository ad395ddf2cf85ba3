"""Collector configuration."""

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any


@dataclass(frozen=True)
class CollectorConfig:
    """Options for one Collector.

    Attributes:
        scrape_timeout: Seconds a whole scrape cycle may take. Scrapers still
            running at the deadline are cancelled and reported as failed.
            None disables the deadline.
        concurrent: Run scrapers as concurrent tasks instead of one after
            the other.
        enabled_scrapers: Names of the scrapers to run. None runs every
            registered scraper.
        probe_version: Query the server version each cycle and skip scrapers
            that require a newer server.
    """

    scrape_timeout: float | None = None
    concurrent: bool = False
    enabled_scrapers: tuple[str, ...] | None = None
    probe_version: bool = True

    def __post_init__(self) -> None:
        if self.scrape_timeout is not None and self.scrape_timeout <= 0:
            raise ValueError(
                f"scrape_timeout must be positive, got {self.scrape_timeout}"
            )
        if self.enabled_scrapers is not None:
            if isinstance(self.enabled_scrapers, str):
                raise TypeError("enabled_scrapers must be a sequence of names")
            names = tuple(self.enabled_scrapers)
            if any(not name for name in names):
                raise ValueError("enabled_scrapers must not contain empty names")
            object.__setattr__(self, "enabled_scrapers", names)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CollectorConfig":
        """Build a config from plain data, e.g. a parsed YAML section.

        Raises:
            ValueError: If data contains unknown keys or invalid values.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"unknown collector options: {', '.join(unknown)}")
        values = dict(data)
        if values.get("scrape_timeout") is not None:
            values["scrape_timeout"] = float(values["scrape_timeout"])
        return cls(**values)
