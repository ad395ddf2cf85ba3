"""Registry mapping scraper names to scraper instances."""

from collections.abc import Iterable, Iterator

from mysqlmetrics.core.scrapers.base import Scraper
from mysqlmetrics.core.scrapers.master_status import MasterStatusScraper
from mysqlmetrics.core.scrapers.slave_status import SlaveStatusScraper


class ScraperRegistry:
    """Ordered collection of scrapers keyed by their unique name.

    Iteration yields scrapers in registration order.
    """

    def __init__(self, scrapers: Iterable[Scraper] = ()) -> None:
        self._scrapers: dict[str, Scraper] = {}
        for scraper in scrapers:
            self.register(scraper)

    def register(self, scraper: Scraper) -> None:
        """Add a scraper.

        Raises:
            TypeError: If scraper is not a Scraper.
            ValueError: If a scraper with the same name is already registered.
        """
        if not isinstance(scraper, Scraper):
            raise TypeError(f"scraper must be a Scraper, got {type(scraper).__name__}")
        if not scraper.name:
            raise ValueError(f"{scraper!r} has no name")
        if scraper.name in self._scrapers:
            raise ValueError(f"scraper {scraper.name!r} already registered")
        self._scrapers[scraper.name] = scraper

    def lookup(self, name: str) -> Scraper | None:
        """Return the scraper registered under name, or None."""
        return self._scrapers.get(name)

    def select(self, names: Iterable[str]) -> list[Scraper]:
        """Return the scrapers for names, in the order given.

        Raises:
            KeyError: If a name is not registered.
        """
        selected = []
        for name in names:
            if name not in self._scrapers:
                raise KeyError(f"unknown scraper {name!r}")
            selected.append(self._scrapers[name])
        return selected

    def names(self) -> list[str]:
        return list(self._scrapers)

    def __iter__(self) -> Iterator[Scraper]:
        return iter(self._scrapers.values())

    def __len__(self) -> int:
        return len(self._scrapers)

    def __contains__(self, name: object) -> bool:
        return name in self._scrapers


def default_registry() -> ScraperRegistry:
    """Return a registry holding every built-in scraper."""
    return ScraperRegistry([MasterStatusScraper(), SlaveStatusScraper()])
