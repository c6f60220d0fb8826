import json
from pathlib import Path
from typing import Iterable

from models.country import CountryInfo

_DATA_PATH = Path(__file__).resolve().parent.parent / "data" / "south_america.json"


class CountryTable:
    """Read-only name -> CountryInfo table."""

    def __init__(self, countries: Iterable[CountryInfo]):
        by_name: dict[str, CountryInfo] = {}
        for country in countries:
            if country.name in by_name:
                raise ValueError(f"Duplicate country name in reference table: {country.name!r}")
            by_name[country.name] = country
        self._by_name = by_name

    @classmethod
    def from_file(cls, path: Path = _DATA_PATH) -> "CountryTable":
        raw = json.loads(path.read_text(encoding="utf-8"))
        return cls(CountryInfo(**c) for c in raw)

    def lookup(self, name: str) -> CountryInfo | None:
        return self._by_name.get(name)

    def all(self) -> list[CountryInfo]:
        return list(self._by_name.values())

    def names(self) -> list[str]:
        return list(self._by_name)

    def __len__(self) -> int:
        return len(self._by_name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name


class NameResolver:
    """Exact match on the display name (the topology's ``name`` property)."""

    strategy = "exact"

    def __init__(self, table: CountryTable):
        self.table = table

    def resolve(self, name: str | None) -> CountryInfo | None:
        if not name:
            return None
        return self.table.lookup(name)


class CasefoldResolver(NameResolver):
    strategy = "casefold"

    def __init__(self, table: CountryTable):
        super().__init__(table)
        self._index = self._build_index()

    def _keys_for(self, country: CountryInfo) -> list[str]:
        return [country.name]

    def _build_index(self) -> dict[str, CountryInfo]:
        index: dict[str, CountryInfo] = {}
        for country in self.table.all():
            for key in self._keys_for(country):
                index.setdefault(_normalize(key), country)
        return index

    def resolve(self, name: str | None) -> CountryInfo | None:
        if not name:
            return None
        return self._index.get(_normalize(name))


class AliasResolver(CasefoldResolver):
    strategy = "alias"

    def _keys_for(self, country: CountryInfo) -> list[str]:
        return [country.name, *country.aliases]


_RESOLVERS: dict[str, type[NameResolver]] = {
    NameResolver.strategy: NameResolver,
    CasefoldResolver.strategy: CasefoldResolver,
    AliasResolver.strategy: AliasResolver,
}


def _normalize(name: str) -> str:
    return " ".join(name.split()).casefold()


def make_resolver(table: CountryTable, strategy: str = "exact") -> NameResolver:
    cls = _RESOLVERS.get(strategy)
    if cls is None:
        raise ValueError(f"Unknown name matching strategy '{strategy}'")
    return cls(table)

