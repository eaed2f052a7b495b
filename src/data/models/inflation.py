"""Regional inflation dataset models.

The dataset is produced by an external multi-source inflation collaborator
and keyed by region name (``"USA"``, ``"Europe"``, ...).
"""

from dataclasses import dataclass, field
from typing import Any, Mapping

from src.data.models.enums import Region


@dataclass(frozen=True)
class CountryInflation:
    """One per-country inflation sample.

    Attributes:
        country: Country name or ISO code.
        value: Inflation rate (%).
        year: Observation year.
        currency: ISO currency code if known.
    """

    country: str
    value: float
    year: int | None = None
    currency: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CountryInflation":
        """Create instance from dictionary."""
        year = data.get("year")
        return cls(
            country=str(data.get("country", "")),
            value=float(data["value"]),
            year=int(year) if year is not None else None,
            currency=data.get("currency"),
        )


@dataclass(frozen=True)
class RegionalInflation:
    """Inflation summary for one region.

    Attributes:
        region: Region name.
        avg_rate: Regional average inflation (%), None when the source had none.
        countries: Per-country samples.
        stablecoins: Stablecoins the source associates with the region.
    """

    region: str
    avg_rate: float | None
    countries: tuple[CountryInflation, ...] = field(default_factory=tuple)
    stablecoins: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, region: str, data: dict[str, Any]) -> "RegionalInflation":
        """Create instance from dictionary.

        Accepts ``avg_rate`` or the ``avgRate`` key used by the inflation API.
        """
        raw_rate = data["avg_rate"] if "avg_rate" in data else data.get("avgRate")
        return cls(
            region=str(data.get("region", region)),
            avg_rate=float(raw_rate) if raw_rate is not None else None,
            countries=tuple(
                CountryInflation.from_dict(c) for c in data.get("countries", []) or []
            ),
            stablecoins=tuple(data.get("stablecoins", []) or []),
        )


InflationDataset = Mapping[str, RegionalInflation]


def parse_inflation_dataset(data: Mapping[str, Any]) -> dict[str, RegionalInflation]:
    """Parse a raw ``region -> {avgRate, countries}`` payload.

    Plain numbers are accepted as shorthand for ``{"avg_rate": number}``.
    Region keys are canonicalized ("latam" -> "LatAm"); unknown names are kept
    verbatim.
    """
    dataset: dict[str, RegionalInflation] = {}
    for raw_region, entry in data.items():
        region = Region.parse_or_unknown(raw_region)
        key = raw_region if region is Region.UNKNOWN else region.value
        if isinstance(entry, RegionalInflation):
            dataset[key] = entry
        elif isinstance(entry, (int, float)):
            dataset[key] = RegionalInflation(region=key, avg_rate=float(entry))
        else:
            dataset[key] = RegionalInflation.from_dict(key, entry)
    return dataset
