"""Data-loading boundary: reads the generator's JSON files into validated records.

File layout under the data directory:

    sun/<location>.json           list of daily Sun records
    moon/<location>.json          list of daily Moon records
    stars/catalog.json            [{"name", "ra", "dec", "mag"}, ...]
    constellations-lines.json     GeoJSON FeatureCollection of MultiLineStrings

Records are validated here once; the engine never re-validates them.
"""

import json
import logging
import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from cielo.angle_utils import geojson_to_equatorial, normalize_angle_deg, ra_hours_to_deg
from cielo.models import (
    Constellation,
    EquatorialPoint,
    HourlySample,
    MoonDailyRecord,
    StarCatalogEntry,
    SunDailyRecord,
)
from cielo.moon_phase import normalize_phase
from cielo.time_utils import parse_clock

logger = logging.getLogger(__name__)


class DataFormatError(ValueError):
    """A data file does not have the expected shape."""


@dataclass(frozen=True)
class DataSet:
    """Everything loaded once at startup. Owned by the caller, read-only."""

    sun: tuple[SunDailyRecord, ...]
    moon: tuple[MoonDailyRecord, ...]
    stars: tuple[StarCatalogEntry, ...]
    constellations: tuple[Constellation, ...] = ()

    def sun_for(self, key: str) -> SunDailyRecord | None:
        return record_for_date(self.sun, key)

    def moon_for(self, key: str) -> MoonDailyRecord | None:
        return record_for_date(self.moon, key)


def _read_json(path: Path) -> Any:
    with path.open(encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise DataFormatError(f"{path}: invalid JSON ({e})") from e


def _field(record: Mapping[str, Any], key: str, where: str) -> Any:
    if key not in record or record[key] is None:
        raise DataFormatError(f"{where}: missing '{key}'")
    return record[key]


def _number(record: Mapping[str, Any], key: str, where: str) -> float:
    value = _field(record, key, where)
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise DataFormatError(f"{where}: '{key}' is not a number ({value!r})") from e
    if not math.isfinite(number):
        raise DataFormatError(f"{where}: '{key}' is not finite")
    return number


def _optional_number(record: Mapping[str, Any], key: str, where: str) -> float | None:
    if record.get(key) is None:
        return None
    return _number(record, key, where)


def _clock(record: Mapping[str, Any], key: str, where: str) -> str:
    value = _field(record, key, where)
    try:
        parse_clock(str(value))
    except ValueError as e:
        raise DataFormatError(f"{where}: {e}") from e
    return str(value)


def _optional_clock(record: Mapping[str, Any], key: str, where: str) -> str | None:
    if record.get(key) is None:
        return None
    return _clock(record, key, where)


def _records(data: Any, source: Path) -> Sequence[Mapping[str, Any]]:
    if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
        raise DataFormatError(f"{source}: expected a list of objects")
    return data


def parse_hourly(raw: Any, where: str) -> tuple[HourlySample, ...]:
    """Parse an ``hourlyData`` array."""
    if not isinstance(raw, list):
        raise DataFormatError(f"{where}: 'hourlyData' must be a list")
    samples: list[HourlySample] = []
    for i, entry in enumerate(raw):
        loc = f"{where} hourlyData[{i}]"
        if not isinstance(entry, dict):
            raise DataFormatError(f"{loc}: expected an object")
        hour = _number(entry, "hour", loc)
        if not 0 <= hour <= 23 or hour != int(hour):
            raise DataFormatError(f"{loc}: hour out of range ({hour})")
        altitude = _number(entry, "altitude", loc)
        samples.append(
            HourlySample(
                hour=int(hour),
                azimuth_deg=normalize_angle_deg(_number(entry, "azimuth", loc)),
                altitude_deg=max(-90.0, min(90.0, altitude)),
                is_visible=bool(entry.get("isVisible", altitude > 0)),
            )
        )
    return tuple(samples)


def parse_sun_records(data: Any, source: Path = Path("<sun>")) -> tuple[SunDailyRecord, ...]:
    records: list[SunDailyRecord] = []
    for i, raw in enumerate(_records(data, source)):
        where = f"{source}[{i}]"
        records.append(
            SunDailyRecord(
                date=str(_field(raw, "date", where)),
                sunrise=_clock(raw, "sunrise", where),
                sunset=_clock(raw, "sunset", where),
                solar_noon=_clock(raw, "solarNoon", where),
                hourly=parse_hourly(_field(raw, "hourlyData", where), where),
                azimuth_sunrise=_optional_number(raw, "azimuthSunrise", where),
                azimuth_sunset=_optional_number(raw, "azimuthSunset", where),
                azimuth_noon=_optional_number(raw, "azimuthNoon", where),
                altitude_noon=_optional_number(raw, "altitudeNoon", where),
            )
        )
    return tuple(records)


def parse_moon_records(data: Any, source: Path = Path("<moon>")) -> tuple[MoonDailyRecord, ...]:
    records: list[MoonDailyRecord] = []
    for i, raw in enumerate(_records(data, source)):
        where = f"{source}[{i}]"
        records.append(
            MoonDailyRecord(
                date=str(_field(raw, "date", where)),
                phase=normalize_phase(_optional_number(raw, "phase", where)),
                illumination=_optional_number(raw, "illumination", where),
                hourly=parse_hourly(_field(raw, "hourlyData", where), where),
                moonrise=_optional_clock(raw, "moonrise", where),
                moonset=_optional_clock(raw, "moonset", where),
            )
        )
    return tuple(records)


def parse_star_catalog(
    data: Any, source: Path = Path("<stars>"), ra_unit: str = "degrees"
) -> tuple[StarCatalogEntry, ...]:
    """Parse a star list. Entries with non-numeric coordinates are skipped.

    Args:
        data: Decoded JSON list.
        source: File name used in messages.
        ra_unit: "degrees" (processed catalog) or "hours" (hand-made list).
    """
    if ra_unit not in ("degrees", "hours"):
        raise ValueError(f"unknown RA unit: {ra_unit}")
    stars: list[StarCatalogEntry] = []
    skipped = 0
    for i, raw in enumerate(_records(data, source)):
        where = f"{source}[{i}]"
        try:
            ra = _number(raw, "ra", where)
            dec = _number(raw, "dec", where)
            mag = _number(raw, "mag", where)
        except DataFormatError as e:
            logger.debug("Skipping star: %s", e)
            skipped += 1
            continue
        if not -90 <= dec <= 90:
            skipped += 1
            continue
        stars.append(
            StarCatalogEntry(
                ra_deg=ra_hours_to_deg(ra) if ra_unit == "hours" else normalize_angle_deg(ra),
                dec_deg=dec,
                magnitude=mag,
                name=raw.get("name"),
            )
        )
    if skipped:
        logger.warning("%s: skipped %d malformed stars", source, skipped)
    return tuple(stars)


def parse_constellation_lines(
    data: Any, source: Path = Path("<constellations>")
) -> tuple[Constellation, ...]:
    """Parse a GeoJSON FeatureCollection of constellation MultiLineStrings.

    Feature longitudes are right ascensions in [-180, 180); features of any
    other geometry type are ignored.
    """
    if not isinstance(data, dict) or not isinstance(data.get("features"), list):
        raise DataFormatError(f"{source}: expected a GeoJSON FeatureCollection")
    constellations: list[Constellation] = []
    for i, feature in enumerate(data["features"]):
        where = f"{source} features[{i}]"
        if not isinstance(feature, dict):
            raise DataFormatError(f"{where}: expected an object")
        geometry = feature.get("geometry") or {}
        if geometry.get("type") != "MultiLineString":
            continue
        lines: list[tuple[EquatorialPoint, ...]] = []
        for line in geometry.get("coordinates", []):
            try:
                vertices = tuple(
                    EquatorialPoint(*geojson_to_equatorial(float(lon), float(lat)))
                    for lon, lat, *_ in line
                )
            except (TypeError, ValueError) as e:
                raise DataFormatError(f"{where}: bad coordinates ({e})") from e
            lines.append(vertices)
        properties = feature.get("properties") or {}
        identifier = str(feature.get("id") or properties.get("id") or f"#{i}")
        constellations.append(
            Constellation(
                identifier=identifier,
                lines=tuple(lines),
                name=properties.get("name"),
            )
        )
    return tuple(constellations)


def load_sun_records(path: Path) -> tuple[SunDailyRecord, ...]:
    records = parse_sun_records(_read_json(path), path)
    logger.info("Loaded %d days of Sun data from %s", len(records), path)
    return records


def load_moon_records(path: Path) -> tuple[MoonDailyRecord, ...]:
    records = parse_moon_records(_read_json(path), path)
    logger.info("Loaded %d days of Moon data from %s", len(records), path)
    return records


def load_star_catalog(path: Path, ra_unit: str = "degrees") -> tuple[StarCatalogEntry, ...]:
    stars = parse_star_catalog(_read_json(path), path, ra_unit)
    logger.info("Loaded %d stars from %s", len(stars), path)
    return stars


def load_constellation_lines(path: Path) -> tuple[Constellation, ...]:
    constellations = parse_constellation_lines(_read_json(path), path)
    logger.info("Loaded %d constellations from %s", len(constellations), path)
    return constellations


def load_dataset(
    data_dir: Path, location: str = "barcelona", ra_unit: str = "degrees"
) -> DataSet:
    """Load every data file once.

    Constellation lines are optional; the other files are required.
    ``ra_unit`` is passed to the star catalog parser.

    Raises:
        FileNotFoundError: A required file is missing.
        DataFormatError: A file is malformed.
    """
    lines_path = data_dir / "constellations-lines.json"
    constellations: tuple[Constellation, ...] = ()
    if lines_path.exists():
        constellations = load_constellation_lines(lines_path)
    else:
        logger.info("No constellation lines at %s", lines_path)
    return DataSet(
        sun=load_sun_records(data_dir / "sun" / f"{location}.json"),
        moon=load_moon_records(data_dir / "moon" / f"{location}.json"),
        stars=load_star_catalog(data_dir / "stars" / "catalog.json", ra_unit),
        constellations=constellations,
    )


def record_for_date(records: Iterable[Any], key: str) -> Any | None:
    """First record whose ``date`` equals ``key``, or None."""
    return next((r for r in records if r.date == key), None)
