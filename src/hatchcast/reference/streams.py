"""Monitored trout streams and their USGS gauging stations.

Coordinates are a representative access point on each stream and are what the
weather lookup uses. Station ids are USGS site numbers; a stream may span
several gauges along its length.
"""

from __future__ import annotations

import math

from hatchcast.schemas import Coordinates, Location, Region, State


def _stream(
    id: str,  # noqa: A002
    name: str,
    region: Region,
    state: State,
    station_ids: tuple[str, ...],
    lat: float,
    lon: float,
) -> Location:
    return Location(
        id=id,
        name=name,
        region=region,
        state=state,
        station_ids=station_ids,
        coordinates=Coordinates(latitude=lat, longitude=lon),
    )


# fmt: off
STREAMS: tuple[Location, ...] = (
    # Catskills
    _stream("beaverkill", "Beaverkill", Region.CATSKILLS, State.NY, ("01420500",), 41.9365, -74.9201),
    _stream("willowemoc", "Willowemoc Creek", Region.CATSKILLS, State.NY, ("01419500",), 41.9001, -74.8254),
    _stream("esopus", "Esopus Creek", Region.CATSKILLS, State.NY, ("01362200", "01362500", "01364500"), 42.0459, -74.2768),
    _stream("neversink", "Neversink River", Region.CATSKILLS, State.NY, ("01434017", "01434021", "01434498"), 41.8601, -74.5854),
    # Delaware tailwaters
    _stream("east-branch-delaware", "East Branch Delaware River", Region.DELAWARE, State.NY,
            ("01413500", "01417000", "01417500", "01421000", "01421500"), 42.1379, -74.6574),
    _stream("west-branch-delaware", "West Branch Delaware River", Region.DELAWARE, State.NY,
            ("01423000", "01425000", "01426500", "01427000"), 42.0215, -75.1154),
    # Croton watershed
    _stream("east-branch-croton", "East Branch Croton River", Region.CROTON, State.NY,
            ("0137449480", "01374505", "01374531"), 41.3945, -73.6074),
    _stream("west-branch-croton", "West Branch Croton River", Region.CROTON, State.NY,
            ("01374559", "01374581", "0137462010"), 41.4704, -73.7595),
    _stream("middle-branch-croton", "Middle Branch Croton River", Region.CROTON, State.NY, ("01374654",), 41.4321, -73.6517),
    # New Jersey
    _stream("south-branch-raritan", "South Branch Raritan River", Region.RARITAN, State.NJ, ("01396500", "01398102"), 40.6682, -74.8971),
    _stream("north-branch-raritan", "North Branch Raritan River", Region.RARITAN, State.NJ, ("01400000",), 40.5654, -74.6354),
    _stream("raritan-main", "Raritan River (Main Stem)", Region.RARITAN, State.NJ, ("01400500",), 40.5401, -74.5854),
    _stream("flat-brook", "Flat Brook", Region.RARITAN, State.NJ, ("01440000",), 41.1154, -74.9501),
    _stream("pequest", "Pequest River", Region.RARITAN, State.NJ, ("01445500",), 40.9254, -74.9154),
    # Connecticut
    _stream("farmington", "Farmington River", Region.CONNECTICUT, State.CT, ("01186000", "01188090", "01189995"), 41.9628, -73.0176),
    _stream("housatonic", "Housatonic River", Region.CONNECTICUT, State.CT, ("01199000", "01200500", "01200600"), 41.9572, -73.3693),
    _stream("naugatuck", "Naugatuck River", Region.CONNECTICUT, State.CT, ("01206900", "01208500"), 41.6736, -73.0695),
    _stream("shetucket", "Shetucket River", Region.CONNECTICUT, State.CT, ("01122500", "011230695"), 41.7003, -72.1820),
    # North Carolina high country
    _stream("watauga", "Watauga River", Region.NC_HIGHCOUNTRY, State.NC, ("03479000",), 36.2392, -81.8222),
    _stream("south-fork-new", "South Fork New River", Region.NC_HIGHCOUNTRY, State.NC, ("03161000",), 36.3933, -81.4069),
    _stream("elk-creek-nc", "Elk Creek", Region.NC_HIGHCOUNTRY, State.NC, ("02111180",), 36.0714, -81.4031),
    # North Carolina foothills
    _stream("linville", "Linville River", Region.NC_FOOTHILLS, State.NC, ("02138500",), 35.7956, -81.8911),
    _stream("wilson-creek", "Wilson Creek", Region.NC_FOOTHILLS, State.NC, ("02140510",), 35.8989, -81.7159),
    _stream("johns-river", "Johns River", Region.NC_FOOTHILLS, State.NC, ("02140991",), 35.8336, -81.7119),
    _stream("south-fork-catawba", "South Fork Catawba River", Region.NC_FOOTHILLS, State.NC, ("02145000",), 35.2853, -81.1011),
    _stream("catawba-upper", "Catawba River (Upper)", Region.NC_FOOTHILLS, State.NC, ("02137727", "02138520"), 35.6858, -82.0603),
    _stream("south-toe", "South Toe River", Region.NC_FOOTHILLS, State.NC, ("03463300",), 35.8314, -82.1842),
)
# fmt: on

_BY_ID = {loc.id: loc for loc in STREAMS}


def get_location(location_id: str) -> Location | None:
    """Look up a stream by id."""
    return _BY_ID.get(location_id)


def locations_by_region(region: Region | str) -> list[Location]:
    return [loc for loc in STREAMS if loc.region == region]


def locations_by_state(state: State | str) -> list[Location]:
    return [loc for loc in STREAMS if loc.state == state]


def all_station_ids(locations: tuple[Location, ...] | list[Location] = STREAMS) -> list[str]:
    """Every distinct USGS station id across ``locations``, sorted."""
    return sorted({sid for loc in locations for sid in loc.station_ids})


# -----------------------------------------------------------------------------
# Proximity
# -----------------------------------------------------------------------------

EARTH_RADIUS_MILES = 3958.8
DEFAULT_RADIUS_MILES = 50.0
MAX_RADIUS_MILES = 500.0


def haversine_miles(a: Coordinates, b: Coordinates) -> float:
    """Great-circle distance between two points, in miles."""
    lat1, lat2 = math.radians(a.latitude), math.radians(b.latitude)
    d_lat = lat2 - lat1
    d_lon = math.radians(b.longitude - a.longitude)
    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    return 2 * EARTH_RADIUS_MILES * math.asin(math.sqrt(h))


def locations_near(
    origin: Coordinates,
    radius_miles: float = DEFAULT_RADIUS_MILES,
    locations: tuple[Location, ...] | list[Location] = STREAMS,
) -> list[tuple[Location, float]]:
    """
    Streams within ``radius_miles`` of ``origin``, nearest first.

    Distances are rounded to 0.1 mile before filtering and sorting; equal
    distances are ordered by id. Streams without coordinates are skipped.

    Raises:
        ValueError: If ``radius_miles`` is not in ``(0, MAX_RADIUS_MILES]``.
    """
    if not 0 < radius_miles <= MAX_RADIUS_MILES:
        msg = f"radius must be a positive number up to {MAX_RADIUS_MILES:g}, got {radius_miles:g}"
        raise ValueError(msg)

    nearby = []
    for loc in locations:
        if loc.coordinates is None:
            continue
        distance = round(haversine_miles(origin, loc.coordinates), 1)
        if distance <= radius_miles:
            nearby.append((loc, distance))
    nearby.sort(key=lambda pair: (pair[1], pair[0].id))
    return nearby
