"""
Spherical Web-Mercator projection used as the GeoHex working plane.

GeoHex lays its hex lattice over this plane:
- x spans -H_BASE..H_BASE meters (longitude -180..180)
- y uses the same scale, so the plane is square at +/- ~85.05 degrees
- each level triples the resolution of the previous one
"""
import math

from src.geohex.models import Coordinate, Location

# Half the equatorial circumference in meters
H_BASE = 20037508.34

# The hex lattice is tilted 30 degrees against the square grid
H_DEG = math.pi * (30 / 180)
H_K = math.tan(H_DEG)

MIN_LEVEL = 0
MAX_LEVEL = 15


def check_level(level: int) -> int:
    """Reject levels outside the supported 0..15 range."""
    if not MIN_LEVEL <= level <= MAX_LEVEL:
        raise ValueError(f"level must be between {MIN_LEVEL} and {MAX_LEVEL}, got {level}")
    return level


def calc_hex_size(level: int) -> float:
    """
    Edge length of a hex at the given level, in projected meters.

    Level 0 hexes are H_BASE / 27 (~742km) across an edge;
    every level divides that by 3.
    """
    check_level(level)
    return H_BASE / math.pow(3, level + 3)


def project(location: Location) -> Coordinate:
    """
    Convert a geographic location to a planar coordinate.

    Args:
        location: Latitude/longitude in degrees

    Returns:
        Coordinate in projected meters (lat = +/-90 yields +/-inf for y)
    """
    x = location.lng * H_BASE / 180
    h_tan = math.tan((90 + location.lat) * math.pi / 360)
    # lat = -90 gives tan() == 0
    y = -math.inf if h_tan == 0 else math.log(h_tan) / (math.pi / 180)
    y *= H_BASE / 180
    return Coordinate(x=x, y=y)


def unproject(coordinate: Coordinate) -> Location:
    """
    Convert a planar coordinate back to a geographic location.

    The reversed flag of the coordinate is ignored.
    """
    lng = (coordinate.x / H_BASE) * 180
    lat = (coordinate.y / H_BASE) * 180
    lat = 180 / math.pi * (2 * math.atan(math.exp(lat * math.pi / 180)) - math.pi / 2)
    return Location(lat=lat, lng=lng)


location_to_coordinate = project
coordinate_to_location = unproject
