"""
Spatial indexing using the GeoHex hexagonal grid system.

Level 7 = ~339m hex size (~1.2 km² area on the projected plane)
"""
import math
import os

from src.geohex import codec
from src.geohex.models import Coordinate, Location, LocationPair, Polygon, Zone
from src.geohex.projection import (
    H_K,
    calc_hex_size,
    check_level,
    coordinate_to_location,
    location_to_coordinate,
)

# GeoHex level used when the caller does not pick one
# 5 = ~3km size
# 7 = ~339m size ← RECOMMENDED for city blocks
# 9 = ~38m size
DEFAULT_LEVEL = int(os.getenv("GEOHEX_DEFAULT_LEVEL", "7"))

# tan(60°), height of a hex row relative to its edge
H_ROW = math.tan(math.pi * (60 / 180))


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _units(level: int):
    """Lattice spacing (unit_x, unit_y) in projected meters."""
    h_size = calc_hex_size(level)
    unit_x = 6 * h_size
    return unit_x, unit_x * H_K


def adjust_coordinate(coordinate: Coordinate, level: int) -> Coordinate:
    """
    Fold a lattice coordinate back into the level's valid range.

    Hexes that straddle the antimeridian have two addresses; the one with
    X > Y is swapped and flagged as reversed. Addresses past the edge wrap
    around to the other side of the globe.

    Args:
        coordinate: Lattice coordinate
        level: Resolution 0..15

    Returns:
        Adjusted coordinate (the input's reversed flag is kept)
    """
    check_level(level)
    x = coordinate.x
    y = coordinate.y
    rev = coordinate.reversed
    max_hsteps = 3 ** (level + 2)
    hsteps = abs(x - y)

    if hsteps == max_hsteps and x > y:
        x, y = y, x
        rev = True
    elif hsteps > max_hsteps:
        dif = hsteps - max_hsteps
        dif_x = math.floor(dif / 2)
        dif_y = dif - dif_x
        if x > y:
            edge_x, edge_y = y + dif_y, x - dif_x
            x, y = edge_x + dif_x, edge_y - dif_y
        elif y > x:
            edge_x, edge_y = y - dif_y, x + dif_x
            x, y = edge_x - dif_x, edge_y + dif_y

    return Coordinate(x=x, y=y, reversed=rev)


def coordinate_by_location(location: Location, level: int) -> Coordinate:
    """
    Snap a location to the lattice address of the hex containing it.

    The lattice parallelogram around the point is split by its diagonals;
    points near the (X0+1, Y0+1) or (X0, Y0) corners go to that hex,
    everything else rounds to the nearest address.
    """
    unit_x, unit_y = _units(level)
    point = location_to_coordinate(location)

    h_pos_x = (point.x + point.y / H_K) / unit_x
    h_pos_y = (point.y - H_K * point.x) / unit_y
    h_x_0 = math.floor(h_pos_x)
    h_y_0 = math.floor(h_pos_y)
    h_x_q = h_pos_x - h_x_0
    h_y_q = h_pos_y - h_y_0
    h_x = _round_half_up(h_pos_x)
    h_y = _round_half_up(h_pos_y)

    if h_y_q > -h_x_q + 1:
        if h_y_q < 2 * h_x_q and h_y_q > 0.5 * h_x_q:
            h_x = h_x_0 + 1
            h_y = h_y_0 + 1
    elif h_y_q < -h_x_q + 1:
        if h_y_q > (2 * h_x_q) - 1 and h_y_q < (0.5 * h_x_q) + 0.5:
            h_x = h_x_0
            h_y = h_y_0

    return adjust_coordinate(Coordinate(x=h_x, y=h_y), level)


def coordinate_by_code(code: str) -> Coordinate:
    """
    Lattice address of a code.

    Raises:
        InvalidCode: If the code is malformed
    """
    h_x, h_y, level = codec.decode(code)
    return adjust_coordinate(Coordinate(x=h_x, y=h_y), level)


def zone_by_coordinate(coordinate: Coordinate, level: int) -> Zone:
    """
    Build the zone for a lattice address.

    Args:
        coordinate: Lattice address, normally from coordinate_by_location
            or coordinate_by_code
        level: Resolution 0..15

    Returns:
        Zone with its center, code and edge size
    """
    unit_x, unit_y = _units(level)
    h_x = coordinate.x
    h_y = coordinate.y

    h_lat = (H_K * h_x * unit_x + h_y * unit_y) / 2
    h_lng = (h_lat - h_y * unit_y) / H_K
    center = coordinate_to_location(Coordinate(x=h_lng, y=h_lat))

    max_hsteps = 3 ** (level + 2)
    hsteps = abs(h_x - h_y)
    if hsteps == max_hsteps:
        # Zones on the antimeridian are always reported on the -180 side
        if h_x > h_y:
            h_x, h_y = h_y, h_x
        center = Location(lat=center.lat, lng=-180.0)

    eastern = center.lng == -180 or center.lng >= 0
    code = codec.encode(h_x, h_y, level, eastern=eastern)

    return Zone(
        center_location=center,
        grid_coordinate=coordinate,
        code=code,
        level=level,
        size=calc_hex_size(level),
    )


def zone_by_location(location: Location, level: int = DEFAULT_LEVEL) -> Zone:
    """
    Zone containing a location.

    Args:
        location: Latitude/longitude in degrees
        level: Resolution 0..15 (defaults to GEOHEX_DEFAULT_LEVEL)

    Returns:
        Zone whose hex contains the location
    """
    coordinate = coordinate_by_location(location, level)
    return zone_by_coordinate(coordinate, level)


def zone_by_code(code: str) -> Zone:
    """
    Zone identified by a code.

    Raises:
        InvalidCode: If the code is malformed
    """
    coordinate = coordinate_by_code(code)
    return zone_by_coordinate(coordinate, codec.level_by_code(code))


def hex_size(zone: Zone) -> float:
    """Edge length of the zone's hex in projected meters."""
    return calc_hex_size(zone.level)


def polygon(zone: Zone) -> Polygon:
    """
    Six corners of a zone's hex.

    The hex is flat-topped on the projected plane: the middle row holds
    the two widest corners, two edge lengths from the center.
    """
    h_lat = zone.center_location.lat
    center = location_to_coordinate(zone.center_location)
    h_x = center.x
    h_y = center.y
    h_size = hex_size(zone)

    h_top = coordinate_to_location(Coordinate(x=h_x, y=h_y + H_ROW * h_size)).lat
    h_btm = coordinate_to_location(Coordinate(x=h_x, y=h_y - H_ROW * h_size)).lat
    h_l = coordinate_to_location(Coordinate(x=h_x - 2 * h_size, y=h_y)).lng
    h_r = coordinate_to_location(Coordinate(x=h_x + 2 * h_size, y=h_y)).lng
    h_cl = coordinate_to_location(Coordinate(x=h_x - h_size, y=h_y)).lng
    h_cr = coordinate_to_location(Coordinate(x=h_x + h_size, y=h_y)).lng

    return Polygon(
        top=LocationPair(left=Location(lat=h_top, lng=h_cl), right=Location(lat=h_top, lng=h_cr)),
        middle=LocationPair(left=Location(lat=h_lat, lng=h_l), right=Location(lat=h_lat, lng=h_r)),
        bottom=LocationPair(left=Location(lat=h_btm, lng=h_cl), right=Location(lat=h_btm, lng=h_cr)),
    )
