"""
Demo script to look up GeoHex zones.

This script shows the three views of a location:
1. The zone (code, level, grid address) covering a lat/lng
2. The zone's center and hex size
3. The six polygon corners of the hex

Usage:
    python scripts/geohex_demo.py
    python scripts/geohex_demo.py --lat 40.758 --lng -73.9855 --level 9
    python scripts/geohex_demo.py --code XM4885487
"""
import argparse

from src.geohex.codec import InvalidCode
from src.geohex.grid import DEFAULT_LEVEL, polygon, zone_by_code, zone_by_location
from src.geohex.models import Location

# Tokyo Station area
DEMO_LOCATION = {
    "lat": 35.681236,
    "lng": 139.767125
}


def main():
    parser = argparse.ArgumentParser(description="Look up GeoHex zones")
    parser.add_argument("--lat", type=float, default=DEMO_LOCATION["lat"], help="Latitude in degrees")
    parser.add_argument("--lng", type=float, default=DEMO_LOCATION["lng"], help="Longitude in degrees")
    parser.add_argument("--level", type=int, default=DEFAULT_LEVEL,
                        help=f"GeoHex level 0-15 (default: {DEFAULT_LEVEL})")
    parser.add_argument("--code", help="Decode this code instead of a location")
    args = parser.parse_args()

    if args.code:
        try:
            zone = zone_by_code(args.code)
        except InvalidCode as exc:
            print(f"ERROR: {exc}")
            return
    else:
        zone = zone_by_location(Location(lat=args.lat, lng=args.lng), args.level)

    print("=" * 60)
    print("GEOHEX ZONE")
    print("=" * 60)
    print()
    print(f"Code:     {zone.code}")
    print(f"Level:    {zone.level}")
    print(f"Grid:     ({zone.x:.0f}, {zone.y:.0f})")
    print(f"Center:   {zone.center_location.lat:.6f}, {zone.center_location.lng:.6f}")
    print(f"Size:     {zone.size:.2f} m")
    print()
    print("-" * 60)
    print("Polygon (clockwise from top-left):")
    for vertex in polygon(zone).vertices():
        print(f"  {vertex.lat:.6f}, {vertex.lng:.6f}")


if __name__ == "__main__":
    main()
