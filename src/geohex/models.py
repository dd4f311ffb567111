from pydantic import BaseModel, ConfigDict, Field
from typing import List


class Location(BaseModel):
    """Geographic point in degrees."""
    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float


class Coordinate(BaseModel):
    """
    Point on the projected plane, or an address on a level's hex lattice.

    reversed marks lattice coordinates whose X and Y were swapped while
    folding them onto the antimeridian edge. It never changes geometry,
    so equality and hashing only look at x and y.
    """
    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    reversed: bool = Field(default=False)

    def __eq__(self, other):
        if not isinstance(other, Coordinate):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((self.x, self.y))


class Zone(BaseModel):
    """One hex at one level."""
    model_config = ConfigDict(frozen=True)

    center_location: Location
    grid_coordinate: Coordinate
    code: str = Field(..., min_length=2, max_length=17)
    level: int = Field(..., ge=0, le=15)
    size: float = Field(..., gt=0, description="Edge length in projected meters")

    @property
    def x(self) -> float:
        return self.grid_coordinate.x

    @property
    def y(self) -> float:
        return self.grid_coordinate.y


class LocationPair(BaseModel):
    """Left and right vertices sharing one row of a hex."""
    model_config = ConfigDict(frozen=True)

    left: Location
    right: Location


class Polygon(BaseModel):
    """Six vertices of a hex, grouped into top, middle and bottom rows."""
    model_config = ConfigDict(frozen=True)

    top: LocationPair
    middle: LocationPair
    bottom: LocationPair

    def vertices(self) -> List[Location]:
        """Vertices in ring order, starting at the top-left corner and going clockwise."""
        return [
            self.top.left,
            self.top.right,
            self.middle.right,
            self.bottom.right,
            self.bottom.left,
            self.middle.left,
        ]
