"""
GeoHex code encoding and decoding.

A code is a two-letter leader followed by one base-9 digit per level:
- every lattice axis is written in balanced ternary over level + 3 places
- each (x, y) ternary pair becomes one base-9 digit: x * 3 + y
- the first three base-9 digits read as a decimal number n (0..888)
  are packed into the leader KEY[n // 30] + KEY[n % 30]

Examples:
    level 0: "XM"          (Tokyo)
    level 7: "XM4885487"
"""
import logging
from typing import List, Tuple

logger = logging.getLogger(__name__)

H_KEY = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"

# Leader -> decimal value of the first three base-9 digits
LEADERS = {
    H_KEY[n // 30] + H_KEY[n % 30]: n
    for n in range(889)
    if "9" not in f"{n:03d}"
}

DIGITS = "012345678"
MAX_CODE_LENGTH = 17


class InvalidCode(ValueError):
    """Raised when a string is not a well-formed GeoHex code."""

    def __init__(self, code, reason: str):
        self.code = code
        self.reason = reason
        super().__init__(f"invalid GeoHex code {code!r}: {reason}")


def level_by_code(code: str) -> int:
    """Level of a code: everything after the two-letter leader is one digit per level."""
    return len(code) - 2


def _ternary(value: float, level: int) -> List[int]:
    """Balanced ternary digits of one lattice axis, most significant first (0, 1, 2 = -1, 0, +1)."""
    digits = []
    for i in range(level + 3):
        h_pow = 3 ** (level + 2 - i)
        half = (h_pow + 1) // 2
        if value >= half:
            digits.append(2)
            value -= h_pow
        elif value <= -half:
            digits.append(0)
            value += h_pow
        else:
            digits.append(1)
    return digits


def encode(x: float, y: float, level: int, eastern: bool = True) -> str:
    """
    Convert a lattice address to its code.

    Args:
        x: Lattice X (already adjusted to the level's range)
        y: Lattice Y
        level: Resolution 0..15
        eastern: True when the zone center sits at lng >= 0 or on the -180 edge

    Returns:
        Code of length level + 2
    """
    code3_x = _ternary(x, level)
    code3_y = _ternary(y, level)

    # Western and eastern halves share leaders along the diagonal
    if eastern and code3_x[1] == code3_y[1] and code3_x[2] == code3_y[2]:
        if code3_x[0] == 2 and code3_y[0] == 1:
            code3_x[0], code3_y[0] = 1, 2
        elif code3_x[0] == 1 and code3_y[0] == 0:
            code3_x[0], code3_y[0] = 0, 1

    dec9 = "".join(str(dx * 3 + dy) for dx, dy in zip(code3_x, code3_y))
    global_code = int(dec9[:3])
    return H_KEY[global_code // 30] + H_KEY[global_code % 30] + dec9[3:]


def validate(code) -> str:
    """Return the code unchanged or raise InvalidCode."""
    if not isinstance(code, str):
        reason = "code must be a string"
    elif len(code) < 2:
        reason = "code is shorter than its two-letter leader"
    elif len(code) > MAX_CODE_LENGTH:
        reason = f"code is longer than {MAX_CODE_LENGTH} characters"
    elif code[:2] not in LEADERS:
        reason = f"unknown leader {code[:2]!r}"
    elif any(ch not in DIGITS for ch in code[2:]):
        reason = "trailing characters must be digits 0-8"
    else:
        return code

    logger.debug("Rejected GeoHex code %r: %s", code, reason)
    raise InvalidCode(code, reason)


def decode(code: str) -> Tuple[int, int, int]:
    """
    Convert a code to its raw lattice address.

    The address still has to go through adjust_coordinate before use.

    Returns:
        Tuple of (x, y, level)

    Raises:
        InvalidCode: If the code is malformed
    """
    validate(code)
    level = level_by_code(code)

    # Leader number is not zero-padded, matching GeoHex v3.2. For leaders
    # below 100 (only south of ~-80°) the fold check then reads the wrong
    # digits, so those codes do not round-trip to their own hex.
    h_dec9 = str(LEADERS[code[:2]]) + code[2:]
    if (
        len(h_dec9) >= 3
        and h_dec9[0] in "15"
        and h_dec9[1] not in "125"
        and h_dec9[2] not in "125"
    ):
        h_dec9 = ("3" if h_dec9[0] == "1" else "7") + h_dec9[1:]
    h_dec9 = h_dec9.zfill(level + 3)

    h_x = 0
    h_y = 0
    for i, digit in enumerate(h_dec9):
        h_pow = 3 ** (level + 2 - i)
        dx, dy = divmod(int(digit), 3)
        h_x += (dx - 1) * h_pow
        h_y += (dy - 1) * h_pow
    return h_x, h_y, level
