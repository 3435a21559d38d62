"""
The 17 planes of the Unicode code space.

See: https://www.unicode.org/versions/Unicode15.0.0/ch02.pdf (2.8 Unicode Allocation)
"""

from typing import NamedTuple, Tuple

from .errors import OutOfRangeError

__all__ = [
    "CODE_POINT_MIN",
    "CODE_POINT_MAX",
    "PLANE_SIZE",
    "Plane",
    "all_planes",
    "check_codepoint",
    "plane_for_codepoint",
]

CODE_POINT_MIN = 0
CODE_POINT_MAX = 0x10FFFF
PLANE_SIZE = 0x10000


class Plane(NamedTuple):
    index: int
    name: str

    @property
    def start(self) -> int:
        return self.index * PLANE_SIZE

    @property
    def end_inclusive(self) -> int:
        return self.start + PLANE_SIZE - 1

    def contains(self, codepoint: int) -> bool:
        """
        >>> BMP.contains(0xFFFF)
        True
        >>> BMP.contains(0x10000)
        False
        """
        return self.start <= codepoint <= self.end_inclusive


_PLANE_NAMES = (
    "Basic Multilingual Plane",
    "Supplementary Multilingual Plane",
    "Supplementary Ideographic Plane",
    "Tertiary Ideographic Plane",
    *(f"Unassigned Plane {index}" for index in range(4, 14)),
    "Supplementary Special-purpose Plane",
    "Supplementary Private Use Area-A",
    "Supplementary Private Use Area-B",
)

PLANES: Tuple[Plane, ...] = tuple(
    Plane(index, name) for index, name in enumerate(_PLANE_NAMES)
)

BMP = PLANES[0]


def all_planes() -> Tuple[Plane, ...]:
    """
    >>> len(all_planes())
    17
    >>> all_planes()[-1]
    Plane(index=16, name='Supplementary Private Use Area-B')
    """
    return PLANES


def check_codepoint(codepoint: int) -> int:
    """
    Returns the code point unchanged, or raises OutOfRangeError.

    >>> check_codepoint(0x10FFFF)
    1114111
    >>> check_codepoint(0x110000)
    Traceback (most recent call last):
      ...
    unipoints.errors.OutOfRangeError: 1114112 is outside the Unicode code space
    """
    if not isinstance(codepoint, int) or isinstance(codepoint, bool):
        raise TypeError(f"code points are integers, not {type(codepoint).__name__}")
    if codepoint < CODE_POINT_MIN or codepoint > CODE_POINT_MAX:
        raise OutOfRangeError(codepoint)
    return codepoint


def plane_for_codepoint(codepoint: int) -> Plane:
    """
    >>> plane_for_codepoint(ord('a')).name
    'Basic Multilingual Plane'
    >>> plane_for_codepoint(0x1F4A9).index
    1
    >>> plane_for_codepoint(-1)
    Traceback (most recent call last):
      ...
    unipoints.errors.OutOfRangeError: -1 is outside the Unicode code space
    """
    return PLANES[check_codepoint(codepoint) // PLANE_SIZE]
