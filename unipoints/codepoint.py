from typing import Iterator, Optional

from .block import Block
from .category import Category
from .info import CodepointInfo
from .plane import CODE_POINT_MAX, Plane, check_codepoint, plane_for_codepoint
from .registry import Registry, default_registry

__all__ = ["Codepoint"]


class Codepoint:
    """
    Represents a Unicode code point, answering questions from a registry.

    >>> cp = Codepoint(0x000A)
    >>> cp.value
    10
    >>> cp
    Codepoint(0x000A)
    >>> print(cp)
    U+000A

    >>> cp.name
    'LINE FEED'
    >>> cp.category
    <Category.CONTROL: 'Cc'>
    >>> cp.block.name
    'Basic Latin'
    >>> cp.plane.name
    'Basic Multilingual Plane'
    >>> cp.info.abbreviations
    ('LF', 'NL', 'EOL')

    >>> Codepoint.from_name("NUL")
    Codepoint(0x0000)
    """

    __slots__ = ("_ord", "_registry")

    MAX_CODE_POINT = CODE_POINT_MAX

    def __init__(self, codepoint: int, registry: Optional[Registry] = None):
        self._ord = check_codepoint(codepoint)
        self._registry = registry

    @classmethod
    def from_name(
        cls, name: str, include_aliases: bool = True, registry: Optional[Registry] = None
    ):
        """
        Raises KeyError when nothing goes by that name.
        """
        info = (registry or default_registry()).resolve_by_name(name, include_aliases)
        if info is None:
            raise KeyError(name)
        return cls(info.id, registry)

    @property
    def registry(self) -> Registry:
        return self._registry or default_registry()

    @property
    def value(self) -> int:
        return self._ord

    @property
    def character(self) -> str:
        return chr(self._ord)

    @property
    def info(self) -> CodepointInfo:
        return self.registry.info_for(self._ord)

    @property
    def is_assigned(self) -> bool:
        return self._ord in self.registry

    @property
    def name(self) -> str:
        return self.info.name

    @property
    def category(self) -> Category:
        return self.info.category

    @property
    def block(self) -> Optional[Block]:
        return self.registry.block_for_codepoint(self._ord)

    @property
    def plane(self) -> Plane:
        return plane_for_codepoint(self._ord)

    def to_uplus_notation(self) -> str:
        """
        Returns a string representation of the codepoint in U+ notation.

        See: https://www.unicode.org/versions/Unicode13.0.0/appA.pdf
        """
        return f"U+{self.value:04X}"

    def __str__(self) -> str:
        return self.to_uplus_notation()

    def __repr__(self) -> str:
        clsname = type(self).__qualname__
        return f"{clsname}(0x{self.value:04X})"

    def __eq__(self, other) -> bool:
        if isinstance(other, Codepoint):
            return self._ord == other._ord
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._ord)

    @staticmethod
    def iterate_all_codepoints() -> Iterator["Codepoint"]:
        """
        >>> len(list(Codepoint.iterate_all_codepoints()))
        1114112
        """
        return (Codepoint(cp) for cp in range(Codepoint.MAX_CODE_POINT + 1))
