from typing import Iterator, NamedTuple, Optional, Tuple

from .block import Block
from .category import Category

__all__ = ["CodepointInfo", "ALIAS_FIELDS", "FORMAL_NAME_FIELDS"]

# Order in which names are matched when resolving by name.
ALIAS_FIELDS = ("control_names", "abbreviations", "unicode1_name", "informative_aliases")

# Names that share the one namespace; they may not repeat across records.
FORMAL_NAME_FIELDS = ("name", "control_names", "abbreviations")


class CodepointInfo(NamedTuple):
    """
    Everything known about one assigned code point.

    ``block`` is only filled in when the record comes from the global view;
    within a block's own view the block is implied and ``block`` is None.
    """

    id: int
    name: str
    category: Category
    block: Optional[Block] = None
    control_names: Tuple[str, ...] = ()
    abbreviations: Tuple[str, ...] = ()
    unicode1_name: Optional[str] = None
    informative_aliases: Tuple[str, ...] = ()

    def names(self, fields=("name",) + ALIAS_FIELDS) -> Iterator[Tuple[str, str]]:
        """
        Yields (field, value) for every name the record carries, in field order.

        >>> info = CodepointInfo(0x0A, "LINE FEED", Category.CONTROL,
        ...                      control_names=("NEW LINE",), abbreviations=("LF",))
        >>> list(info.names())
        [('name', 'LINE FEED'), ('control_names', 'NEW LINE'), ('abbreviations', 'LF')]
        """
        for field in fields:
            value = getattr(self, field)
            if value is None:
                continue
            if isinstance(value, str):
                yield field, value
            else:
                for item in value:
                    yield field, item

    def __str__(self) -> str:
        return f"U+{self.id:04X} {self.name}"
