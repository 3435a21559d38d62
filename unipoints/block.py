"""
Named, contiguous ranges of code points, as listed in Blocks.txt.

See: https://www.unicode.org/reports/tr44/#Blocks.txt
"""

from typing import Iterable, NamedTuple, Optional, Sequence, Tuple

from .plane import Plane, check_codepoint

__all__ = ["Block", "BlockTable", "derive_codename"]


def derive_codename(name: str) -> str:
    """
    Derives an identifier from a block's human-readable name.

    Spaces become underscores and hyphens are dropped; nothing else changes.

    >>> derive_codename("Basic Latin")
    'Basic_Latin'
    >>> derive_codename("Latin-1 Supplement")
    'Latin1_Supplement'
    >>> derive_codename("Miscellaneous Mathematical Symbols-A")
    'Miscellaneous_Mathematical_SymbolsA'
    """
    return name.replace(" ", "_").replace("-", "")


class Block(NamedTuple):
    """
    A block. Ranges are INCLUSIVE on both sides!
    """

    from_codepoint: int
    to_codepoint: int
    name: str
    plane: Plane

    @property
    def codename(self) -> str:
        return derive_codename(self.name)

    def contains(self, codepoint: int) -> bool:
        return self.from_codepoint <= codepoint <= self.to_codepoint

    def __str__(self) -> str:
        return f"{self.name} (U+{self.from_codepoint:04X}..U+{self.to_codepoint:04X})"


class BlockTable:
    """
    Finds the block containing a code point using binary search over blocks
    ordered by their first code point. Code points in gaps between blocks
    have no block.

    The table never rejects or merges ranges; overlapping input is reported
    by the validation audit instead.
    """

    def __init__(self, blocks: Iterable[Block]):
        self._table: Tuple[Block, ...] = tuple(
            sorted(blocks, key=lambda block: (block.from_codepoint, block.to_codepoint))
        )

    @property
    def blocks(self) -> Sequence[Block]:
        return self._table

    def __getitem__(self, codepoint: int) -> Optional[Block]:
        check_codepoint(codepoint)
        return self._find_with_binary_search(codepoint)

    def _find_with_binary_search(self, codepoint: int) -> Optional[Block]:
        table = self._table

        def binary_search(start, end):
            if start >= end:
                # In a gap between two blocks (or before the first/after the last)
                return None

            midpoint = start + ((end - start) // 2)
            block = table[midpoint]

            if block.contains(codepoint):
                return block
            elif codepoint < block.from_codepoint:
                return binary_search(start, midpoint)
            else:
                return binary_search(midpoint + 1, end)

        return binary_search(0, len(table))

    def __iter__(self):
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)
