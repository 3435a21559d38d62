"""
The queryable, read-only registry of assigned code points.

A Registry holds two orderings of the same records: one global sequence
spanning every assigned code point, and one sequence per block. Both are
strictly ordered by code point.
"""

import logging
import os
import threading
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from . import validation
from .block import Block, BlockTable
from .category import CategoryTree
from .errors import UnassignedCodepointError
from .info import ALIAS_FIELDS, CodepointInfo
from .parse_ucd import SourceData, load_source
from .plane import (
    CODE_POINT_MAX,
    CODE_POINT_MIN,
    Plane,
    all_planes,
    check_codepoint,
    plane_for_codepoint,
)

__all__ = [
    "Enumeration",
    "Registry",
    "UCD_DIR_VARIABLE",
    "default_registry",
    "load_registry",
]

_logger = logging.getLogger(__name__)

# Names a directory holding a full Unicode Character Database to load instead
# of the bundled data.
UCD_DIR_VARIABLE = "UNIPOINTS_UCD_DIR"


class Enumeration:
    """
    An ordered, restartable walk over one view of the registry.

    Each step produces (info, previous), where previous is the record produced
    immediately before (None for the first record).
    """

    __slots__ = ("_records",)

    def __init__(self, records: Sequence[CodepointInfo]):
        self._records = records

    def __iter__(self) -> Iterator[Tuple[CodepointInfo, Optional[CodepointInfo]]]:
        previous = None
        for info in self._records:
            yield info, previous
            previous = info

    def __len__(self) -> int:
        return len(self._records)

    def ids(self) -> List[int]:
        return [info.id for info in self._records]


class Registry:
    """
    Built once from trusted SourceData; audited before it can be used.

    Construction raises InvariantViolationError, listing every problem found,
    when the data breaks any invariant. To inspect bad data without serving
    it, use Registry.audit_source.
    """

    def __init__(self, source: SourceData):
        self._index(source)
        validation.check(self)

        _logger.info(
            "Registry ready: Unicode %s, %d code points in %d blocks",
            self._unicode_version,
            len(self._records),
            len(self._block_table),
        )

    @classmethod
    def audit_source(cls, source: SourceData) -> List[validation.Violation]:
        """
        Lists every invariant the data breaks, without raising.

        The registry built for the audit is thrown away afterwards.
        """
        registry = cls.__new__(cls)
        registry._index(source)
        return validation.audit(registry)

    def _index(self, source: SourceData) -> None:
        self._block_table = BlockTable(source.blocks)
        self.categories: CategoryTree = source.categories
        self._unicode_version = source.unicode_version
        self._data_versions: Mapping[str, str] = MappingProxyType(dict(source.data_versions))

        self._partitions: Dict[Block, List[CodepointInfo]] = {
            block: [] for block in self._block_table
        }
        records = []
        for character in source.characters:
            block = self._find_block(character.id)
            records.append(character._replace(block=block))
            if block is not None:
                self._partitions[block].append(character._replace(block=None))

        self._records: Tuple[CodepointInfo, ...] = tuple(records)
        self._by_id: Dict[int, CodepointInfo] = {}
        for info in self._records:
            self._by_id.setdefault(info.id, info)

        self._by_block_and_id: Dict[Block, Dict[int, CodepointInfo]] = {}
        for block, partition in self._partitions.items():
            by_id = self._by_block_and_id[block] = {}
            for info in partition:
                by_id.setdefault(info.id, info)

        self._by_name: Dict[str, CodepointInfo] = {}
        self._by_alias: Dict[str, CodepointInfo] = {}
        for info in self._records:
            self._by_name.setdefault(info.name, info)
        for field in ALIAS_FIELDS:
            for info in self._records:
                for _field, alias in info.names((field,)):
                    self._by_alias.setdefault(alias, info)

    def _find_block(self, codepoint: int) -> Optional[Block]:
        if not CODE_POINT_MIN <= codepoint <= CODE_POINT_MAX:
            # Reported by the audit; there is no block to file it under.
            return None
        return self._block_table[codepoint]

    @property
    def unicode_version(self) -> Optional[str]:
        """
        The Unicode version of the character data, such as "15.1.0".
        """
        return self._unicode_version

    @property
    def data_versions(self) -> Mapping[str, str]:
        """
        The Unicode version of each source the data came from, by source name.
        """
        return self._data_versions

    ################################### Planes & blocks ####################################

    def all_planes(self) -> Tuple[Plane, ...]:
        return all_planes()

    def plane_for_codepoint(self, codepoint: int) -> Plane:
        return plane_for_codepoint(codepoint)

    def all_blocks(self) -> Sequence[Block]:
        return self._block_table.blocks

    def block_for_codepoint(self, codepoint: int) -> Optional[Block]:
        return self._block_table[codepoint]

    def block_by_codename(self, codename: str) -> Block:
        for block in self._block_table:
            if block.codename == codename:
                return block
        raise KeyError(codename)

    ####################################### Lookup #########################################

    def info_for(self, codepoint: int, block: Optional[Block] = None) -> CodepointInfo:
        """
        Returns the record for a code point.

        With no block, the record comes from the global view and names its
        block. Given a block, it comes from that block's own view, where the
        block field is None.
        """
        check_codepoint(codepoint)

        if block is None:
            records = self._by_id
        else:
            try:
                records = self._by_block_and_id[block]
            except KeyError:
                raise ValueError(f"{block!r} is not a block of this registry") from None

        try:
            return records[codepoint]
        except KeyError:
            raise UnassignedCodepointError(codepoint) from None

    def resolve_by_name(self, name: str, include_aliases: bool = False) -> Optional[CodepointInfo]:
        """
        Finds a record by its exact (case-sensitive) name.

        With include_aliases, falls back to control names, abbreviations, the
        Unicode 1.0 name and informative aliases, checked in that order. The
        record is always taken from the global view.
        """
        info = self._by_name.get(name)
        if info is None and include_aliases:
            info = self._by_alias.get(name)
        return info

    ##################################### Enumeration ######################################

    def enumerate(self, block: Optional[Block] = None) -> Enumeration:
        if block is None:
            return Enumeration(self._records)

        try:
            return Enumeration(self._partitions[block])
        except KeyError:
            raise ValueError(f"{block!r} is not a block of this registry") from None

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, codepoint: int) -> bool:
        return codepoint in self._by_id


def load_registry(ucd_dir=None) -> Registry:
    return Registry(load_source(ucd_dir))


_default_registry: Optional[Registry] = None
_default_lock = threading.Lock()


def default_registry() -> Registry:
    """
    Returns the process-wide registry, loading it on first use.

    Loading happens at most once, even when first use is concurrent. A load
    that fails is not cached; the next call tries again.
    """
    global _default_registry

    registry = _default_registry
    if registry is not None:
        return registry

    with _default_lock:
        if _default_registry is None:
            _default_registry = load_registry(os.environ.get(UCD_DIR_VARIABLE) or None)
        return _default_registry
