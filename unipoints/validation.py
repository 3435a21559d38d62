"""
Audits a registry against every dataset invariant.

The audit never stops at the first problem: a bad regeneration of the data
should be diagnosable in one pass.
"""

import logging
import re
from collections import Counter
from typing import Dict, Iterator, List, NamedTuple

from .category import Category, CategoryTree
from .errors import InvariantViolationError
from .info import FORMAL_NAME_FIELDS
from .plane import CODE_POINT_MAX, CODE_POINT_MIN, PLANE_SIZE, all_planes

__all__ = ["Violation", "audit", "check"]

_logger = logging.getLogger(__name__)

UNICODE_VERSION = re.compile(r"^[1-9]\d*(\.\d+)*$")


class Violation(NamedTuple):
    check: str
    message: str

    def __str__(self) -> str:
        return f"[{self.check}] {self.message}"


def check(registry) -> None:
    """
    Raises InvariantViolationError carrying every violation found, if any.
    """
    violations = audit(registry)
    if violations:
        for violation in violations:
            _logger.error("%s", violation)
        raise InvariantViolationError(violations)


def audit(registry) -> List[Violation]:
    violations: List[Violation] = []
    violations.extend(check_version(registry.unicode_version))
    violations.extend(check_planes())
    violations.extend(check_blocks(registry.all_blocks()))
    violations.extend(check_categories(registry.categories))
    violations.extend(check_records(registry))
    violations.extend(check_partitions(registry))
    violations.extend(check_names(registry))
    return violations


def check_version(version) -> Iterator[Violation]:
    if version is None:
        yield Violation("version", "the data does not name its Unicode version")
    elif not UNICODE_VERSION.match(version):
        yield Violation("version", f"{version!r} is not a Unicode version")


def check_planes() -> Iterator[Violation]:
    planes = all_planes()
    if len(planes) != 17:
        yield Violation("plane", f"expected 17 planes, found {len(planes)}")
    for position, plane in enumerate(planes):
        if plane.index != position or plane.start != position * PLANE_SIZE:
            yield Violation("plane", f"{plane} is out of place at position {position}")


def check_blocks(blocks) -> Iterator[Violation]:
    """
    Blocks are expected in order of their first code point.
    """
    previous = None
    for block in blocks:
        start, end = block.from_codepoint, block.to_codepoint

        if start > end:
            yield Violation("block-range", f"{block.name!r} starts after it ends")
        elif start < CODE_POINT_MIN or end > CODE_POINT_MAX:
            yield Violation("block-range", f"{block} is outside the code space")
        elif not (block.plane.contains(start) and block.plane.contains(end)):
            yield Violation("block-plane", f"{block} does not lie within {block.plane.name}")

        if previous is not None and start <= previous.to_codepoint:
            yield Violation("block-overlap", f"{block} overlaps {previous}")
        if previous is None or end > previous.to_codepoint:
            previous = block

    codenames = Counter(block.codename for block in blocks)
    for codename, count in codenames.items():
        if count > 1:
            yield Violation("block-codename", f"{count} blocks share the codename {codename!r}")


def check_categories(tree: CategoryTree) -> Iterator[Violation]:
    for category in Category:
        if category not in tree:
            yield Violation("category-tree", f"{category.name} is missing from the hierarchy")

    for category in sorted(tree.all_categories(), key=list(Category).index):
        parent = tree.parent(category)
        if parent is None:
            continue
        if parent is category:
            yield Violation("category-tree", f"{category.name} is its own parent")
        elif tree.parent(parent) is not None:
            yield Violation(
                "category-tree",
                f"{category.name} is nested more than two levels deep "
                f"(under {parent.name}, under {tree.parent(parent).name})",
            )

    if not tree.is_leaf(Category.SURROGATE):
        yield Violation("category-surrogate", "SURROGATE must not have subcategories")


def check_records(registry) -> Iterator[Violation]:
    """
    Checks each record of the global view on its own, and against its predecessor.
    """
    tree = registry.categories

    for info, previous in registry.enumerate():
        if not CODE_POINT_MIN <= info.id <= CODE_POINT_MAX:
            yield Violation("record-id", f"{info.id!r} is outside the code space")
            continue

        if not info.name:
            yield Violation("record-name", f"U+{info.id:04X} has no name")

        if info.category is Category.SURROGATE:
            yield Violation("record-surrogate", f"{info} is classified as a surrogate")
        elif info.category not in tree or not tree.is_leaf(info.category):
            yield Violation(
                "record-category", f"{info} is classified under {info.category.name}, not a leaf"
            )

        if previous is not None and info.id <= previous.id:
            yield Violation("record-order", f"{info} follows {previous}")

        expected = registry.block_for_codepoint(info.id)
        if info.block != expected:
            yield Violation(
                "record-block",
                f"{info} names block {info.block}, expected {expected}",
            )
        elif info.block is not None and not info.block.contains(info.id):
            yield Violation("record-block", f"{info} lies outside {info.block}")


def check_partitions(registry) -> Iterator[Violation]:
    """
    Each block's own view must be the global view restricted to that block.
    """
    expected: Dict[object, list] = {block: [] for block in registry.all_blocks()}
    for info, _previous in registry.enumerate():
        if not CODE_POINT_MIN <= info.id <= CODE_POINT_MAX:
            continue
        block = registry.block_for_codepoint(info.id)
        if block is not None:
            expected[block].append(info)

    for block in registry.all_blocks():
        global_records = expected[block]
        count = 0

        for index, (info, previous) in enumerate(registry.enumerate(block)):
            count += 1
            if info.block is not None:
                yield Violation("partition-block", f"{info} in {block.name} names a block")
            if previous is not None and info.id <= previous.id:
                yield Violation("partition-order", f"{info} follows {previous} in {block.name}")
            if index >= len(global_records):
                yield Violation(
                    "partition-extra", f"{info} is in {block.name} but not the global view"
                )
            elif info != global_records[index]._replace(block=None):
                yield Violation(
                    "partition-mismatch",
                    f"{block.name} has {info} where the global view has {global_records[index]}",
                )

        if count < len(global_records):
            missing = global_records[count]
            yield Violation("partition-missing", f"{missing} is missing from {block.name}")


def check_names(registry) -> Iterator[Violation]:
    """
    Names, control names and abbreviations share one namespace across records.
    """
    # Unicode 1.0 names and informative aliases are left out: the UCD itself
    # repeats them, e.g. BELL is U+0007's Unicode 1.0 name and U+1F514's name.
    owners: Dict[str, int] = {}
    for info, _previous in registry.enumerate():
        for field, value in info.names(FORMAL_NAME_FIELDS):
            owner = owners.setdefault(value, info.id)
            if owner != info.id:
                yield Violation(
                    "name-collision",
                    f"{value!r} ({field}) of U+{info.id:04X} already names U+{owner:04X}",
                )
