"""
Structured metadata about Unicode code points: names, aliases, general
categories, blocks and planes.

>>> from unipoints import default_registry
>>> registry = default_registry()
>>> registry.info_for(0x0000).abbreviations
('NUL',)
"""

from .block import Block, derive_codename
from .category import Category, CategoryTree
from .codepoint import Codepoint
from .errors import (
    InvariantViolationError,
    OutOfRangeError,
    UnassignedCodepointError,
    UnipointsError,
)
from .info import CodepointInfo
from .parse_ucd import SourceData, load_source
from .plane import CODE_POINT_MAX, CODE_POINT_MIN, Plane, all_planes, plane_for_codepoint
from .registry import Enumeration, Registry, default_registry, load_registry
from .validation import Violation, audit

__all__ = [
    "Block",
    "CODE_POINT_MAX",
    "CODE_POINT_MIN",
    "Category",
    "CategoryTree",
    "Codepoint",
    "CodepointInfo",
    "Enumeration",
    "InvariantViolationError",
    "OutOfRangeError",
    "Plane",
    "Registry",
    "SourceData",
    "UnassignedCodepointError",
    "UnipointsError",
    "Violation",
    "all_planes",
    "audit",
    "default_registry",
    "derive_codename",
    "load_registry",
    "load_source",
    "plane_for_codepoint",
]
