"""
Tests for unipoints/validation.py: deliberately broken datasets must be refused,
with every problem reported at once.
"""

import logging

import pytest

from unipoints.block import Block, BlockTable
from unipoints.category import Category, CategoryTree
from unipoints.errors import InvariantViolationError
from unipoints.plane import PLANES
from unipoints.registry import Enumeration, Registry
from unipoints.validation import Violation

from .helpers import BASIC_LATIN, BMP, LATIN_1_SUPPLEMENT, character, make_source, small_characters


def violations_of(source):
    with pytest.raises(InvariantViolationError) as excinfo:
        Registry(source)
    return excinfo.value.violations


def checks_of(source):
    return {violation.check for violation in violations_of(source)}


class TestCleanData:
    def test_no_violations(self, small_source):
        assert Registry.audit_source(small_source) == []

    def test_bad_data_is_audited_without_raising(self):
        source = make_source(characters=[character(0x0042, "B"), character(0x0041, "A")])
        assert {violation.check for violation in Registry.audit_source(source)} == {
            "record-order",
            "partition-order",
        }

    def test_no_unaudited_registry(self, small_source):
        with pytest.raises(TypeError):
            Registry(small_source, validate=False)


class TestBlocks:
    def test_overlap(self):
        overlapping = Block(0x0070, 0x00FF, "Overlapping", BMP)
        assert "block-overlap" in checks_of(make_source(blocks=[BASIC_LATIN, overlapping]))

    def test_inverted_range(self):
        inverted = Block(0x0200, 0x01FF, "Backwards", BMP)
        assert "block-range" in checks_of(make_source(blocks=[BASIC_LATIN, inverted]))

    def test_outside_its_plane(self):
        spanning = Block(0xFFF0, 0x1000F, "Spanning", BMP)
        assert "block-plane" in checks_of(make_source(blocks=[BASIC_LATIN, spanning]))

    def test_wrong_plane(self):
        misfiled = Block(0x0100, 0x017F, "Latin Extended-A", PLANES[1])
        assert "block-plane" in checks_of(make_source(blocks=[BASIC_LATIN, misfiled]))

    def test_codename_collision(self):
        twin = Block(0x0100, 0x017F, "Basic_Latin", BMP)
        violations = violations_of(make_source(blocks=[BASIC_LATIN, twin]))
        assert [v.check for v in violations] == ["block-codename"]
        assert "'Basic_Latin'" in violations[0].message

    def test_overlap_is_not_repaired(self):
        overlapping = Block(0x0070, 0x00FF, "Overlapping", BMP)
        assert BlockTable([overlapping, BASIC_LATIN]).blocks == (BASIC_LATIN, overlapping)


class TestCategories:
    def test_surrogate_assignment(self):
        characters = small_characters() + [character(0xD800, "HIGH SURROGATE", Category.SURROGATE)]
        blocks = [BASIC_LATIN, LATIN_1_SUPPLEMENT, Block(0xD800, 0xDB7F, "High Surrogates", BMP)]
        assert "record-surrogate" in checks_of(make_source(blocks=blocks, characters=characters))

    def test_group_assignment(self):
        characters = [character(0x0041, "LATIN CAPITAL LETTER A", Category.LETTER)]
        assert checks_of(make_source(characters=characters)) == {"record-category"}

    def test_three_levels(self):
        parents = {category: category.default_parent for category in Category}
        parents[Category.UPPERCASE_LETTER] = Category.LOWERCASE_LETTER
        checks = checks_of(make_source(categories=CategoryTree(parents)))
        # 'a' is LOWERCASE_LETTER, which has become a group.
        assert checks == {"category-tree", "record-category"}

    def test_self_parent(self):
        parents = {category: category.default_parent for category in Category}
        parents[Category.OTHER_SYMBOL] = Category.OTHER_SYMBOL
        assert "category-tree" in checks_of(make_source(categories=CategoryTree(parents)))

    def test_surrogate_with_children(self):
        parents = {category: category.default_parent for category in Category}
        parents[Category.PRIVATE_USE] = Category.SURROGATE
        assert "category-surrogate" in checks_of(make_source(categories=CategoryTree(parents)))

    def test_missing_category(self):
        parents = {category: category.default_parent for category in Category}
        del parents[Category.UNASSIGNED]
        assert checks_of(make_source(categories=CategoryTree(parents))) == {"category-tree"}


class TestRecords:
    def test_ordering_break(self):
        characters = small_characters()
        characters[1], characters[2] = characters[2], characters[1]
        checks = checks_of(make_source(characters=characters))
        assert {"record-order", "partition-order"} <= checks

    def test_duplicate_id(self):
        characters = small_characters() + [character(0x1F600, "GRINNING FACE AGAIN")]
        assert "record-order" in checks_of(make_source(characters=characters))

    def test_empty_name(self):
        assert checks_of(make_source(characters=[character(0x0041, "")])) == {"record-name"}

    def test_outside_code_space(self):
        assert "record-id" in checks_of(make_source(characters=[character(0x110000, "BEYOND")]))


class TestNames:
    def test_name_collision(self):
        characters = [character(0x0041, "SAME"), character(0x0042, "SAME")]
        violations = violations_of(make_source(characters=characters))
        assert violations == [
            Violation("name-collision", "'SAME' (name) of U+0042 already names U+0041")
        ]

    def test_abbreviation_collides_with_name(self):
        characters = [character(0x0041, "A"), character(0x0042, "B", abbreviations=("A",))]
        assert checks_of(make_source(characters=characters)) == {"name-collision"}

    def test_duplicates_within_a_record_are_allowed(self):
        characters = [
            character(
                0x0009,
                "CHARACTER TABULATION",
                Category.CONTROL,
                control_names=("TAB",),
                abbreviations=("TAB",),
                unicode1_name="CHARACTER TABULATION",
                informative_aliases=("TAB",),
            )
        ]
        assert Registry.audit_source(make_source(characters=characters)) == []

    def test_legacy_names_may_repeat(self):
        characters = [
            character(0x0007, "ALERT", Category.CONTROL, unicode1_name="BELL"),
            character(0x0041, "BELL", informative_aliases=("tab",)),
            character(0x0042, "B", informative_aliases=("tab",)),
        ]
        assert Registry.audit_source(make_source(characters=characters)) == []


class TestReporting:
    def test_every_violation_is_reported(self):
        overlapping = Block(0x0070, 0x00FF, "Overlapping", BMP)
        characters = [
            character(0x0042, "B"),
            character(0x0041, "A", Category.SURROGATE),
            character(0x0043, "B"),
        ]
        checks = checks_of(make_source(blocks=[BASIC_LATIN, overlapping], characters=characters))
        assert {"block-overlap", "record-surrogate", "record-order", "name-collision"} <= checks

    def test_message_lists_violations(self):
        with pytest.raises(InvariantViolationError) as excinfo:
            Registry(make_source(characters=[character(0x0041, "")]))
        assert str(excinfo.value) == "1 invariant violation:\n  - [record-name] U+0041 has no name"

    def test_violations_are_logged(self, caplog):
        with caplog.at_level(logging.ERROR, logger="unipoints.validation"):
            with pytest.raises(InvariantViolationError):
                Registry(make_source(characters=[character(0x0041, ""), character(0x0042, "")]))
        assert len(caplog.records) == 3


class TestPartitions:
    def test_record_missing_from_block_view(self, small_source):
        class Lossy(Registry):
            def enumerate(self, block=None):
                enumeration = super().enumerate(block)
                if block is None:
                    return enumeration
                return Enumeration([info for info, _previous in enumeration][1:])

        checks = {violation.check for violation in Lossy.audit_source(small_source)}
        assert checks == {"partition-mismatch", "partition-missing"}

    def test_block_view_names_its_block(self, small_source):
        class Leaky(Registry):
            def enumerate(self, block=None):
                enumeration = super().enumerate()
                if block is None:
                    return enumeration
                return Enumeration([info for info, _ in enumeration if block.contains(info.id)])

        checks = {violation.check for violation in Leaky.audit_source(small_source)}
        assert checks == {"partition-block", "partition-mismatch"}


class TestVersion:
    def test_missing(self):
        assert checks_of(make_source(unicode_version=None)) == {"version"}

    @pytest.mark.parametrize("version", ["", "v15.1", "15.1.", "0.9", "15..1"])
    def test_malformed(self, version):
        violations = violations_of(make_source(unicode_version=version))
        assert [v.check for v in violations] == ["version"]
        assert repr(version) in violations[0].message
