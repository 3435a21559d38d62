"""
Parses files from the Unicode Character Database into the trusted dataset
that a Registry is built from.

See: http://www.unicode.org/reports/tr44/#Format_Conventions
"""

import logging
import re
import unicodedata
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from .block import Block
from .category import Category, CategoryTree
from .info import CodepointInfo
from .plane import CODE_POINT_MAX, plane_for_codepoint

__all__ = [
    "Aliases",
    "CodepointRange",
    "SourceData",
    "UnicodeDataEntry",
    "build_characters",
    "characters_from_unicodedata",
    "file_version",
    "load_source",
    "parse_blocks",
    "parse_line",
    "parse_name_aliases",
    "parse_names_list",
    "parse_unicode_data_lines",
]

_logger = logging.getLogger(__name__)

###################################### Constants #######################################

DATA_DIR = Path(__file__).parent / "data"

# https://www.unicode.org/reports/tr44/#UnicodeData.txt
NAME = 1
GENERAL_CATEGORY = 2
UNICODE_1_NAME = 10

# https://www.unicode.org/reports/tr44/#NameAliases.txt
ALIAS = 1
ALIAS_TYPE = 2

# https://www.unicode.org/versions/Unicode15.0.0/ch03.pdf (3.12 Conjoining Jamo Behavior)
S_BASE = 0xAC00
L_COUNT = 19
V_COUNT = 21
T_COUNT = 28
N_COUNT = V_COUNT * T_COUNT
S_COUNT = L_COUNT * N_COUNT

JAMO_L = (
    "G", "GG", "N", "D", "DD", "R", "M", "B", "BB", "S",
    "SS", "", "J", "JJ", "C", "K", "T", "P", "H",
)  # fmt: skip
JAMO_V = (
    "A", "AE", "YA", "YAE", "EO", "E", "YEO", "YE", "O", "WA", "WAE",
    "OE", "YO", "U", "WEO", "WE", "WI", "YU", "EU", "YI", "I",
)  # fmt: skip
JAMO_T = (
    "", "G", "GG", "GS", "N", "NJ", "NH", "D", "L", "LG", "LM", "LB", "LS", "LT",
    "LP", "LH", "M", "B", "BS", "S", "SS", "NG", "J", "C", "K", "T", "P", "H",
)  # fmt: skip

# Name prefixes for ranges whose names are derived from the code point.
# https://www.unicode.org/versions/Unicode15.0.0/ch04.pdf (4.8 Name, Table 4-8)
NAME_RULES = (
    ("CJK Ideograph", "CJK UNIFIED IDEOGRAPH-"),
    ("Tangut Ideograph", "TANGUT IDEOGRAPH-"),
    ("Khitan Small Script", "KHITAN SMALL SCRIPT CHARACTER-"),
    ("Nushu Character", "NUSHU CHARACTER-"),
)

# Categories that never make an assigned character record.
UNRECORDED_CATEGORIES = frozenset({"Cn", "Cs", "Co"})

# First lines that carry a file's Unicode version, e.g. "# Blocks-15.1.0.txt"
# or NamesList's "@@@\tThe Unicode Standard 15.1.0".
VERSION_HEADERS = (
    re.compile(r"^#\s*[\w-]+?-(?P<version>\d+(?:\.\d+)*)\.txt"),
    re.compile(r"^@@@\t.*?(?P<version>\d+(?:\.\d+)+)\s*$"),
)


class CodepointRange(NamedTuple):
    """
    Represents a range of code points from a Unicode Character Database file.
    Ranges are INCLUSIVE on both sides!
    """

    start: int
    end_inclusive: int

    @property
    def is_range(self):
        return self.start != self.end_inclusive

    def codepoints(self) -> range:
        return range(self.start, self.end_inclusive + 1)


class Aliases(NamedTuple):
    control: Tuple[str, ...] = ()
    abbreviations: Tuple[str, ...] = ()


class UnicodeDataEntry(NamedTuple):
    """
    One character's raw facts, before aliases are merged in.

    ``name`` is None for controls, whose UnicodeData name is just "<control>".
    """

    codepoint: int
    name: Optional[str]
    category: str
    unicode1_name: Optional[str] = None


class SourceData(NamedTuple):
    """
    The trusted dataset consumed by a Registry.

    ``unicode_version`` is the version of the character data. ``data_versions``
    names the version of each source it was assembled from, which may differ.
    """

    blocks: Sequence[Block]
    categories: CategoryTree
    characters: Sequence[CodepointInfo]
    unicode_version: Optional[str] = None
    data_versions: Mapping[str, str] = MappingProxyType({})


###################################### Line format #####################################


def parse_line(line: str):
    r"""
    Parses a line from a Unicode Character Database text file.

    See: http://www.unicode.org/reports/tr44/#Format_Conventions

    >>> parse_line("\n")
    >>> parse_line("# I'm a comment\n")
    >>> parse_line("0000..007F; Basic Latin")
    (CodepointRange(start=0, end_inclusive=127), ['0000..007F', 'Basic Latin'])
    >>> parse_line("000A;LF;abbreviation")
    (CodepointRange(start=10, end_inclusive=10), ['000A', 'LF', 'abbreviation'])
    """

    line = line.rstrip("\n")
    content, _, _comment = line.partition("#")

    if content.strip() == "":
        return None

    # "Each line of data consists of fields separated by semicolons."
    # "Leading and trailing spaces within a field are not significant."
    # From: http://www.unicode.org/reports/tr44/#Data_Fields
    fields = [field.strip() for field in content.split(";")]
    if len(fields) < 2:
        raise ValueError(f"Did not find enough fields in line: {line!r}")

    range_expression = fields[0]

    start_hex, range_marker, end_hex = range_expression.partition("..")
    start = int(start_hex, base=16)

    if range_marker:
        # Found a range like 0030..0039:
        end = int(end_hex, base=16)
        code_point_range = CodepointRange(start, end)
    else:
        # Found a single codepoint.
        code_point_range = CodepointRange(start, start)

    return code_point_range, fields


def starts_implied_range(name: str) -> bool:
    return name.endswith(", First>")


def ends_implied_range(name: str) -> bool:
    return name.endswith(", Last>")


def file_version(lines: Iterable[str]) -> Optional[str]:
    r"""
    Finds the Unicode version in the header of a UCD file, if it has one.

    >>> file_version(["# Blocks-15.1.0.txt\n", "# Date: 2023-07-28\n"])
    '15.1.0'
    >>> file_version(["@@@\tThe Unicode Standard 15.1.0\n"])
    '15.1.0'
    >>> file_version(["0000..007F; Basic Latin\n"]) is None
    True
    """
    for line in lines:
        if not line.startswith(("#", "@")):
            # The header is over.
            return None
        for pattern in VERSION_HEADERS:
            match = pattern.match(line)
            if match:
                return match.group("version")
    return None


####################################### Parsers ########################################


def parse_blocks(lines: Iterable[str]) -> List[Block]:
    """
    Parses Blocks.txt. Each block belongs to the plane of its first code point.

    >>> [block] = parse_blocks(["0080..00FF; Latin-1 Supplement\\n"])
    >>> block.codename, block.plane.index
    ('Latin1_Supplement', 0)
    """
    blocks = []
    for line in lines:
        result = parse_line(line)
        if result is None:
            continue

        (start, end), fields = result
        blocks.append(Block(start, end, fields[1], plane_for_codepoint(start)))

    return blocks


def parse_name_aliases(lines: Iterable[str]) -> Dict[int, Aliases]:
    """
    Parses NameAliases.txt, keeping the control and abbreviation aliases in file order.

    >>> aliases = parse_name_aliases([
    ...     "000A;LINE FEED;control", "000A;NEW LINE;control",
    ...     "000A;LF;abbreviation", "01A2;LATIN CAPITAL LETTER GHA;correction",
    ... ])
    >>> aliases[0x0A]
    Aliases(control=('LINE FEED', 'NEW LINE'), abbreviations=('LF',))
    >>> 0x01A2 in aliases
    False
    """
    control: Dict[int, List[str]] = {}
    abbreviations: Dict[int, List[str]] = {}
    skipped = 0

    for line in lines:
        result = parse_line(line)
        if result is None:
            continue

        code_point_range, fields = result
        if code_point_range.is_range or len(fields) < 3:
            raise ValueError(f"Malformed name alias: {line!r}")

        codepoint = code_point_range.start
        alias_type = fields[ALIAS_TYPE]
        if alias_type == "control":
            control.setdefault(codepoint, []).append(fields[ALIAS])
        elif alias_type == "abbreviation":
            abbreviations.setdefault(codepoint, []).append(fields[ALIAS])
        else:
            # correction, alternate and figment aliases have no place in the record
            skipped += 1

    if skipped:
        _logger.debug("Skipped %d name aliases of other types", skipped)

    return {
        codepoint: Aliases(
            tuple(control.get(codepoint, ())), tuple(abbreviations.get(codepoint, ()))
        )
        for codepoint in sorted(control.keys() | abbreviations.keys())
    }


def parse_names_list(lines: Iterable[str]) -> Dict[int, List[str]]:
    """
    Collects the "=" alias lines of NamesList.txt for each character entry.

    See: https://www.unicode.org/Public/UCD/latest/ucd/NamesList.html

    >>> parse_names_list([
    ...     "@@\\t0000\\tC0 Controls and Basic Latin\\t007F",
    ...     "000A\\t<control>",
    ...     "\\t= LINE FEED (LF)",
    ...     "\\t= new line (NL)",
    ...     "\\tx 2424 symbol for newline",
    ...     "0020\\tSPACE",
    ... ])
    {10: ['LINE FEED (LF)', 'new line (NL)']}
    """
    aliases: Dict[int, List[str]] = {}
    current = None

    for line in lines:
        line = line.rstrip("\n")
        if not line or line.startswith(("@", ";")):
            continue

        if line.startswith("\t"):
            if current is not None and line.startswith("\t= "):
                aliases.setdefault(current, []).append(line[3:].strip())
            continue

        codepoint_hex, tab, _name = line.partition("\t")
        if not tab:
            raise ValueError(f"Malformed names list entry: {line!r}")
        current = int(codepoint_hex, base=16)

    return aliases


def parse_unicode_data_lines(lines: Iterable[str]) -> Iterator[UnicodeDataEntry]:
    """
    Yields one entry per named character in UnicodeData.txt, expanding the
    First/Last ranges that have an algorithmic name rule.

    >>> entries = list(parse_unicode_data_lines([
    ...     "000A;<control>;Cc;0;B;;;;;N;LINE FEED (LF);;;;",
    ...     "AC00;<Hangul Syllable, First>;Lo;0;L;;;;;N;;;;;",
    ...     "AC01;<Hangul Syllable, Last>;Lo;0;L;;;;;N;;;;;",
    ...     "E000;<Private Use, First>;Co;0;L;;;;;N;;;;;",
    ...     "F8FF;<Private Use, Last>;Co;0;L;;;;;N;;;;;",
    ... ]))
    >>> entries[0]
    UnicodeDataEntry(codepoint=10, name=None, category='Cc', unicode1_name='LINE FEED (LF)')
    >>> [entry.name for entry in entries[1:]]
    ['HANGUL SYLLABLE GA', 'HANGUL SYLLABLE GAG']
    """
    lines = iter(lines)
    for line in lines:
        result = parse_line(line)
        if result is None:
            continue

        code_point_range, fields = result
        if code_point_range.is_range or len(fields) <= UNICODE_1_NAME:
            raise ValueError(f"Malformed UnicodeData line: {line!r}")
        codepoint, _ = code_point_range

        raw_name = fields[NAME]

        if starts_implied_range(raw_name):
            # Implied ranges are split on two lines and are indicated by the NAME field.
            next_line = next_or_none(lines)
            next_result = parse_line(next_line) if next_line is not None else None
            if next_result is None:
                raise ValueError(f"Range started by {line!r} never ends")
            next_range, next_fields = next_result
            if not ends_implied_range(next_fields[NAME]) or next_range.start <= codepoint:
                raise ValueError(f"Range started by {line!r} ends with {next_line!r}")

            for member in CodepointRange(codepoint, next_range.start).codepoints():
                name = name_from_rule(raw_name, member)
                if name is None:
                    # Private use and surrogate ranges: no names, no records.
                    break
                yield UnicodeDataEntry(member, name, fields[GENERAL_CATEGORY])
            continue

        yield UnicodeDataEntry(
            codepoint,
            None if raw_name == "<control>" else raw_name,
            fields[GENERAL_CATEGORY],
            fields[UNICODE_1_NAME] or None,
        )


def name_from_rule(range_label: str, codepoint: int) -> Optional[str]:
    """
    Derives a name for a code point in an implied range, if a rule exists.

    See: https://www.unicode.org/versions/Unicode15.0.0/ch04.pdf

    >>> name_from_rule("<CJK Ideograph Extension A, First>", 0x3400)
    'CJK UNIFIED IDEOGRAPH-3400'
    >>> name_from_rule("<Hangul Syllable, First>", 0xD4DB)
    'HANGUL SYLLABLE PWILH'
    >>> name_from_rule("<Plane 15 Private Use, First>", 0xF0000) is None
    True
    """
    label = range_label.strip("<>")
    if label.startswith("Hangul Syllable"):
        return hangul_syllable_name(codepoint)

    for prefix, name_prefix in NAME_RULES:
        if label.startswith(prefix):
            return f"{name_prefix}{codepoint:04X}"

    return None


def hangul_syllable_name(codepoint: int) -> str:
    s_index = codepoint - S_BASE
    if not 0 <= s_index < S_COUNT:
        raise ValueError(f"U+{codepoint:04X} is not a precomposed Hangul syllable")

    l_index = s_index // N_COUNT
    v_index = (s_index % N_COUNT) // T_COUNT
    t_index = s_index % T_COUNT
    return "HANGUL SYLLABLE " + JAMO_L[l_index] + JAMO_V[v_index] + JAMO_T[t_index]


def characters_from_unicodedata() -> Iterator[UnicodeDataEntry]:
    """
    Yields every named character known to the interpreter's unicodedata module.
    """
    for codepoint in range(CODE_POINT_MAX + 1):
        character = chr(codepoint)
        category = unicodedata.category(character)
        if category in UNRECORDED_CATEGORIES:
            continue

        yield UnicodeDataEntry(codepoint, unicodedata.name(character, None), category)


def build_characters(
    entries: Iterable[UnicodeDataEntry],
    aliases: Dict[int, Aliases],
    names_list: Dict[int, List[str]],
) -> List[CodepointInfo]:
    """
    Merges the alias files into per-character records.

    Controls take their first control alias as their name. When UnicodeData does
    not supply a Unicode 1.0 name, a control's first upper-case NamesList alias is
    used instead (NamesList lists the Unicode 1.0 name first for controls).
    """
    characters = []
    unnamed = 0

    for entry in entries:
        codepoint = entry.codepoint
        control_names, abbreviations = aliases.get(codepoint, Aliases())
        name = entry.name

        if not name:
            if control_names:
                name, control_names = control_names[0], control_names[1:]
            elif entry.category == "Cc":
                # The code point label; see ch04.pdf (4.8 Name, Code Point Labels)
                name = f"<control-{codepoint:04X}>"
            else:
                unnamed += 1
                continue

        listed = names_list.get(codepoint, ())
        unicode1_name = entry.unicode1_name
        if unicode1_name is None and entry.category == "Cc" and listed and listed[0].isupper():
            unicode1_name = listed[0]

        characters.append(
            CodepointInfo(
                id=codepoint,
                name=name,
                category=Category.from_tag(entry.category),
                control_names=tuple(control_names),
                abbreviations=tuple(abbreviations),
                unicode1_name=unicode1_name,
                informative_aliases=tuple(a for a in listed if a != unicode1_name),
            )
        )

    if unnamed:
        _logger.warning("Dropped %d characters that have no name", unnamed)

    return characters


##################################### Entry point ######################################


def load_source(ucd_dir=None) -> SourceData:
    """
    Loads the dataset.

    With no directory, names and categories come from the interpreter's
    unicodedata module, and blocks and aliases from the files bundled in DATA_DIR.
    With a directory, everything is read from the UCD files found there:
    UnicodeData.txt and Blocks.txt are required, NameAliases.txt and
    NamesList.txt are optional.

    The version of the character data is unicodedata's on the first path, and
    the one named in Blocks.txt on the second. Every source whose own version
    differs is logged.
    """
    if ucd_dir is None:
        directory = DATA_DIR
        _logger.info(
            "Loading characters from unicodedata %s with bundled blocks and aliases",
            unicodedata.unidata_version,
        )
    else:
        directory = Path(ucd_dir)
        _logger.info("Loading the Unicode Character Database from %s", directory)

    files = {
        "Blocks.txt": read_lines(directory / "Blocks.txt"),
        "NameAliases.txt": read_optional_lines(directory / "NameAliases.txt"),
        "NamesList.txt": read_optional_lines(directory / "NamesList.txt"),
    }
    blocks = parse_blocks(files["Blocks.txt"])
    aliases = parse_name_aliases(files["NameAliases.txt"])
    names_list = parse_names_list(files["NamesList.txt"])

    data_versions = {}
    if ucd_dir is None:
        data_versions["unicodedata"] = unicodedata.unidata_version
        entries = characters_from_unicodedata()
    else:
        entries = parse_unicode_data_lines(read_lines(directory / "UnicodeData.txt"))
    for file_name, lines in files.items():
        version = file_version(lines)
        if version is not None:
            data_versions[file_name] = version

    unicode_version = data_versions.get("unicodedata") or data_versions.get("Blocks.txt")
    if unicode_version is None and data_versions:
        unicode_version = next(iter(data_versions.values()))
    for source, version in data_versions.items():
        if version != unicode_version:
            _logger.warning(
                "%s is from Unicode %s, but the character data is Unicode %s",
                source,
                version,
                unicode_version,
            )

    characters = build_characters(entries, aliases, names_list)
    _logger.info(
        "Loaded %d blocks and %d characters "
        "(%d with name aliases, %d with informative aliases)",
        len(blocks),
        len(characters),
        len(aliases),
        sum(1 for info in characters if info.informative_aliases),
    )

    return SourceData(
        blocks,
        CategoryTree.default(),
        characters,
        unicode_version=unicode_version,
        data_versions=MappingProxyType(data_versions),
    )


def read_lines(path: Path) -> List[str]:
    with open(path, encoding="UTF-8") as data_file:
        return list(data_file)


def read_optional_lines(path: Path) -> List[str]:
    if not path.is_file():
        _logger.warning("%s not found; continuing without it", path)
        return []
    return read_lines(path)


####################################### Utilties #######################################


def next_or_none(it):
    try:
        return next(it)
    except StopIteration:
        return None
