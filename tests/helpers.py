from unipoints.block import Block
from unipoints.category import Category, CategoryTree
from unipoints.info import CodepointInfo
from unipoints.parse_ucd import SourceData
from unipoints.plane import PLANES

BMP, SMP = PLANES[0], PLANES[1]

BASIC_LATIN = Block(0x0000, 0x007F, "Basic Latin", BMP)
LATIN_1_SUPPLEMENT = Block(0x0080, 0x00FF, "Latin-1 Supplement", BMP)
EMOTICONS = Block(0x1F600, 0x1F64F, "Emoticons", SMP)


def character(codepoint, name, category=Category.OTHER_SYMBOL, **fields):
    return CodepointInfo(codepoint, name, category, **fields)


def small_characters():
    return [
        character(
            0x000A,
            "LINE FEED",
            Category.CONTROL,
            control_names=("NEW LINE", "END OF LINE"),
            abbreviations=("LF", "NL", "EOL"),
            unicode1_name="LINE FEED (LF)",
            informative_aliases=("new line (NL)", "end of line (EOL)"),
        ),
        character(0x0041, "LATIN CAPITAL LETTER A", Category.UPPERCASE_LETTER),
        character(0x0061, "LATIN SMALL LETTER A", Category.LOWERCASE_LETTER),
        character(0x00A0, "NO-BREAK SPACE", Category.SPACE_SEPARATOR, abbreviations=("NBSP",)),
        # A code point in a gap between blocks.
        character(0x0800, "SAMARITAN LETTER ALAF", Category.OTHER_LETTER),
        character(0x1F600, "GRINNING FACE"),
    ]


def make_source(
    blocks=None, characters=None, categories=None, unicode_version="15.1.0"
) -> SourceData:
    return SourceData(
        blocks=[BASIC_LATIN, LATIN_1_SUPPLEMENT, EMOTICONS] if blocks is None else blocks,
        categories=CategoryTree.default() if categories is None else categories,
        characters=small_characters() if characters is None else characters,
        unicode_version=unicode_version,
        data_versions={"Blocks.txt": unicode_version} if unicode_version else {},
    )
