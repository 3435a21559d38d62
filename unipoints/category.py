"""
Unicode General_Category values and their two-level hierarchy.

See: https://www.unicode.org/reports/tr44/#General_Category_Values
"""

from enum import Enum
from typing import Dict, FrozenSet, Mapping, Optional, Tuple

__all__ = ["Category", "CategoryTree"]


class Category(Enum):
    LETTER = "L"
    UPPERCASE_LETTER = "Lu"
    LOWERCASE_LETTER = "Ll"
    TITLECASE_LETTER = "Lt"
    MODIFIER_LETTER = "Lm"
    OTHER_LETTER = "Lo"

    MARK = "M"
    NONSPACING_MARK = "Mn"
    SPACING_MARK = "Mc"
    ENCLOSING_MARK = "Me"

    NUMBER = "N"
    DECIMAL_NUMBER = "Nd"
    LETTER_NUMBER = "Nl"
    OTHER_NUMBER = "No"

    PUNCTUATION = "P"
    CONNECTOR_PUNCTUATION = "Pc"
    DASH_PUNCTUATION = "Pd"
    OPEN_PUNCTUATION = "Ps"
    CLOSE_PUNCTUATION = "Pe"
    INITIAL_PUNCTUATION = "Pi"
    FINAL_PUNCTUATION = "Pf"
    OTHER_PUNCTUATION = "Po"

    SYMBOL = "S"
    MATH_SYMBOL = "Sm"
    CURRENCY_SYMBOL = "Sc"
    MODIFIER_SYMBOL = "Sk"
    OTHER_SYMBOL = "So"

    SEPARATOR = "Z"
    SPACE_SEPARATOR = "Zs"
    LINE_SEPARATOR = "Zl"
    PARAGRAPH_SEPARATOR = "Zp"

    OTHER = "C"
    CONTROL = "Cc"
    FORMAT = "Cf"
    SURROGATE = "Cs"
    PRIVATE_USE = "Co"
    UNASSIGNED = "Cn"

    @property
    def tag(self) -> str:
        return self.value

    @property
    def long_name(self) -> str:
        """
        The long property value alias.

        >>> Category.UPPERCASE_LETTER.long_name
        'Uppercase_Letter'
        """
        return "_".join(word.capitalize() for word in self.name.split("_"))

    @property
    def default_parent(self) -> Optional["Category"]:
        """
        The group a category belongs to in the standard hierarchy.

        >>> Category.DECIMAL_NUMBER.default_parent
        <Category.NUMBER: 'N'>
        >>> Category.NUMBER.default_parent is None
        True
        """
        if len(self.value) == 1:
            return None
        return Category(self.value[0])

    @classmethod
    def from_tag(cls, tag: str) -> "Category":
        """
        >>> Category.from_tag("Zs")
        <Category.SPACE_SEPARATOR: 'Zs'>
        """
        return cls(tag)


class CategoryTree:
    """
    The parent/child relation between categories.

    The relation is data, not a property of the enum, so that alternate
    (including deliberately broken) hierarchies can be audited.
    """

    def __init__(self, parents: Mapping[Category, Optional[Category]]):
        self._parents: Dict[Category, Optional[Category]] = dict(parents)

        children: Dict[Category, list] = {category: [] for category in self._parents}
        for category in Category:
            parent = self._parents.get(category)
            if category in self._parents and parent is not None:
                children.setdefault(parent, []).append(category)
        self._children: Dict[Category, Tuple[Category, ...]] = {
            category: tuple(kids) for category, kids in children.items()
        }

    @classmethod
    def default(cls) -> "CategoryTree":
        """
        >>> tree = CategoryTree.default()
        >>> [c.tag for c in tree.children(Category.MARK)]
        ['Mn', 'Mc', 'Me']
        >>> tree.is_leaf(Category.SURROGATE)
        True
        """
        return cls({category: category.default_parent for category in Category})

    def all_categories(self) -> FrozenSet[Category]:
        return frozenset(self._parents)

    def parent(self, category: Category) -> Optional[Category]:
        return self._parents.get(category)

    def children(self, category: Category) -> Tuple[Category, ...]:
        return self._children.get(category, ())

    def is_leaf(self, category: Category) -> bool:
        return not self.children(category)

    def roots(self) -> Tuple[Category, ...]:
        return tuple(
            category
            for category in Category
            if category in self._parents and self._parents[category] is None
        )

    def __contains__(self, category: Category) -> bool:
        return category in self._parents
