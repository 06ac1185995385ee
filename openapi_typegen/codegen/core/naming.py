"""
Naming utilities for safe code generation.

Maps arbitrary strings found in an OpenAPI document (schema keys, property
names, enum values, content types) to identifiers that are valid in the
target language. Two strategies are available: ``defensive`` escapes every
disallowed character, ``idiomatic`` produces camelCase/PascalCase names and
only escapes what it cannot classify.
"""

import unicodedata
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Optional

from .content_type import ContentType


class NamingStrategy(Enum):
    """Available safe naming strategies."""

    DEFENSIVE = "defensive"
    IDIOMATIC = "idiomatic"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value == value.lower():
                    return member
        return None


# Printable ASCII characters mapped to their HTML entity names.
SPECIAL_CHARS_MAP: Dict[str, str] = {
    " ": "space",
    "!": "excl",
    '"': "quot",
    "#": "num",
    "$": "dollar",
    "%": "percnt",
    "&": "amp",
    "'": "apos",
    "(": "lpar",
    ")": "rpar",
    "*": "ast",
    "+": "plus",
    ",": "comma",
    "-": "hyphen",
    ".": "period",
    "/": "sol",
    ":": "colon",
    ";": "semi",
    "<": "lt",
    "=": "equals",
    ">": "gt",
    "?": "quest",
    "@": "commat",
    "[": "lbrack",
    "\\": "bsol",
    "]": "rbrack",
    "^": "hat",
    "`": "grave",
    "{": "lcub",
    "|": "verbar",
    "}": "rcub",
    "~": "tilde",
}

# Well-known content types with a fixed identifier, keyed by the lowercased
# "type/subtype; parameters" string.
CONTENT_TYPE_OVERRIDES: Dict[str, str] = {
    "application/json": "json",
    "application/x-www-form-urlencoded": "urlEncodedForm",
    "multipart/form-data": "multipartForm",
    "text/plain": "plainText",
    "*/*": "any",
    "application/xml": "xml",
    "application/octet-stream": "binary",
    "text/html": "html",
    "application/yaml": "yaml",
    "text/csv": "csv",
    "image/png": "png",
    "application/pdf": "pdf",
    "image/jpeg": "jpeg",
}

WORD_SEPARATORS = frozenset({"_", "-", " ", "/", "+"})


def _is_letter(char: str) -> bool:
    return unicodedata.category(char)[0] in ("L", "M")


def _is_alphanumeric(char: str) -> bool:
    return unicodedata.category(char)[0] in ("L", "M", "N")


def _is_decimal_digit(char: str) -> bool:
    return unicodedata.category(char) == "Nd"


def uppercase_first_letter(value: str) -> str:
    """Return ``value`` with its first character uppercased."""
    return value[:1].upper() + value[1:]


def lowercase_first_letter(value: str) -> str:
    """Return ``value`` with its first character lowercased."""
    return value[:1].lower() + value[1:]


class SafeNameGenerator(ABC):
    """Computes identifiers that are safe to use in generated code."""

    @abstractmethod
    def type_name(self, documented_name: str) -> str:
        """Return an identifier usable as a type name."""

    @abstractmethod
    def member_name(self, documented_name: str) -> str:
        """Return an identifier usable as a property, case or variable name."""

    @abstractmethod
    def content_type_name(self, content_type: ContentType) -> str:
        """Return an identifier describing ``content_type``."""

    @staticmethod
    def content_type_override(content_type: ContentType) -> Optional[str]:
        """Return the fixed identifier for well-known content types, if any."""
        return CONTENT_TYPE_OVERRIDES.get(
            content_type.lowercased_type_subtype_and_parameters
        )


class DefensiveSafeNameGenerator(SafeNameGenerator):
    """
    Escapes every character that is not allowed in an identifier.

    For example ``$nake…`` becomes ``_dollar_nake_x2026_``: the dollar sign
    is replaced by its entity name and the ellipsis by its code point.
    """

    def __init__(self, keywords: Optional[Iterable[str]] = None):
        """
        Initialize the generator.

        Args:
            keywords: Reserved words of the target language. Results that
                collide with one of them are prefixed with an underscore.
        """
        self.keywords: FrozenSet[str] = frozenset(keywords or ())

    def type_name(self, documented_name: str) -> str:
        return self._safe_name(documented_name)

    def member_name(self, documented_name: str) -> str:
        return self._safe_name(documented_name)

    def content_type_name(self, content_type: ContentType) -> str:
        override = self.content_type_override(content_type)
        if override:
            return override

        separator = "_"
        prefix = separator.join(
            (
                self._safe_name(content_type.originally_cased_type),
                self._safe_name(content_type.originally_cased_subtype),
            )
        )
        params = content_type.lowercased_parameter_pairs
        if not params:
            return prefix

        safe_params = separator.join(
            separator.join(self._safe_name(component) for component in pair.split("="))
            for pair in params
        )
        return prefix + separator + safe_params

    def _safe_name(self, documented_name: str) -> str:
        if not documented_name:
            return "_empty"

        sanitized = []
        for index, char in enumerate(documented_name):
            if index == 0:
                allowed = _is_letter(char) or char == "_"
            else:
                allowed = _is_alphanumeric(char) or char == "_"

            if allowed:
                sanitized.append(char)
            elif index == 0 and _is_decimal_digit(char):
                sanitized.append("_")
                sanitized.append(char)
            else:
                entity = SPECIAL_CHARS_MAP.get(char)
                if entity is None:
                    entity = f"x{ord(char):X}"
                sanitized.append(f"_{entity}_")

        result = "".join(sanitized)

        # A lone underscore is a valid identifier elsewhere, so it cannot live
        # in the entity map.
        if result == "_":
            return "_underscore_"

        if result in self.keywords:
            return f"_{result}"
        return result


class _IdiomaticState(Enum):
    PRE_FIRST_WORD = "pre_first_word"
    ACCUMULATING_FIRST_WORD = "accumulating_first_word"
    ACCUMULATING_WORD = "accumulating_word"
    WAITING_FOR_WORD_STARTER = "waiting_for_word_starter"


class IdiomaticSafeNameGenerator(SafeNameGenerator):
    """
    Produces UpperCamelCase type names and lowerCamelCase member names.

    Word separators (``_ - space / +``) are removed and the following letter
    is capitalized, periods become underscores and curly braces are dropped.
    Characters that cannot be classified are kept and escaped by the
    defensive strategy, which also handles keyword collisions.
    """

    def __init__(self, defensive: DefensiveSafeNameGenerator):
        self.defensive = defensive

    def type_name(self, documented_name: str) -> str:
        return self._safe_name(documented_name, capitalize=True)

    def member_name(self, documented_name: str) -> str:
        return self._safe_name(documented_name, capitalize=False)

    def content_type_name(self, content_type: ContentType) -> str:
        override = self.content_type_override(content_type)
        if override:
            return override

        safe_type = self.member_name(content_type.originally_cased_type)
        safe_subtype = self.member_name(content_type.originally_cased_subtype)
        prefix = safe_type + uppercase_first_letter(safe_subtype)
        params = content_type.lowercased_parameter_pairs
        if not params:
            return prefix

        safe_params = "".join(
            "".join(
                uppercase_first_letter(self.member_name(component))
                for component in pair.split("=")
            )
            for pair in params
        )
        return prefix + safe_params

    def _safe_name(self, documented_name: str, capitalize: bool) -> str:
        if not documented_name:
            return "_Empty_" if capitalize else "_empty_"

        # Constants such as HELLO_WORLD are lowercased uniformly.
        is_all_uppercase = not any(char.islower() for char in documented_name)

        buffer = []
        state = _IdiomaticState.PRE_FIRST_WORD
        # Only meaningful while accumulating the first word: lowercase a run
        # of leading capitals ("HTTPProxy" -> "httpProxy").
        accumulating_initial_uppercase = False

        for index, char in enumerate(documented_name):
            is_word_char = char.isalpha() or char.isnumeric()

            if state is _IdiomaticState.PRE_FIRST_WORD:
                if char == "_":
                    buffer.append(char)
                elif char.isnumeric():
                    # The defensive fallback adds the leading underscore.
                    buffer.append(char)
                    state = _IdiomaticState.ACCUMULATING_FIRST_WORD
                    accumulating_initial_uppercase = False
                elif char.isalpha():
                    buffer.append(char.upper() if capitalize else char.lower())
                    state = _IdiomaticState.ACCUMULATING_FIRST_WORD
                    accumulating_initial_uppercase = not capitalize and char.isupper()
                else:
                    buffer.append(char)
                    state = _IdiomaticState.ACCUMULATING_FIRST_WORD
                    accumulating_initial_uppercase = False

            elif state is _IdiomaticState.ACCUMULATING_FIRST_WORD:
                if is_word_char:
                    if is_all_uppercase:
                        buffer.append(char.lower())
                    elif accumulating_initial_uppercase:
                        appended, accumulating_initial_uppercase = self._first_word_char(
                            documented_name, index
                        )
                        buffer.append(appended)
                    else:
                        buffer.append(char)
                elif char in WORD_SEPARATORS:
                    state = _IdiomaticState.WAITING_FOR_WORD_STARTER
                elif char == ".":
                    buffer.append("_")
                    accumulating_initial_uppercase = False
                elif char in "{}":
                    accumulating_initial_uppercase = False
                else:
                    buffer.append(char)
                    accumulating_initial_uppercase = False

            elif state is _IdiomaticState.ACCUMULATING_WORD:
                if is_word_char:
                    buffer.append(char.lower() if is_all_uppercase else char)
                elif char in WORD_SEPARATORS:
                    state = _IdiomaticState.WAITING_FOR_WORD_STARTER
                elif char == ".":
                    buffer.append("_")
                elif char in "{}":
                    pass
                else:
                    buffer.append(char)

            else:
                if char in "_-./+{}":
                    pass
                elif is_word_char:
                    buffer.append(char.upper())
                    state = _IdiomaticState.ACCUMULATING_WORD
                else:
                    buffer.append(char)

        result = "".join(buffer)
        if capitalize:
            return self.defensive.type_name(result)
        return self.defensive.member_name(result)

    @staticmethod
    def _first_word_char(documented_name: str, index: int):
        """
        Lowercase one character of a leading run of capitals.

        Returns the text to append and whether the run continues.
        """
        char = documented_name[index]
        if char.islower():
            return char, False

        suffix = documented_name[index + 1:]
        if len(suffix) < 2:
            # Last or second to last character of the run.
            return char.lower(), False

        following, second_following = suffix[0], suffix[1]
        if following.isupper() and second_following.islower():
            return char.lower(), False
        if following in WORD_SEPARATORS:
            return char.lower(), False
        if following.isupper():
            return char.lower(), True
        return char, False


class OverridableSafeNameGenerator(SafeNameGenerator):
    """Consults user-provided name overrides before the wrapped strategy."""

    def __init__(self, upstream: SafeNameGenerator, overrides: Optional[Dict[str, str]] = None):
        self.upstream = upstream
        self.overrides: Dict[str, str] = dict(overrides or {})

    def type_name(self, documented_name: str) -> str:
        if documented_name in self.overrides:
            return self.overrides[documented_name]
        return self.upstream.type_name(documented_name)

    def member_name(self, documented_name: str) -> str:
        if documented_name in self.overrides:
            return self.overrides[documented_name]
        return self.upstream.member_name(documented_name)

    def content_type_name(self, content_type: ContentType) -> str:
        return self.upstream.content_type_name(content_type)


def create_safe_name_generator(
    strategy=NamingStrategy.DEFENSIVE,
    keywords: Optional[Iterable[str]] = None,
    name_overrides: Optional[Dict[str, str]] = None,
) -> SafeNameGenerator:
    """
    Create a safe name generator.

    Args:
        strategy: ``NamingStrategy`` member or its string value
        keywords: Reserved words of the target language
        name_overrides: Exact document strings mapped to fixed identifiers

    Returns:
        Configured generator, wrapped with overrides when any are given
    """
    defensive = DefensiveSafeNameGenerator(keywords)
    strategy = NamingStrategy(strategy)

    if strategy is NamingStrategy.IDIOMATIC:
        generator: SafeNameGenerator = IdiomaticSafeNameGenerator(defensive)
    else:
        generator = defensive

    if name_overrides:
        return OverridableSafeNameGenerator(generator, name_overrides)
    return generator
