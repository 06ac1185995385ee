"""
Content type parsing.

Parses raw ``Content-Type`` values found in request and response bodies and
classifies them into the categories the generator cares about.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple


class InvalidContentTypeError(ValueError):
    """Raised when a raw content type is not of the form ``type/subtype``."""

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(f"Invalid content type string: '{raw}'")


class ContentTypeCategory(Enum):
    """Coarse classification of a content type."""

    JSON = "json"
    URL_ENCODED_FORM = "urlEncodedForm"
    MULTIPART = "multipart"
    BINARY = "binary"


@dataclass(frozen=True)
class ContentType:
    """
    A parsed content type, preserving the casing used in the document.

    Type, subtype and parameter comparisons are case insensitive, so most
    accessors expose a lowercased form; the original casing is kept for
    naming and for echoing values back to users.
    """

    originally_cased_type: str
    originally_cased_subtype: str
    lowercased_parameter_pairs: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def parse(cls, raw: str) -> "ContentType":
        """
        Parse a raw content type value.

        Args:
            raw: Value such as ``application/json; charset=utf-8``

        Returns:
            Parsed content type

        Raises:
            InvalidContentTypeError: If the value has no ``type/subtype`` part
        """
        parts = [part.strip() for part in raw.split(";")]
        type_and_subtype = parts[0].split("/")
        if len(type_and_subtype) != 2 or not all(type_and_subtype):
            raise InvalidContentTypeError(raw)

        params: List[str] = [part.lower() for part in parts[1:] if part]
        return cls(
            originally_cased_type=type_and_subtype[0].strip(),
            originally_cased_subtype=type_and_subtype[1].strip(),
            lowercased_parameter_pairs=tuple(params),
        )

    @property
    def lowercased_type(self) -> str:
        return self.originally_cased_type.lower()

    @property
    def lowercased_subtype(self) -> str:
        return self.originally_cased_subtype.lower()

    @property
    def lowercased_type_and_subtype(self) -> str:
        return f"{self.lowercased_type}/{self.lowercased_subtype}"

    @property
    def originally_cased_type_and_subtype(self) -> str:
        return f"{self.originally_cased_type}/{self.originally_cased_subtype}"

    @property
    def lowercased_parameters_string(self) -> str:
        return "".join(f"; {pair}" for pair in self.lowercased_parameter_pairs)

    @property
    def lowercased_type_subtype_and_parameters(self) -> str:
        return self.lowercased_type_and_subtype + self.lowercased_parameters_string

    @property
    def originally_cased_type_subtype_and_parameters(self) -> str:
        return self.originally_cased_type_and_subtype + self.lowercased_parameters_string

    @property
    def category(self) -> ContentTypeCategory:
        """Classify the content type by its lowercased type and subtype."""
        if self.lowercased_type == "application" and self.lowercased_subtype.endswith("json"):
            return ContentTypeCategory.JSON
        if self.lowercased_type_and_subtype == "application/x-www-form-urlencoded":
            return ContentTypeCategory.URL_ENCODED_FORM
        if self.lowercased_type == "multipart":
            return ContentTypeCategory.MULTIPART
        return ContentTypeCategory.BINARY

    @property
    def is_json(self) -> bool:
        return self.category is ContentTypeCategory.JSON

    def __str__(self) -> str:
        return self.originally_cased_type_subtype_and_parameters
