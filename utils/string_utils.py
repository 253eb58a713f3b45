from __future__ import annotations

import re
from typing import Final

from models.re_models import SSML_TAG_PATTERN

__all__: list[str] = ["StringUtils"]

# Open JTalk reads plain text, so the five predefined XML entities are turned back into characters.
# '&amp;' must come last, otherwise '&amp;lt;' would turn into '<'.
XML_ENTITIES: Final[tuple[tuple[str, str], ...]] = (
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&apos;", "'"),
    ("&amp;", "&"),
)


class StringUtils:
    """Utility class for the text handed to the synthesis engine."""

    @staticmethod
    def ensure_str(value: str | None) -> str:
        """Ensure that the value is a string, returning an empty string if None.

        Args:
            value (str | None): The value to ensure as a string.

        Returns:
            str: The value as a string, or empty string if None.
        """
        if not isinstance(value, str):
            value = str(value) if value is not None else ""
        return value

    @staticmethod
    def strip_ssml(value: str | None) -> str:
        """Remove SSML markup and decode XML entities.

        Tags are dropped entirely; the text between them is kept in order.

        Args:
            value (str | None): Text that may contain SSML.

        Returns:
            str: Plain text suitable for the synthesis engine.

        Example:
            >>> StringUtils.strip_ssml("<speak>a &lt; b</speak>")
            'a < b'
        """
        value = StringUtils.ensure_str(value)
        if not value:
            return value

        plain: str = re.sub(SSML_TAG_PATTERN, "", value)
        for entity, char in XML_ENTITIES:
            plain = plain.replace(entity, char)
        return plain
