"""Regular expressions and placeholder tokens used by the Open JTalk backend."""

from __future__ import annotations

import re
from re import Pattern
from typing import Final

__all__: list[str] = [
    "SSML_TAG_PATTERN",
    "VOICE_PLACEHOLDER",
]

# Token replaced by the voice identifier in VOICE_FILE_SEARCH_PATH templates
# Example: "/usr/share/hts-voice/$VOICE.htsvoice"
VOICE_PLACEHOLDER: Final[str] = "$VOICE"

# Any markup tag, including comments, processing instructions and self-closing tags
# Example: '<speak>', '</s>', '<break time="1s"/>', '<?xml version="1.0"?>'
SSML_TAG_PATTERN: Final[Pattern[str]] = re.compile(r"<[^<>]*>")
