"""Core components of the Open JTalk speech backend.

This package contains the speech synthesis pipeline and its version information.
"""

from core.version import VERSION

__all__: list[str] = ["VERSION"]
