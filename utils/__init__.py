"""Utility modules for the Open JTalk speech backend.

This package provides logging setup, path handling, and text preparation helpers.
"""

from utils.file_utils import FileUtils
from utils.logger_utils import LoggerUtils
from utils.string_utils import StringUtils

__all__: list[str] = ["FileUtils", "LoggerUtils", "StringUtils"]
