"""
Input validation.

Runs before any browser is launched; a rejected input never costs a render.
"""

import re
from typing import Any

from .exceptions import HtmlValidationError

_TAG_PATTERN = re.compile(r"<[^>]+>")


def validate_html(content: Any) -> str:
    """
    Check that content is a non-empty string containing HTML markup.

    Returns:
        The content unchanged

    Raises:
        HtmlValidationError: With a message suitable for the end user
    """
    if not content or not isinstance(content, str):
        raise HtmlValidationError("HTML content must be a non-empty string")
    if not content.strip():
        raise HtmlValidationError("HTML content cannot be empty")
    if not _TAG_PATTERN.search(content):
        raise HtmlValidationError("Content does not appear to contain HTML tags")
    return content
