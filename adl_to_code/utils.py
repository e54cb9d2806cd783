"""
Utility functions for the ADL code generator.
"""

import re

# Regex pattern to split text into words, handling camelCase boundaries
_WORD_PATTERN = re.compile(r"[a-z]+|[A-Z][a-z]*|[0-9]+")


def _normalize_separators(text: str) -> str:
    """Normalize separators (underscores, hyphens, dots) to spaces."""
    return text.replace("_", " ").replace("-", " ").replace(".", " ")


def _split_into_words(text: str) -> list[str]:
    """Split text into words, handling camelCase boundaries."""
    return _WORD_PATTERN.findall(_normalize_separators(text))


def pascal_case(text: str) -> str:
    """Convert snake_case, camelCase, or space-separated text to PascalCase.

    Examples:
        "app_user" -> "AppUser"
        "postLogin" -> "PostLogin"
        "first 3 rows" -> "First3Rows"
    """
    if not text:
        return ""
    return "".join(word.capitalize() for word in _split_into_words(text))


def camel_case(text: str) -> str:
    """Convert text to camelCase.

    Examples:
        "post login" -> "postLogin"
        "post new_message" -> "postNewMessage"
    """
    pascal = pascal_case(text)
    return pascal[:1].lower() + pascal[1:]


def snake_case(text: str) -> str:
    """Convert text to snake_case.

    Examples:
        "hashedPassword" -> "hashed_password"
        "AppUser" -> "app_user"
        "posted_at" -> "posted_at"
    """
    return "_".join(word.lower() for word in _split_into_words(text))
