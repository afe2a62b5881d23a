"""
Domain слой домена Parsing.

Содержит исключения для Parsing домена.
"""

from .exceptions import ParsingError, KnowledgeBaseError

__all__ = [
    "ParsingError",
    "KnowledgeBaseError",
]
