"""Chainable SQL statement builder."""

from sqlprep.builder._base import Sql
from sqlprep.builder._keywords import DEFAULT_KEYWORDS, Keywords

__all__ = ("DEFAULT_KEYWORDS", "Keywords", "Sql")
