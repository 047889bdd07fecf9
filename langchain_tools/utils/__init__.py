"""Common utilities for LangChain tools."""

from .output import output_dict

__all__ = [
    "output_dict",
]
