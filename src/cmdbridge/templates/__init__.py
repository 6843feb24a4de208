"""
Command template compilation and placeholder substitution.
"""

from .engine import compile_template, execute_template, tokenize_template

__all__ = [
    "compile_template",
    "execute_template",
    "tokenize_template",
]
