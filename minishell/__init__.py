"""Syntax checking, expansion, tokenizing, redirections and an environment table for a small shell."""

__version__ = "0.1.0"
__all__ = [
    "environment",
    "errors",
    "expansion",
    "parser",
    "redirect",
    "syntax",
]