"""Filename predicates used by the location catalog.

Predicates receive a bare directory entry name, never a full path.
There is no fuzzy matching: a short application name can match
unrelated entries and that is accepted.
"""

from __future__ import annotations


def exact_name(entry: str, target: str) -> bool:
    """Entry name equals ``target`` exactly, case-sensitive."""
    return bool(target) and entry == target


def prefix_match(entry: str, prefix: str) -> bool:
    """Entry name starts with ``prefix``, case-sensitive."""
    return bool(prefix) and entry.startswith(prefix)


def contains_fold(entry: str, needle: str) -> bool:
    """Entry name contains ``needle`` ignoring case."""
    return bool(needle) and needle.casefold() in entry.casefold()
