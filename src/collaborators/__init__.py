"""Коллабораторы пула: токен владения полисом, Treasury, Oracle."""

from .oracle import SimpleOracle
from .policy_token import PolicyToken
from .treasury import Treasury

__all__ = [
    "PolicyToken",
    "SimpleOracle",
    "Treasury",
]
