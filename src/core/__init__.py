"""
Core domain models, mathematical primitives, and invariants.

This module contains the foundational building blocks of the pool that are
independent of the execution environment (ledger, collaborators).
"""
