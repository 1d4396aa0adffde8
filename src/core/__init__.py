"""
Core domain models, fixed-point primitives, and JSON contracts.

This module contains the foundational building blocks that are independent
of the engine's external collaborators (tokens, price feeds).
"""
