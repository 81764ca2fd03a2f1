"""
Core domain models, fixed-point primitives, and wire contracts.

This module contains the foundational building blocks that are independent
of external systems (key management, transaction envelopes, transport).
"""
