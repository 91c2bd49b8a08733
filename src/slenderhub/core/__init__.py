"""
Core domain models and store contracts.

This module contains the foundational building blocks that are independent
of external systems (auth, storage, inference APIs).
"""
