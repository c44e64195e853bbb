"""
Utilities Package

Common utility functions and helpers.

Contents:
=========
- security: Password hashing and token management
- text: Slug generation

Usage:
======
    from bloghub.shared.utils.security import SecurityUtils
    from bloghub.shared.utils.text import slugify
"""

from bloghub.shared.utils.security import SecurityUtils
from bloghub.shared.utils.text import slugify, random_suffix

__all__ = [
    "SecurityUtils",
    "slugify",
    "random_suffix",
]
