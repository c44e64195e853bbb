"""
Enums used across the application.
"""

from enum import Enum


class UserRole(str, Enum):
    """Account role. Admins may edit or delete any post or comment."""

    USER = "user"
    ADMIN = "admin"


class PostStatus(str, Enum):
    """Publication state of a post."""

    DRAFT = "draft"
    PUBLISHED = "published"


class PostCategory(str, Enum):
    """
    Fixed set of post categories.

    Every post belongs to exactly one category.
    """

    TECHNOLOGY = "Technology"
    LIFESTYLE = "Lifestyle"
    TRAVEL = "Travel"
    FOOD = "Food"
    HEALTH = "Health"
    BUSINESS = "Business"
    LITERATURE = "Literature"
    CULTURE = "Culture"
    OTHER = "Other"


class PostSort(str, Enum):
    """Orderings accepted by the post listing."""

    RECENT = "recent"
    POPULAR = "popular"
    MOST_LIKED = "mostLiked"
    MOST_COMMENTED = "mostCommented"


def enum_values(enum_cls: type[Enum]) -> list[str]:
    """Persist enum values ("Technology") rather than member names ("TECHNOLOGY")."""
    return [member.value for member in enum_cls]
