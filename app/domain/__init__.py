"""Domain layer: exceptions shared by application and infrastructure.

No dependencies on infrastructure or presentation.
"""

from app.domain.exceptions import (
    DuplicateResourceException,
    ResourceNotFoundException,
    UserServiceException,
    ValidationException,
)

__all__ = [
    "DuplicateResourceException",
    "ResourceNotFoundException",
    "UserServiceException",
    "ValidationException",
]
