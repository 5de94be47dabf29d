"""Custom exceptions for the intake context."""

from typing import List, Optional


class InvalidResumeDataError(ValueError):
    """
    Raised when resume data fails structural validation.

    Attributes:
        message: Error description, prefixed with its location in the tree
        path: Hierarchical location (e.g., "Experience[0] → position[1]")
    """

    def __init__(self, message: str, path: Optional[str] = None):
        self.message = message
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class RoleProfileNotFoundError(KeyError):
    """
    Raised when a role profile ID is not present in the resume data.

    Attributes:
        profile_id: The requested ID
        available: IDs that do exist
    """

    def __init__(self, profile_id: str, available: Optional[List[str]] = None):
        self.profile_id = profile_id
        self.available = available or []
        self.message = f"Role profile not found: {profile_id}"
        if self.available:
            self.message += f". Available profiles: {', '.join(self.available)}"
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message
