"""Custom exceptions for the application."""
from typing import Any


class EntityNotFound(Exception):
    """Raised when an entity is not found in the database."""

    def __init__(self, entity_name: str, entity_id: Any):
        """
        Initialize the exception.

        Args:
            entity_name: Name of the entity that was not found
            entity_id: ID of the entity that was not found
        """
        super().__init__(f"{entity_name} with ID {entity_id} not found")
        self.entity_name = entity_name
        self.entity_id = entity_id


class PersistenceError(Exception):
    """Raised when an entity could not be written to the store."""

    def __init__(self, entity_name: str, reason: str):
        """
        Initialize the exception.

        Args:
            entity_name: Name of the entity that failed to persist
            reason: Underlying store error message
        """
        super().__init__(f"Failed to persist {entity_name}: {reason}")
        self.entity_name = entity_name
        self.reason = reason


class NotificationError(Exception):
    """
    Raised when a notification could not be delivered for a persisted entity.

    The entity has already been written when this is raised, so callers
    receive its ID to report a partial success.
    """

    def __init__(self, entity_id: Any, reason: str):
        super().__init__(f"Failed to send email: {reason}")
        self.entity_id = entity_id
        self.reason = reason


class MailDeliveryError(Exception):
    """Raised by mail senders when a message could not be submitted."""
