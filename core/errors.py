#!/usr/bin/env python3
"""
Service-layer exceptions.

Raised by the core services and mapped to HTTP status codes by
web/backend/exceptions.py.
"""


class TalentScoutError(Exception):
    """Base exception for service layer errors."""
    pass


class NotFoundError(TalentScoutError):
    """Raised when a job, candidate, application, match or screening is missing."""

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class ValidationError(TalentScoutError):
    """Raised when caller-supplied input is invalid."""
    pass


class PreconditionError(TalentScoutError):
    """Raised when an operation is not allowed in the current state."""
    pass


class AdapterError(TalentScoutError):
    """Raised when an external capability (LLM, GitHub, SMTP) cannot be used at all."""
    pass


class PersistenceConflict(TalentScoutError):
    """Raised when a uniqueness constraint rejects a write."""
    pass
