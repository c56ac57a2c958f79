"""
Core Application - Infrastructure & Base Classes

Generic, reusable base classes with no domain-specific logic.

Models (import from core.models):
    - BaseModel: Abstract model with timestamps (created_at, updated_at)
    - UUIDPrimaryKeyMixin: UUID as primary key

Services (import from core.services):
    - BaseService: Base class for service layer

Exceptions (import from core.exceptions):
    - BaseApplicationError and its ValidationError, NotFoundError and
      ExternalServiceError subclasses
"""
