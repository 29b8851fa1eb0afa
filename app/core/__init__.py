"""
Core Application - Infrastructure & Base Classes

This app contains infrastructure code shared by the domain apps:

Models (import from core.models):
    - BaseModel: Abstract model with timestamps (created_at, updated_at)

Model Mixins (import from core.model_mixins):
    - UUIDPrimaryKeyMixin: UUID as primary key

Services (import from core.services):
    - BaseService: Base class for service layer
    - ServiceResult: Standard result wrapper for success/failure handling

Database (import from core.database):
    - bootstrap_database: Integrity check, recreate-on-corruption, migrate
    - configure_sqlite_connection: WAL + foreign key pragmas per connection

Views (import from core.views):
    - health_check: Database connectivity probe
    - result_response: ServiceResult to DRF Response

Validators (import from core.validators):
    - validate_file_size: File size validation
    - validate_not_empty_file: Reject zero-byte uploads

Note:
    Models, mixins and views depend on Django's app registry being ready.
    Import them directly from their modules.
"""

# Services (no Django model dependencies)
from .services import BaseService, ServiceResult

__all__ = [
    "BaseService",
    "ServiceResult",
]
