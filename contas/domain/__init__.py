"""Domain rules: field validators, identifier checksums, models and errors."""

from .documents import DocumentKind, check_individual_id, check_legal_entity_id, validate_document
from .passwords import ValidationResult, check_password

__all__ = [
    "DocumentKind",
    "ValidationResult",
    "check_individual_id",
    "check_legal_entity_id",
    "check_password",
    "validate_document",
]
