"""Tenancy module - tenant filter, cross-entity ownership checks, request tenant context."""

from domain.storage.tenant_filter import UNSCOPED, TenantFilter

from .verifier import DEFAULT_RELATED_MODELS, RELATED_TYPES_BY_MODEL, RelatedEntityType, TenantVerifier

__all__ = [
    "TenantFilter",
    "UNSCOPED",
    "RelatedEntityType",
    "TenantVerifier",
    "DEFAULT_RELATED_MODELS",
    "RELATED_TYPES_BY_MODEL",
]
