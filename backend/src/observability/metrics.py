"""Prometheus metrics for the storage layer.

Defines operational counters for monitoring and alerting on data-integrity
and contention signals.
"""

from prometheus_client import Counter, Histogram

# Store failures surfaced to callers
storage_errors_total = Counter(
    "bizops_storage_errors_total",
    "Storage errors raised by the record store",
    ["backend", "kind"]  # kind: unique|foreign_key|not_null|other|storage
)

storage_transaction_seconds = Histogram(
    "bizops_storage_transaction_seconds",
    "Wall time of record store transactions in seconds",
    ["backend"],
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0]
)

# Document numbering contention
number_allocation_retries_total = Counter(
    "bizops_number_allocation_retries_total",
    "Document number allocations retried after a uniqueness conflict",
    ["prefix"]  # prefix: QUO|INV|PO
)

# Inventory ledger
stock_adjustments_total = Counter(
    "bizops_stock_adjustments_total",
    "Inventory stock adjustments applied by the ledger",
    ["operation"]  # operation: create|update|delete|cascade
)

# Project cascade deletion
cascade_deletes_total = Counter(
    "bizops_cascade_deletes_total",
    "Project cascade deletions",
    ["status"]  # status: success|not_found|error
)

# Cross-entity verification
unknown_related_type_total = Counter(
    "bizops_unknown_related_type_total",
    "Lookups naming an unknown related entity type"
)
