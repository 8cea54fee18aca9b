"""Unit tests for RelatedEntityType parsing and the verifier's model registry."""

import pytest

from infrastructure.storage import MemoryRecordStore
from models import PurchaseOrder
from tenancy.verifier import DEFAULT_RELATED_MODELS, RelatedEntityType, TenantVerifier


class TestParse:

    @pytest.mark.parametrize(
        "raw",
        ["purchase_order", "purchaseOrder", "PurchaseOrder", "purchase-order", "PURCHASE_ORDER", " purchase_order "],
    )
    def test_spelling_variants_parse_to_one_member(self, raw):
        assert RelatedEntityType.parse(raw) is RelatedEntityType.PURCHASE_ORDER

    def test_member_passes_through(self):
        assert RelatedEntityType.parse(RelatedEntityType.TASK) is RelatedEntityType.TASK

    @pytest.mark.parametrize("raw", ["invoice_line", "", None, 42])
    def test_unknown_values_parse_to_none(self, raw):
        assert RelatedEntityType.parse(raw) is None


class TestSpellings:

    def test_multi_word_type(self):
        assert RelatedEntityType.TASK_LIST.spellings() == (
            "task_list",
            "taskList",
            "TaskList",
            "task-list",
            "TASK_LIST",
        )

    def test_single_word_type_has_no_duplicates(self):
        assert RelatedEntityType.TASK.spellings() == ("task", "Task", "TASK")


class TestVerifierRegistry:

    def test_every_member_has_a_model(self):
        assert set(DEFAULT_RELATED_MODELS) == set(RelatedEntityType)

    def test_model_lookup(self):
        verifier = TenantVerifier(MemoryRecordStore())
        assert verifier.model_for(RelatedEntityType.PURCHASE_ORDER) is PurchaseOrder

    def test_incomplete_registry_is_rejected(self):
        partial = {RelatedEntityType.PURCHASE_ORDER: PurchaseOrder}
        with pytest.raises(ValueError) as exc:
            TenantVerifier(MemoryRecordStore(), models=partial)

        assert "project" in str(exc.value)
