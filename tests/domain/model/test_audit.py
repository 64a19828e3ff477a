from __future__ import annotations

from datetime import UTC, datetime

import pytest

from artifact_sync.domain.model import (
    ActionCollection,
    AuditRecord,
    Permission,
    Policy,
    public_field_names,
)

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


def _full_record() -> AuditRecord:
    return AuditRecord(
        id="c-1",
        created_at=NOW,
        updated_at=NOW,
        created_by="alice@example.com",
        modified_by="bob@example.com",
        policies={Policy(Permission.MANAGE_ACTIONS, frozenset({"devs"}))},
        user_permissions={"manage:actions"},
        git_sync_id="app-1_abc",
    )


def test_new_record_has_no_id_and_is_not_deleted() -> None:
    record = AuditRecord()

    assert record.is_new()
    assert not record.is_deleted()
    assert record.deleted is False


def test_deleted_flag_is_derived_from_deleted_at() -> None:
    record = AuditRecord(id="c-1")

    record.mark_deleted(now=NOW)

    assert record.is_deleted()
    assert record.deleted is True
    assert record.deleted_at == NOW


def test_mark_deleted_keeps_first_timestamp() -> None:
    record = AuditRecord(id="c-1", deleted_at=NOW)

    record.mark_deleted(now=datetime(2030, 1, 1, tzinfo=UTC))

    assert record.deleted_at == NOW


def test_sanitise_drops_internal_data_only() -> None:
    record = _full_record()

    record.sanitise_to_export_db_object()

    assert record.created_at is None
    assert record.updated_at is None
    assert record.created_by is None
    assert record.modified_by is None
    assert record.policies is None
    assert record.user_permissions is None
    assert record.id == "c-1"
    assert record.git_sync_id == "app-1_abc"


def test_make_pristine_clears_id_and_policies_in_place() -> None:
    record = _full_record()
    policies = record.policies

    record.make_pristine()

    assert record.is_new()
    assert record.updated_at is None
    assert record.policies is policies
    assert policies == set()
    assert record.created_at == NOW
    assert record.git_sync_id == "app-1_abc"


def test_bulk_write_backfills_id_and_timestamps() -> None:
    record = AuditRecord()

    record.update_for_bulk_write_operation(now=NOW)

    assert record.id is not None
    assert record.created_at == NOW
    assert record.updated_at == NOW


def test_bulk_write_preserves_existing_id_and_creation_time() -> None:
    record = AuditRecord(id="c-1", created_at=NOW)
    later = datetime(2024, 6, 1, tzinfo=UTC)

    record.update_for_bulk_write_operation(now=later)

    assert record.id == "c-1"
    assert record.created_at == NOW
    assert record.updated_at == later


def test_git_sync_id_cannot_change_after_persisting() -> None:
    record = AuditRecord(id="c-1", git_sync_id="app-1_abc")

    record.assign_git_sync_id("app-1_abc")
    with pytest.raises(ValueError, match="git_sync_id"):
        record.assign_git_sync_id("app-1_other")

    assert record.git_sync_id == "app-1_abc"


def test_git_sync_id_can_be_assigned_to_unsaved_record() -> None:
    record = AuditRecord(git_sync_id="app-1_abc")

    record.assign_git_sync_id("app-1_other")

    assert record.git_sync_id == "app-1_other"


def test_public_field_names_cover_exportable_fields() -> None:
    assert public_field_names() == ("id", "deleted_at", "git_sync_id")


def test_resource_delegates_identity_to_its_record() -> None:
    collection = ActionCollection(audit=AuditRecord(git_sync_id="app-1_abc"))

    assert collection.is_new()
    collection.id = "c-9"

    assert collection.audit.id == "c-9"
    assert collection.git_sync_id == "app-1_abc"
    assert not collection.is_new()


def test_sanitise_and_pristine_are_idempotent() -> None:
    sanitised = _full_record()
    sanitised.sanitise_to_export_db_object()
    sanitised.sanitise_to_export_db_object()

    pristine = _full_record()
    pristine.make_pristine()
    pristine.make_pristine()

    assert sanitised.policies is None
    assert sanitised.git_sync_id == "app-1_abc"
    assert pristine.policies == set()
    assert pristine.is_new()


def test_bulk_write_twice_keeps_identity_and_advances_update_time() -> None:
    record = AuditRecord()
    record.update_for_bulk_write_operation(now=NOW)
    first_id = record.id
    later = datetime(2024, 5, 2, tzinfo=UTC)

    record.update_for_bulk_write_operation(now=later)

    assert record.id == first_id
    assert record.created_at == NOW
    assert record.updated_at == later
