from __future__ import annotations

import pytest

from artifact_sync.domain.importing import (
    AccessDeniedError,
    ActionCollectionImportStrategy,
    ImportContext,
    MalformedReferenceError,
    MappedImportableResources,
)
from artifact_sync.domain.model import (
    ActionCollection,
    ActionCollectionDTO,
    CreatorContextType,
    DefaultResources,
    EntityType,
    Module,
    Package,
    Permission,
    Policy,
)
from artifact_sync.domain.ports import PolicyPermissionProvider
from tests.helpers.builders import make_application, make_collection, make_page, page_policies
from tests.helpers.repositories import FakeActionCollectionRepository


def _strategy(*collections: ActionCollection) -> ActionCollectionImportStrategy:
    repository = FakeActionCollectionRepository()
    for collection in collections:
        repository.add(collection)
    return ActionCollectionImportStrategy(repository)


def test_resolved_context_points_view_at_page_storage_and_canonical_ids() -> None:
    page = make_page("Home", page_id="pg-123", canonical_page_id="default-pg-7")
    view = ActionCollectionDTO(name="utils", page_id="Home")

    resolved = _strategy().update_context_in_resource(view, {"Home": page}, None)

    assert resolved is page
    assert view.page_id == "pg-123"
    assert view.default_resources == DefaultResources(page_id="default-pg-7")


def test_unresolved_context_leaves_view_untouched() -> None:
    view = ActionCollectionDTO(name="utils", page_id="Missing")

    resolved = _strategy().update_context_in_resource(view, {}, None)

    assert resolved is None
    assert view.page_id == "Missing"
    assert view.default_resources is None


def test_fallback_reference_used_when_view_has_no_page() -> None:
    page = make_page("Home")
    view = ActionCollectionDTO(name="utils")

    resolved = _strategy().update_context_in_resource(view, {"Home": page}, "Home")

    assert resolved is page
    assert view.page_id == "page-1"


def test_missing_reference_without_fallback_resolves_nothing() -> None:
    view = ActionCollectionDTO(name="utils")

    assert _strategy().update_context_in_resource(view, {"Home": make_page()}, None) is None


def test_module_context_is_a_malformed_reference() -> None:
    module = Module(name="Shared")
    view = ActionCollectionDTO(name="utils", page_id="Shared")

    with pytest.raises(MalformedReferenceError) as exc:
        _strategy().update_context_in_resource(view, {"Shared": module}, None)

    assert isinstance(exc.value, TypeError)
    assert view.page_id == "Shared"


def test_check_artifact_rejects_packages() -> None:
    with pytest.raises(MalformedReferenceError):
        _strategy().check_artifact(Package(name="lib"))


def test_imported_context_names_are_distinct() -> None:
    home = make_page("Home")
    about = make_page("About", page_id="page-2")
    resource_maps = MappedImportableResources(
        context_map={"Home": home, "page-1": home, "About": about}
    )

    assert _strategy().get_imported_context_names(resource_maps) == ["Home", "About"]


def test_rename_touches_every_matching_view() -> None:
    first = make_collection("a", page_ref="Home", published=True)
    second = make_collection("b", page_ref="About")

    _strategy().rename_context_in_importable_resources([first, second], "Home", "Home1")

    assert first.unpublished_collection is not None
    assert first.published_collection is not None
    assert second.unpublished_collection is not None
    assert first.unpublished_collection.page_id == "Home1"
    assert first.published_collection.page_id == "Home1"
    assert second.unpublished_collection.page_id == "About"


def test_resource_views_skip_unnamed_published_view() -> None:
    collection = make_collection(published=True)
    assert collection.published_collection is not None
    collection.published_collection.name = None

    views = _strategy().get_resource_dtos(collection)

    assert views == (collection.unpublished_collection,)


def test_other_branches_exclude_current_artifact() -> None:
    main = make_collection(
        collection_id="c-main",
        application_id="app-main",
        default_resources=DefaultResources(application_id="app-main"),
    )
    feature = make_collection(
        collection_id="c-feature",
        application_id="app-feature",
        default_resources=DefaultResources(application_id="app-main"),
    )
    strategy = _strategy(main, feature)

    found = list(strategy.get_existing_resources_in_other_branches("app-main", "app-feature"))

    assert found == [main]


def test_create_new_resource_assigns_identity_and_inherits_policies() -> None:
    page = make_page(policies=page_policies("devs"))
    collection = make_collection(page_ref="page-1")
    import_ctx = ImportContext(artifact_id="app-1", acting_user="alice@example.com")

    _strategy().create_new_resource(import_ctx, collection, page)

    assert collection.id is not None
    assert collection.application_id == "app-1"
    assert collection.git_sync_id is not None
    assert collection.git_sync_id.startswith("app-1_")
    assert collection.audit.created_by == "alice@example.com"
    assert collection.unpublished_collection is not None
    assert collection.unpublished_collection.context_type == CreatorContextType.PAGE
    assert Policy(Permission.MANAGE_ACTIONS, frozenset({"devs"})) in (
        collection.audit.policies or set()
    )


def test_create_new_resource_keeps_incoming_git_sync_id() -> None:
    collection = make_collection(page_ref="page-1", git_sync_id="app-0_origin")

    _strategy().create_new_resource(ImportContext(artifact_id="app-1"), collection, make_page())

    assert collection.git_sync_id == "app-0_origin"


def test_create_new_resource_prefixes_sync_id_with_target_artifact() -> None:
    collection = make_collection(page_ref="page-1", application_id="exported-app")

    _strategy().create_new_resource(ImportContext(artifact_id="app-1"), collection, make_page())

    assert collection.application_id == "app-1"
    assert collection.git_sync_id is not None
    assert collection.git_sync_id.startswith("app-1_")


def test_denied_creation_changes_nothing() -> None:
    page = make_page(policies=page_policies("admins"))
    collection = make_collection(page_ref="page-1")
    import_ctx = ImportContext(
        artifact_id="app-1",
        permission_provider=PolicyPermissionProvider(permission_groups=frozenset({"devs"})),
    )

    with pytest.raises(AccessDeniedError) as exc:
        _strategy().create_new_resource(import_ctx, collection, page)

    assert str(exc.value) == "Unable to find page page-1"
    assert exc.value.entity_type is EntityType.PAGE
    assert collection.id is None
    assert collection.git_sync_id is None
    assert collection.default_resources is None
    assert collection.audit.policies == set()


def test_populate_without_git_makes_resource_its_own_origin() -> None:
    collection = make_collection(collection_id="c-1")
    application = make_application("app-1")

    _strategy().populate_default_resources(
        ImportContext(artifact_id="app-1", branch_name="ignored"),
        MappedImportableResources(),
        application,
        None,
        collection,
    )

    assert collection.application_id == "app-1"
    assert collection.default_resources == DefaultResources(
        application_id="app-1", collection_id="c-1"
    )


def test_populate_on_first_branch_uses_default_artifact_id() -> None:
    collection = make_collection(collection_id="c-1")
    application = make_application("app-feature", default_artifact_id="app-main")

    _strategy().populate_default_resources(
        ImportContext(artifact_id="app-feature", branch_name="feature"),
        MappedImportableResources(),
        application,
        None,
        collection,
    )

    assert collection.default_resources == DefaultResources(
        application_id="app-main", collection_id="c-1", branch_name="feature"
    )


def test_populate_inherits_identity_from_sibling_branch() -> None:
    sibling = make_collection(
        page_ref="pg-main",
        collection_id="c-main",
        application_id="app-main",
        default_resources=DefaultResources(
            application_id="app-main", collection_id="c-main", branch_name="main"
        ),
    )
    assert sibling.unpublished_collection is not None
    sibling.unpublished_collection.default_resources = DefaultResources(page_id="default-pg")
    collection = make_collection(page_ref="pg-feature", collection_id="c-feature")
    application = make_application("app-feature", default_artifact_id="app-main")

    _strategy().populate_default_resources(
        ImportContext(artifact_id="app-feature", branch_name="feature"),
        MappedImportableResources(),
        application,
        sibling,
        collection,
    )

    assert collection.application_id == "app-feature"
    assert collection.default_resources == DefaultResources(
        application_id="app-main", collection_id="c-main", branch_name="feature"
    )
    assert collection.unpublished_collection is not None
    assert collection.unpublished_collection.default_resources == DefaultResources(
        page_id="default-pg", branch_name="feature"
    )


def test_populate_keeps_manifest_supplied_ids() -> None:
    collection = make_collection(
        collection_id="c-1",
        default_resources=DefaultResources(collection_id="exported-c", branch_name="old"),
    )
    application = make_application("app-feature", default_artifact_id="app-main")

    _strategy().populate_default_resources(
        ImportContext(artifact_id="app-feature", branch_name="feature"),
        MappedImportableResources(),
        application,
        None,
        collection,
    )

    assert collection.default_resources == DefaultResources(
        application_id="app-main", collection_id="exported-c", branch_name="feature"
    )


def test_update_existing_keeps_identity() -> None:
    existing = make_collection(
        "old",
        page_ref="page-1",
        collection_id="c-1",
        application_id="app-1",
        git_sync_id="app-1_abc",
        default_resources=DefaultResources(application_id="app-1", collection_id="c-1"),
    )
    incoming = make_collection("new", page_ref="page-1", git_sync_id="app-1_abc")

    updated = _strategy(existing).update_existing_resource(
        ImportContext(artifact_id="app-1", branch_name="main", acting_user="bob@example.com"),
        existing,
        incoming,
    )

    assert updated is existing
    assert updated.id == "c-1"
    assert updated.git_sync_id == "app-1_abc"
    assert updated.name == "new"
    assert updated.audit.modified_by == "bob@example.com"
    assert updated.default_resources == DefaultResources(
        application_id="app-1", collection_id="c-1", branch_name="main"
    )


def test_update_existing_requires_edit_permission() -> None:
    existing = make_collection(collection_id="c-1", application_id="app-1")
    incoming = make_collection("new")
    import_ctx = ImportContext(
        artifact_id="app-1",
        permission_provider=PolicyPermissionProvider(permission_groups=frozenset({"devs"})),
    )

    with pytest.raises(AccessDeniedError):
        _strategy(existing).update_existing_resource(import_ctx, existing, incoming)

    assert existing.name == "utils"
