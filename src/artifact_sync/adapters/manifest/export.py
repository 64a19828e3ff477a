"""Export action collections into the manifest layout.

Only fields that may cross an instance boundary are emitted: the audit record
is sanitised first and only its public fields are written.
"""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any

from artifact_sync.domain.model import public_field_names

from .schema import ActionCollectionPayload
from .translator import collection_dto_payload, default_resources_payload

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from artifact_sync.domain.model import ActionCollection


def export_action_collection(
    collection: ActionCollection,
    *,
    page_names_by_id: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Return the manifest entry for ``collection``; the input is left untouched.

    With ``page_names_by_id`` the views' page references are rewritten from
    storage ids to page names, which is how manifests refer to pages.
    """

    exported = copy.deepcopy(collection)
    exported.audit.sanitise_to_export_db_object()

    if page_names_by_id:
        for view in (exported.unpublished_collection, exported.published_collection):
            if view is not None and view.page_id in page_names_by_id:
                view.page_id = page_names_by_id[view.page_id]

    values: dict[str, Any] = {name: getattr(exported.audit, name) for name in public_field_names()}
    values.update(
        application_id=exported.application_id,
        workspace_id=exported.workspace_id,
        unpublished_collection=collection_dto_payload(exported.unpublished_collection),
        published_collection=collection_dto_payload(exported.published_collection),
        default_resources=default_resources_payload(exported.default_resources),
    )
    payload = ActionCollectionPayload.model_validate(values)
    return payload.model_dump(mode="json", by_alias=True, exclude_none=True)


def export_manifest(
    collections: Iterable[ActionCollection],
    *,
    page_names_by_id: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    return {
        "actionCollectionList": [
            export_action_collection(collection, page_names_by_id=page_names_by_id)
            for collection in collections
            if not collection.is_deleted()
        ],
    }
