from __future__ import annotations

from artifact_sync.domain.importing import (
    ActionCollectionImportStrategy,
    next_available_name,
    plan_context_renames,
    rename_contexts,
)
from tests.helpers.builders import make_collection
from tests.helpers.repositories import FakeActionCollectionRepository


def test_next_available_name_appends_first_free_suffix() -> None:
    assert next_available_name("Home", set()) == "Home"
    assert next_available_name("Home", {"Home"}) == "Home1"
    assert next_available_name("Home", {"Home", "Home1", "Home2"}) == "Home3"


def test_plan_renames_only_clashing_names() -> None:
    renames = plan_context_renames(["Home", "About"], ["Home", "Settings"])

    assert renames == [("Home", "Home1")]


def test_plan_renames_never_targets_an_incoming_name() -> None:
    renames = plan_context_renames(["Home", "Home1"], ["Home"])

    assert renames == [("Home", "Home2")]


def test_plan_renames_duplicate_incoming_names() -> None:
    assert plan_context_renames(["Page", "Page"], []) == [("Page", "Page1")]


def test_renames_are_applied_in_order() -> None:
    strategy = ActionCollectionImportStrategy(FakeActionCollectionRepository())
    home = make_collection("a", page_ref="Home")
    about = make_collection("b", page_ref="About")

    rename_contexts(strategy, [home, about], [("Home", "Home1"), ("About", "Home")])

    assert home.unpublished_collection is not None
    assert about.unpublished_collection is not None
    assert home.unpublished_collection.page_id == "Home1"
    assert about.unpublished_collection.page_id == "Home"
