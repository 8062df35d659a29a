"""Tests for access state schema migrations."""

import copy

from llm_endpoint_registry.constants import DEFAULT_AZURE_API_VERSION
from llm_endpoint_registry.migrations import CURRENT_ACCESS_VERSION, migrate_access_state


def test_legacy_token_moves_to_openai_key() -> None:
    """A version 1 record's token becomes the OpenAI key."""
    migrated = migrate_access_state({"token": "sk-legacy", "accessCode": "abc"}, 1)

    assert migrated["openaiApiKey"] == "sk-legacy"
    assert "token" not in migrated
    assert migrated["accessCode"] == "abc"
    assert migrated["azureApiVersion"] == DEFAULT_AZURE_API_VERSION


def test_legacy_token_does_not_override_existing_key() -> None:
    """An OpenAI key already present is kept."""
    migrated = migrate_access_state({"token": "sk-legacy", "openaiApiKey": "sk-new"}, 1)
    assert migrated["openaiApiKey"] == "sk-new"


def test_existing_azure_version_is_kept() -> None:
    """Only an empty Azure API version is backfilled."""
    migrated = migrate_access_state({"azureApiVersion": "2024-02-01"}, 1)
    assert migrated["azureApiVersion"] == "2024-02-01"


def test_unversioned_record_is_migrated() -> None:
    """Records written before versioning start at the first step."""
    migrated = migrate_access_state({"token": "sk-legacy"}, 0)
    assert migrated["openaiApiKey"] == "sk-legacy"


def test_endpoints_are_backfilled() -> None:
    """Version 2 endpoints gain genTitle and type."""
    persisted = {
        "endpoints": [
            {"id": "a", "name": "A"},
            {"id": "b", "type": "system", "genTitle": True},
            "garbage",
        ],
    }
    migrated = migrate_access_state(persisted, 2)

    assert migrated["endpoints"] == [
        {"id": "a", "name": "A", "genTitle": False, "type": "user"},
        {"id": "b", "type": "system", "genTitle": True},
    ]
    assert migrated["shareProviders"] == []


def test_migration_is_idempotent() -> None:
    """Re-applying the migration to a migrated record changes nothing."""
    once = migrate_access_state({"token": "sk-legacy", "endpoints": [{"id": "a"}]}, 1)
    twice = migrate_access_state(once, 1)
    assert once == twice


def test_migration_does_not_mutate_input() -> None:
    """The persisted mapping passed in is left alone."""
    persisted = {"token": "sk-legacy", "endpoints": [{"id": "a"}]}
    snapshot = copy.deepcopy(persisted)

    migrate_access_state(persisted, 1)

    assert persisted == snapshot


def test_non_mapping_input_yields_defaults() -> None:
    """Migration never raises, even on garbage."""
    migrated = migrate_access_state(["not", "a", "dict"], 1)
    assert migrated == {
        "azureApiVersion": DEFAULT_AZURE_API_VERSION,
        "endpoints": [],
        "shareProviders": [],
    }


def test_current_version_is_untouched() -> None:
    """Nothing runs when the record is already current."""
    persisted = {"token": "kept-as-is"}
    assert migrate_access_state(persisted, CURRENT_ACCESS_VERSION) == persisted


def test_newer_version_is_loaded_as_is() -> None:
    """A record from a newer release is not downgraded."""
    persisted = {"futureField": 1}
    assert migrate_access_state(persisted, CURRENT_ACCESS_VERSION + 1) == persisted
