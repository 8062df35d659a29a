"""Tests for endpoint and model selection helpers."""

import random

from conftest import make_endpoint

from llm_endpoint_registry.access import build_system_endpoint
from llm_endpoint_registry.endpoint_utils import (
    ModelEntry,
    available_model_names,
    collect_models,
    get_candidate_title_endpoint,
)


class TestTitleEndpoint:
    """Tests for get_candidate_title_endpoint."""

    def test_current_endpoint_wins(self) -> None:
        """The conversation's own endpoint is used when it opts in."""
        current = make_endpoint("a", gen_title=True)
        others = [make_endpoint("b", gen_title=True)]
        assert get_candidate_title_endpoint(others, current) is current

    def test_random_opted_in_endpoint(self) -> None:
        """Otherwise a non-system endpoint that opts in is chosen."""
        system = build_system_endpoint({"defaultProvider": "OpenAI"})
        system.gen_title = True
        endpoints = [make_endpoint("a"), make_endpoint("b", gen_title=True), system]

        for seed in range(10):
            chosen = get_candidate_title_endpoint(endpoints, make_endpoint("a"), rng=random.Random(seed))
            assert chosen is not None
            assert chosen.id == "b"

    def test_no_candidate(self) -> None:
        """None when nothing opts in."""
        assert get_candidate_title_endpoint([make_endpoint("a")], None) is None


class TestCollectModels:
    """Tests for the custom model list."""

    def test_add_hide_and_rename(self) -> None:
        """Items add, hide and rename models."""
        models = collect_models(["gpt-4o", "gpt-4o-mini"], "-gpt-4o-mini, my-model=Mine ,+gpt-4o")

        assert models == [
            ModelEntry("gpt-4o", "gpt-4o", True),
            ModelEntry("gpt-4o-mini", "gpt-4o-mini", False),
            ModelEntry("my-model", "Mine", True),
        ]

    def test_all(self) -> None:
        """-all hides everything seen so far; later items re-enable."""
        models = collect_models(["a", "b", "c"], "-all,+b")
        assert available_model_names(models) == ["b"]

    def test_empty_list_keeps_defaults(self) -> None:
        """An empty custom list changes nothing."""
        assert available_model_names(collect_models(["a", "b"], "")) == ["a", "b"]

    def test_entries_are_copied(self) -> None:
        """Default entries passed in are not modified."""
        entry = ModelEntry("a", "A")
        collect_models([entry], "-all")
        assert entry.available is True
