"""Tests for the build history capability and chain walking."""

from __future__ import annotations

import pytest

from commitledger.core.history import (
    BuildHistory,
    DuplicateEntryError,
    InMemoryBuildHistory,
    UnknownBuildError,
    entry_for_repository,
    find_previous_entry,
    iter_ledger_chain,
)


class TestInMemoryBuildHistory:
    def test_satisfies_protocol(self, history: InMemoryBuildHistory):
        assert isinstance(history, BuildHistory)

    def test_predecessor_links(self, history: InMemoryBuildHistory):
        history.add_chain("b1", "b2", "b3")
        assert history.predecessor("b3") == "b2"
        assert history.predecessor("b2") == "b1"
        assert history.predecessor("b1") is None

    def test_identifier_uses_external_id(self, history: InMemoryBuildHistory):
        history.add_build("17", external_id="main#17")
        assert history.identifier_of("17") == "main#17"

    def test_unknown_build(self, history: InMemoryBuildHistory):
        with pytest.raises(UnknownBuildError):
            history.predecessor("missing")

    def test_unknown_previous_build(self, history: InMemoryBuildHistory):
        with pytest.raises(UnknownBuildError):
            history.add_build("b2", "b1")

    def test_duplicate_build(self, history: InMemoryBuildHistory):
        history.add_build("b1")
        with pytest.raises(ValueError):
            history.add_build("b1")

    def test_attach_to_unknown_build(self, history, make_entry):
        with pytest.raises(UnknownBuildError):
            history.attach(make_entry("nowhere", ["a"]))

    def test_one_entry_per_repository(self, history, make_entry):
        history.add_build("b1")
        history.attach(make_entry("b1", ["a"]))
        with pytest.raises(DuplicateEntryError):
            history.attach(make_entry("b1", ["b"]))

    def test_entries_of_several_repositories(self, history, make_entry):
        history.add_build("b1")
        history.attach(make_entry("b1", ["a"], repository_key="one"))
        history.attach(make_entry("b1", ["b"], repository_key="two"))
        assert len(history.ledger_entries_of("b1")) == 2
        assert entry_for_repository(history, "b1", "two").commits == ("b",)
        assert entry_for_repository(history, "b1", "three") is None


class TestChainWalking:
    def test_chain_is_newest_first(self, history, make_chain):
        entries = make_chain("main", [["c1"], ["c2"], ["c3"]])
        walked = list(iter_ledger_chain(history, entries[-1]))
        assert [e.commits for e in walked] == [("c3",), ("c2",), ("c1",)]

    def test_chain_skips_builds_without_entry(self, history, make_chain):
        entries = make_chain("main", [["c1"], None, None, ["c4"]])
        walked = list(iter_ledger_chain(history, entries[-1]))
        assert [e.owner for e in walked] == ["main#4", "main#1"]

    def test_chain_ignores_other_repositories(self, history, make_chain, make_entry):
        entries = make_chain("main", [["c1"], ["c2"]])
        history.add_build("main#3", "main#2")
        history.attach(make_entry("main#3", ["x"], repository_key="other"))
        seed = history.attach(make_entry("main#3", ["c3"]))
        walked = list(iter_ledger_chain(history, seed))
        assert [e.commits for e in walked] == [("c3",), ("c2",), ("c1",)]
        assert entries[0] in walked

    def test_concatenated_chain_reconstructs_history(self, history, make_chain):
        entries = make_chain("main", [["c2", "c1"], [], ["c4", "c3"], ["c5"]])
        walked = iter_ledger_chain(history, entries[-1])
        assert [c for e in walked for c in e.commits] == ["c5", "c4", "c3", "c2", "c1"]

    def test_chain_is_lazy(self, history, make_chain):
        entries = make_chain("main", [["c1"], ["c2"]])
        chain = iter_ledger_chain(history, entries[-1])
        assert next(chain) is entries[-1]

    def test_find_previous_entry(self, history, make_chain, repo_key):
        make_chain("main", [["c1"], None, None])
        previous = find_previous_entry(history, "main#3", repo_key)
        assert previous is not None
        assert previous.owner == "main#1"

    def test_find_previous_entry_at_start(self, history, make_chain, repo_key):
        make_chain("main", [["c1"]])
        assert find_previous_entry(history, "main#1", repo_key) is None
