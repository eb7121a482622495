"""Tests for the shadow sync orchestrator."""

import pytest

from dunelin import (
    ChangeKind,
    FileChange,
    RemoteError,
    Selection,
    SyncState,
    SyncStatus,
    WorkspaceNotFoundError,
    plan_sync,
    sync_workspace,
)
from dunelin.sync import ignore_patterns_for, shadow_enabled
from dunelin.config import read_workspace_config

from conftest import write_config, write_tree


def _no_pull(path):
    pass


def _fail_pull(path):
    raise RemoteError("fatal: could not read from remote repository")


def _never_select(changes):
    raise AssertionError("select must not be called")


@pytest.fixture
def seeded(workspace, shadow):
    write_tree(shadow, {"README.md": "v2", "notes/new.md": "hello", "repos/x.txt": "s"})
    write_tree(workspace, {"README.md": "v1", "repos/x.txt": "w"})
    return workspace


class TestNoShadow:
    def test_shadow_flag_off(self, workspace):
        write_config(workspace, shadow=False)
        outcome = sync_workspace(workspace, select=_never_select, pull=_fail_pull)
        assert outcome.status == SyncStatus.NO_SHADOW

    def test_shadow_flag_missing(self, workspace):
        write_config(workspace)
        assert sync_workspace(workspace, select=_never_select, pull=_fail_pull).status == SyncStatus.NO_SHADOW

    def test_shadow_dir_without_git(self, workspace, shadow):
        (shadow / ".git").rmdir()
        assert shadow_enabled(workspace) is False
        assert sync_workspace(workspace, select=_never_select, pull=_fail_pull).status == SyncStatus.NO_SHADOW

    def test_not_a_workspace(self, tmp_path):
        with pytest.raises(WorkspaceNotFoundError):
            sync_workspace(tmp_path, select=_never_select, pull=_no_pull)


class TestPull:
    def test_pull_called_with_shadow_path(self, seeded, shadow):
        calls = []
        sync_workspace(seeded, select=lambda c: Selection.skip(), pull=calls.append)
        assert calls == [shadow]

    def test_pull_failure_is_terminal(self, seeded):
        outcome = sync_workspace(seeded, select=_never_select, pull=_fail_pull)
        assert outcome.status == SyncStatus.PULL_FAILED
        assert outcome.state == SyncState.ERROR
        assert "could not read from remote" in outcome.error
        assert outcome.changes == []
        assert (seeded / "README.md").read_text() == "v1"

    def test_pull_none_skips_pull(self, seeded):
        outcome = sync_workspace(seeded, select=lambda c: Selection.skip(), pull=None)
        assert outcome.status == SyncStatus.SKIPPED


class TestApply:
    def test_up_to_date_skips_selection_and_copy(self, workspace, shadow):
        write_tree(shadow, {"a.md": "same"})
        write_tree(workspace, {"a.md": "same"})
        outcome = sync_workspace(workspace, select=_never_select, pull=_no_pull)
        assert outcome.status == SyncStatus.UP_TO_DATE
        assert outcome.state == SyncState.DONE
        assert outcome.report is None

    def test_select_receives_changes(self, seeded):
        seen = []

        def _select(changes):
            seen.extend(changes)
            return Selection.skip()

        sync_workspace(seeded, select=_select, pull=_no_pull)
        assert seen == [
            FileChange("README.md", ChangeKind.MODIFIED),
            FileChange("notes/new.md", ChangeKind.ADDED),
        ]

    def test_apply_all(self, seeded):
        outcome = sync_workspace(seeded, select=lambda c: Selection.all(), pull=_no_pull)
        assert outcome.status == SyncStatus.APPLIED
        assert sorted(outcome.report.copied) == ["README.md", "notes/new.md"]
        assert (seeded / "README.md").read_text() == "v2"
        assert (seeded / "repos" / "x.txt").read_text() == "w"

    def test_apply_subset(self, seeded):
        outcome = sync_workspace(
            seeded, select=lambda c: Selection.paths(["notes/new.md"]), pull=_no_pull,
        )
        assert outcome.report.copied == ["notes/new.md"]
        assert (seeded / "README.md").read_text() == "v1"

    def test_skip_writes_nothing(self, seeded):
        outcome = sync_workspace(seeded, select=lambda c: Selection.skip(), pull=_no_pull)
        assert outcome.status == SyncStatus.SKIPPED
        assert len(outcome.changes) == 2
        assert not (seeded / "notes").exists()

    def test_empty_subset_is_skip(self, seeded):
        outcome = sync_workspace(seeded, select=lambda c: Selection.paths([]), pull=_no_pull)
        assert outcome.status == SyncStatus.SKIPPED

    def test_second_sync_up_to_date(self, seeded):
        sync_workspace(seeded, select=lambda c: Selection.all(), pull=_no_pull)
        outcome = sync_workspace(seeded, select=_never_select, pull=_no_pull)
        assert outcome.status == SyncStatus.UP_TO_DATE

    def test_copy_error_propagates(self, workspace, shadow):
        write_tree(shadow, {"notes": "file"})
        write_tree(workspace, {"notes/inner.md": "dir"})
        with pytest.raises(OSError):
            sync_workspace(workspace, select=lambda c: Selection.all(), pull=_no_pull)


class TestIgnorePatterns:
    def test_configured_patterns_used(self, seeded):
        write_config(seeded, shadow=True, updateIgnore=["notes/**"])
        changes = plan_sync(seeded)
        paths = [c.path for c in changes]
        assert "notes/new.md" not in paths
        assert "repos/x.txt" in paths

    def test_default_when_unset(self, seeded):
        assert ignore_patterns_for(read_workspace_config(seeded)) == ["**/repos"]
        assert ignore_patterns_for(None) == ["**/repos"]

    def test_empty_override_ignores_nothing(self, seeded):
        write_config(seeded, shadow=True, updateIgnore=[])
        assert ignore_patterns_for(read_workspace_config(seeded)) == []
        assert "repos/x.txt" in [c.path for c in plan_sync(seeded)]


class TestSelection:
    def test_resolve(self):
        changes = [FileChange("a", ChangeKind.ADDED), FileChange("b", ChangeKind.MODIFIED)]
        assert Selection.all().resolve(changes) == ["a", "b"]
        assert Selection.paths({"b", "zzz"}).resolve(changes) == ["b"]
        assert Selection.skip().resolve(changes) == []
