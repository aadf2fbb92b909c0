"""Tests for snapshot path resolution and naming."""

import threading
from pathlib import Path

import pytest
from pydantic import ValidationError

from snapflow.paths import (
    SnapshotCounter,
    SnapshotIdentity,
    caller_location,
    default_snapshot_name,
    resolve_snapshot_path,
    sanitize_path_component,
)


class TestSanitizePathComponent:
    """Test file-name sanitization."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("greeting", "greeting"),
            ("renders header", "renders-header"),
            ("a/b\\c:d*e?f\"g<h>i|j", "a-b-c-d-e-f-g-h-i-j"),
            ("  padded  ", "padded"),
            ("(parens)", "parens"),
            ("snake_case_kept", "snake_case_kept"),
            ("test_widget[dark-mode]", "test_widget-dark-mode"),
            ("RendersHeader()", "RendersHeader"),
        ],
    )
    def test_sanitizes_hostile_characters(self, raw, expected):
        assert sanitize_path_component(raw) == expected

    def test_is_pure(self):
        name = "a weird / name: with ~ chars"
        assert sanitize_path_component(name) == sanitize_path_component(name)

    def test_never_emits_path_separators_or_reserved_characters(self):
        result = sanitize_path_component('../../etc/passwd <>:"|?*')
        for char in '/\\<>:"|?*':
            assert char not in result
        assert ".." not in result


class TestDefaultSnapshotName:
    """Test default name derivation from test names."""

    def test_strips_test_prefix(self):
        assert default_snapshot_name("testFooBar") == "FooBar"

    def test_keeps_names_without_prefix(self):
        assert default_snapshot_name("fooBar") == "fooBar"

    def test_scenario_renders_header(self):
        assert default_snapshot_name("testRendersHeader") == "RendersHeader"

    def test_keeps_snake_case_separator_by_default(self):
        assert default_snapshot_name("test_renders_header") == "_renders_header"

    def test_strips_snake_case_separator_when_enabled(self):
        assert default_snapshot_name("test_renders_header", strip_separator=True) == "renders_header"
        assert default_snapshot_name("testRendersHeader", strip_separator=True) == "RendersHeader"

    def test_sanitizes_parametrized_names(self):
        assert default_snapshot_name("test_theme[dark]") == "_theme-dark"

    def test_prefix_only_is_stripped_once(self):
        assert default_snapshot_name("testtest") == "test"


class TestSnapshotIdentity:
    """Test the full path derivation."""

    def test_default_directory_sits_next_to_source_file(self):
        identity = SnapshotIdentity(
            source_file=Path("/work/tests/test_header.py"),
            test_name="test_renders_header",
            path_extension="txt",
        )

        assert identity.file_base_name == "test_header"
        assert identity.directory == Path("/work/tests/__Snapshots__/test_header")
        assert identity.path == Path("/work/tests/__Snapshots__/test_header/_renders_header.txt")

    def test_separator_stripping_option(self):
        identity = SnapshotIdentity(
            source_file=Path("/work/tests/test_header.py"),
            test_name="test_renders_header",
            path_extension="txt",
            strip_name_separator=True,
        )

        assert identity.file_name == "renders_header.txt"

    def test_explicit_directory_and_name(self):
        path = resolve_snapshot_path(
            source_file=Path("/work/tests/test_header.py"),
            test_name="test_anything",
            name="greeting",
            snapshot_directory=Path("/tmp/snaps"),
            path_extension="txt",
        )

        assert path == Path("/tmp/snaps/greeting.txt")

    def test_explicit_name_is_sanitized_not_prefix_stripped(self):
        identity = SnapshotIdentity(
            source_file=Path("/work/test_a.py"),
            test_name="test_a",
            name="test dark mode",
            path_extension="png",
        )

        assert identity.file_name == "test-dark-mode.png"

    def test_missing_extension_is_omitted(self):
        identity = SnapshotIdentity(source_file=Path("/work/test_a.py"), test_name="testBlob")
        assert identity.file_name == "Blob"

    def test_leading_dot_in_extension_is_normalized(self):
        identity = SnapshotIdentity(source_file=Path("/work/test_a.py"), test_name="testBlob", path_extension=".json")
        assert identity.file_name == "Blob.json"

    def test_counter_suffix(self):
        first = SnapshotIdentity(source_file=Path("/w/t.py"), test_name="testX", counter=1, path_extension="txt")
        second = SnapshotIdentity(source_file=Path("/w/t.py"), test_name="testX", counter=2, path_extension="txt")

        assert first.file_name == "X.1.txt"
        assert second.file_name == "X.2.txt"
        assert first.path != second.path

    def test_counter_must_be_positive(self):
        with pytest.raises(ValidationError):
            SnapshotIdentity(source_file=Path("/w/t.py"), test_name="testX", counter=0)

    def test_unusable_name_falls_back(self):
        identity = SnapshotIdentity(source_file=Path("/w/t.py"), test_name="test", path_extension="txt")
        assert identity.file_name == "snapshot.txt"

    def test_custom_snapshots_dirname(self):
        identity = SnapshotIdentity(
            source_file=Path("/w/test_t.py"),
            test_name="testX",
            snapshots_dirname="snapshots",
        )
        assert identity.directory == Path("/w/snapshots/test_t")

    def test_resolution_is_deterministic(self):
        kwargs = dict(
            source_file=Path("/work/tests/test_header.py"),
            test_name="testRendersHeader",
            name=None,
            snapshot_directory=None,
            path_extension="txt",
        )
        paths = {str(resolve_snapshot_path(**kwargs)) for _ in range(10)}
        assert paths == {"/work/tests/__Snapshots__/test_header/RendersHeader.txt"}


class TestSnapshotCounter:
    """Test per-test snapshot numbering."""

    def test_counts_within_a_test(self):
        counter = SnapshotCounter()
        assert counter.next(Path("/w/t.py"), "test_a") == 1
        assert counter.next(Path("/w/t.py"), "test_a") == 2

    def test_restarts_when_test_changes(self):
        counter = SnapshotCounter()
        counter.next(Path("/w/t.py"), "test_a")
        counter.next(Path("/w/t.py"), "test_a")
        assert counter.next(Path("/w/t.py"), "test_b") == 1
        assert counter.next(Path("/w/t.py"), "test_a") == 1

    def test_threads_track_their_own_test(self):
        counter = SnapshotCounter()
        results = {}

        def run(test_name):
            results[test_name] = [counter.next(Path("/w/t.py"), test_name) for _ in range(3)]

        threads = [threading.Thread(target=run, args=(f"test_{i}",)) for i in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert all(values == [1, 2, 3] for values in results.values())


class TestCallerLocation:
    """Test caller metadata resolution."""

    def test_explicit_values_win(self):
        location = caller_location(file="/w/test_x.py", test_name="test_y", line=7)
        assert location.file == "/w/test_x.py"
        assert location.test_name == "test_y"
        assert location.describe() == "/w/test_x.py:7"

    def test_defaults_to_calling_frame(self):
        location = caller_location()
        assert Path(location.file).resolve() == Path(__file__).resolve()
        assert location.test_name == "test_defaults_to_calling_frame"
        assert location.line is not None

    def test_uses_running_pytest_item(self, monkeypatch):
        monkeypatch.setenv(
            "PYTEST_CURRENT_TEST",
            "tests/unit/test_paths.py::TestCallerLocation::test_uses_running_pytest_item[dark mode] (call)",
        )

        assert caller_location().test_name == "test_uses_running_pytest_item[dark mode]"

    def test_ignores_item_of_another_function(self, monkeypatch):
        monkeypatch.setenv("PYTEST_CURRENT_TEST", "tests/unit/test_other.py::test_render[a] (call)")

        assert caller_location().test_name == "test_ignores_item_of_another_function"

    @pytest.mark.parametrize("theme", ["light", "dark"])
    def test_parametrized_cases_are_told_apart(self, theme):
        location = caller_location()

        assert location.test_name == f"test_parametrized_cases_are_told_apart[{theme}]"
        assert default_snapshot_name(location.test_name) == f"_parametrized_cases_are_told_apart-{theme}"
