"""Tests for snapshotting strategies and their composition."""

import json
from unittest.mock import Mock

from pydantic import BaseModel

from snapflow.capture import Async, Failure
from snapflow.diffing import Diffing
from snapflow.snapshotting import Snapshotting, strategies


def _run(async_value):
    delivered = []
    async_value.run(delivered.append)
    assert len(delivered) == 1
    return delivered[0]


class User(BaseModel):
    name: str
    email: str


class TestPullback:
    """Test synchronous strategy composition."""

    def test_applies_transform_then_delegates(self):
        users = strategies.lines.pullback(lambda user: f"{user.name} <{user.email}>")

        artifact = _run(users.snapshot(User(name="Ada", email="ada@example.com")))

        assert artifact == "Ada <ada@example.com>"

    def test_keeps_extension_and_diffing(self):
        base = strategies.lines
        adapted = base.pullback(str)

        assert adapted.path_extension == "txt"
        assert adapted.diffing is base.diffing

    def test_transform_runs_once_per_capture(self):
        transform = Mock(return_value="rendered")
        adapted = strategies.lines.pullback(transform)

        _run(adapted.snapshot(42))

        transform.assert_called_once_with(42)

    def test_pullbacks_compose(self):
        strategy = strategies.lines.pullback(str).pullback(lambda n: n * 2)
        assert _run(strategy.snapshot(21)) == "42"


class TestAsyncPullback:
    """Test asynchronous strategy composition."""

    def test_chains_both_stages(self):
        pending = []

        def load(value):
            return Async(lambda callback: pending.append(lambda: callback(value.upper())))

        strategy = strategies.lines.async_pullback(load)
        delivered = []
        strategy.snapshot("hello").run(delivered.append)

        assert delivered == []
        pending.pop()()
        assert delivered == ["HELLO"]

    def test_failure_in_transform_stage_propagates(self):
        error = RuntimeError("load failed")
        strategy = strategies.lines.async_pullback(lambda value: Async.failed(error))

        result = _run(strategy.snapshot("x"))

        assert isinstance(result, Failure)
        assert result.error is error

    def test_keeps_extension(self):
        assert strategies.lines.async_pullback(Async.of).path_extension == "txt"


class TestSimple:
    """Test identity strategies."""

    def test_value_is_the_artifact(self):
        strategy = Snapshotting.simple(Diffing.data(), path_extension="bin")

        assert strategy.path_extension == "bin"
        assert _run(strategy.snapshot(b"\x00\x01")) == b"\x00\x01"


class TestBuiltInStrategies:
    """Test the shipped strategies."""

    def test_lines(self):
        assert strategies.lines.path_extension == "txt"
        assert _run(strategies.lines.snapshot("hello")) == "hello"

    def test_data_has_no_extension(self):
        assert strategies.data.path_extension is None

    def test_json_sorts_keys_and_indents(self):
        artifact = _run(strategies.json.snapshot({"b": 1, "a": [1, 2]}))

        assert strategies.json.path_extension == "json"
        assert artifact == '{\n  "a": [\n    1,\n    2\n  ],\n  "b": 1\n}'

    def test_json_accepts_models(self):
        artifact = _run(strategies.json.snapshot(User(name="Ada", email="ada@example.com")))
        assert json.loads(artifact) == {"name": "Ada", "email": "ada@example.com"}

    def test_json_is_deterministic(self):
        first = _run(strategies.json.snapshot({"x": 1, "y": {"b": 2, "a": 1}}))
        second = _run(strategies.json.snapshot({"y": {"a": 1, "b": 2}, "x": 1}))
        assert first == second

    def test_description_uses_pprint(self):
        artifact = _run(strategies.description.snapshot({"b": 2, "a": 1}))

        assert strategies.description.path_extension == "txt"
        assert artifact == "{'a': 1, 'b': 2}"
