"""Finding the test that called into snapflow."""

import inspect
import os
from pathlib import Path
from types import FrameType
from typing import Optional

from snapflow.types.snapshot import SourceLocation


_PACKAGE_DIR = str(Path(__file__).resolve().parent.parent) + os.sep


def _is_internal(frame: FrameType) -> bool:
    return str(Path(frame.f_code.co_filename).resolve()).startswith(_PACKAGE_DIR)


def _pytest_item_name(function_name: str) -> Optional[str]:
    """Name of the running pytest item (``test_render[dark]``) if it runs ``function_name``.

    Parametrized cases share one function, so the item name is what tells
    their snapshots apart.
    """
    current = os.environ.get("PYTEST_CURRENT_TEST")
    if not current:
        return None
    # "path::Class::test_render[dark] (call)"
    item_name = current.rsplit(" (", 1)[0].rsplit("::", 1)[-1]
    if item_name.split("[", 1)[0] != function_name:
        return None
    return item_name


def _caller_test_name(frame: FrameType) -> str:
    function_name = frame.f_code.co_name
    return _pytest_item_name(function_name) or function_name


def caller_location(
    file: Optional[str] = None,
    test_name: Optional[str] = None,
    line: Optional[int] = None,
) -> SourceLocation:
    """Build the caller's location, filling gaps from the call stack.

    Explicit arguments always win. Missing values come from the nearest
    frame outside the snapflow package; under pytest the test name
    includes the parametrization id of the running case.
    """
    if file is not None and test_name is not None:
        return SourceLocation(file=str(file), test_name=test_name, line=line)

    frame = inspect.currentframe()
    try:
        while frame is not None and _is_internal(frame):
            frame = frame.f_back
        if frame is None:
            raise RuntimeError("Cannot determine the calling test; pass file and test_name explicitly")

        return SourceLocation(
            file=str(file) if file is not None else frame.f_code.co_filename,
            test_name=test_name if test_name is not None else _caller_test_name(frame),
            line=line if line is not None else frame.f_lineno,
        )
    finally:
        del frame
