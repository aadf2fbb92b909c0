"""Built-in strategies for text, raw data, JSON and object dumps."""

import json as _json
import pprint
from typing import Any

from pydantic import BaseModel, TypeAdapter

from snapflow.diffing import Diffing
from snapflow.snapshotting.strategy import Snapshotting


_any_adapter: TypeAdapter[Any] = TypeAdapter(Any)


def _to_json_text(value: Any) -> str:
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")
    else:
        value = _any_adapter.dump_python(value, mode="json")
    return _json.dumps(value, indent=2, sort_keys=True, ensure_ascii=False)


def _to_description(value: Any) -> str:
    return pprint.pformat(value, width=80, sort_dicts=True)


#: Plain text, compared line by line and stored as ``.txt``.
lines: Snapshotting[str, str] = Snapshotting.simple(Diffing.lines(), path_extension="txt")

#: Raw bytes, compared byte for byte and stored without an extension.
data: Snapshotting[bytes, bytes] = Snapshotting.simple(Diffing.data())

#: Any JSON-encodable value or pydantic model, pretty printed with sorted keys.
json: Snapshotting[Any, str] = Snapshotting.simple(Diffing.lines(), path_extension="json").pullback(_to_json_text)

#: A ``pprint`` dump of any value.
description: Snapshotting[Any, str] = lines.pullback(_to_description)
