"""Base model class for all snapflow models with serialization support."""

from enum import Enum
from typing import Any, Dict
from pydantic import BaseModel, ConfigDict


class SnapflowBaseModel(BaseModel):
    """Base model for all snapflow models with built-in serialization.

    Provides common functionality for all snapflow models including:
    - Serialization to dictionary via to_dict()
    - Consistent configuration
    - Proper handling of nested models and enums
    """
    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        validate_assignment=True
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to dictionary for serialization.

        Recursively converts nested models, enums and paths to plain values.

        Returns:
            Dictionary representation suitable for JSON serialization
        """
        data = self.model_dump(by_alias=False, exclude_none=True)

        def convert_nested(obj):
            if isinstance(obj, SnapflowBaseModel):
                return obj.to_dict()
            elif isinstance(obj, dict):
                return {k: convert_nested(v) for k, v in obj.items()}
            elif isinstance(obj, list):
                return [convert_nested(item) for item in obj]
            elif isinstance(obj, Enum):
                return obj.value
            elif hasattr(obj, '__fspath__'):
                return str(obj)
            return obj

        return convert_nested(data)
