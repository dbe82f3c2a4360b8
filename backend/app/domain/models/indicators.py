"""
Indicator Collection Model
Tagged representation of the positive/negative indicator and buying signal fields
"""
import json
from enum import Enum
from typing import Any, Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_serializer


class IndicatorKind(str, Enum):
    """Storage shape of an indicator collection"""
    ABSENT = "absent"        # null in the store
    SEQUENCE = "sequence"    # ordered list of labels
    FLAGS = "flags"          # object keyed by label, values ignored
    LABEL = "label"          # single bare label string


class IndicatorCollection(BaseModel):
    """
    A single indicator collection as stored on an analysis row.

    The analysis pipeline writes these fields in several equivalent shapes.
    The shape is decided once, when the row is parsed, and carried as ``kind``
    so consumers never have to inspect raw JSON again.
    """
    model_config = ConfigDict(frozen=True)

    kind: IndicatorKind = IndicatorKind.ABSENT
    items: Tuple[Any, ...] = Field(default_factory=tuple, description="Sequence elements (SEQUENCE)")
    flags: Dict[str, Any] = Field(default_factory=dict, description="Keyed flags (FLAGS)")
    label: str = ""

    @classmethod
    def absent(cls) -> "IndicatorCollection":
        return cls()

    @classmethod
    def sequence(cls, items) -> "IndicatorCollection":
        return cls(kind=IndicatorKind.SEQUENCE, items=tuple(items))

    @classmethod
    def keyed(cls, flags: Dict[str, Any]) -> "IndicatorCollection":
        return cls(kind=IndicatorKind.FLAGS, flags=dict(flags))

    @classmethod
    def single(cls, label: str) -> "IndicatorCollection":
        if not label:
            return cls.absent()
        return cls(kind=IndicatorKind.LABEL, label=label)

    @classmethod
    def from_json(cls, value: Any) -> "IndicatorCollection":
        """
        Tag a raw JSON value read from the store.

        Args:
            value: None, list, dict or str as returned by PostgREST

        Returns:
            IndicatorCollection with the matching kind. Other scalars
            (numbers, booleans) are treated as a single label.
        """
        if isinstance(value, IndicatorCollection):
            return value
        if value is None:
            return cls.absent()
        if isinstance(value, list):
            return cls.sequence(value)
        if isinstance(value, dict):
            return cls.keyed(value)
        if isinstance(value, str):
            return cls.single(value)
        return cls.single(stringify_label(value))

    @model_serializer
    def _to_storage_shape(self) -> Any:
        """Serialize back to the shape the store uses, so parsing round-trips."""
        if self.kind == IndicatorKind.SEQUENCE:
            return list(self.items)
        if self.kind == IndicatorKind.FLAGS:
            return dict(self.flags)
        if self.kind == IndicatorKind.LABEL:
            return self.label
        return None


def stringify_label(value: Any) -> str:
    """Render a JSON scalar as label text (``true``, ``1.5``, ``null``)."""
    if isinstance(value, str):
        return value
    return json.dumps(value)
