"""
Unit tests for indicator normalization and top-K ranking
"""
import pytest

from app.domain.models.call_record import AnalysisRecord
from app.domain.models.indicators import IndicatorCollection, IndicatorKind
from app.domain.services.frequency_aggregator import (
    count_labels,
    normalize_indicators,
    top_indicators,
)


def tagged(*values):
    return [IndicatorCollection.from_json(v) for v in values]


class TestIndicatorCollection:
    """Shape tagging happens once, at parse time"""

    @pytest.mark.parametrize("raw,kind", [
        (None, IndicatorKind.ABSENT),
        ([], IndicatorKind.SEQUENCE),
        (["a"], IndicatorKind.SEQUENCE),
        ({"a": True}, IndicatorKind.FLAGS),
        ("a", IndicatorKind.LABEL),
        ("", IndicatorKind.ABSENT),
        (3, IndicatorKind.LABEL),
    ])
    def test_from_json(self, raw, kind):
        assert IndicatorCollection.from_json(raw).kind == kind

    def test_analysis_row_tags_indicator_fields(self):
        analysis = AnalysisRecord.model_validate({
            "id": 1,
            "positive_indicators": ["interested"],
            "negative_indicators": {"price": True},
            "buying_signals": "asked_for_tour",
        })

        assert analysis.positive_indicators.kind == IndicatorKind.SEQUENCE
        assert analysis.negative_indicators.kind == IndicatorKind.FLAGS
        assert analysis.buying_signals.kind == IndicatorKind.LABEL

    def test_serializes_to_storage_shape(self):
        analysis = AnalysisRecord(
            positive_indicators=["a", "b"],
            negative_indicators={"x": False},
            buying_signals=None,
        )

        dumped = analysis.model_dump()

        assert dumped["positive_indicators"] == ["a", "b"]
        assert dumped["negative_indicators"] == {"x": False}
        assert dumped["buying_signals"] is None
        assert AnalysisRecord.model_validate(dumped) == analysis


class TestNormalize:
    def test_absent(self):
        assert normalize_indicators(IndicatorCollection.absent()) == []

    def test_single_label(self):
        assert normalize_indicators(IndicatorCollection.from_json("budget")) == ["budget"]

    def test_sequence_keeps_order_and_duplicates(self):
        collection = IndicatorCollection.from_json(["b", "a", "b"])
        assert normalize_indicators(collection) == ["b", "a", "b"]

    def test_sequence_stringifies_scalars(self):
        collection = IndicatorCollection.from_json([1, True, None])
        assert normalize_indicators(collection) == ["1", "true", "null"]

    def test_flags_use_keys_regardless_of_value(self):
        """A flag set to false still counts as present"""
        collection = IndicatorCollection.from_json({"pool": True, "gym": False})
        assert normalize_indicators(collection) == ["pool", "gym"]


class TestTopIndicators:
    def test_mixed_shapes(self):
        """Sequence, flags, label and null all contribute to one ranking"""
        collections = tagged(["a", "b"], {"b": True}, "a", None)

        result = top_indicators(collections)

        assert [(e.label, e.count) for e in result] == [("a", 2), ("b", 2)]

    def test_sorted_by_count_descending(self):
        collections = tagged(["x"], ["y", "y"], ["y", "z", "z", "z"])

        result = top_indicators(collections)

        assert [(e.label, e.count) for e in result] == [("y", 3), ("z", 3), ("x", 1)]

    def test_ties_keep_first_encountered_order(self):
        collections = tagged(["c", "a"], ["b"], ["b", "a", "c"])

        result = top_indicators(collections)

        assert [e.label for e in result] == ["c", "a", "b"]

    def test_truncates_to_k(self):
        collections = tagged(["a", "b", "c", "d", "e", "f", "g"])

        result = top_indicators(collections)

        assert [e.label for e in result] == ["a", "b", "c", "d", "e"]
        assert len(top_indicators(collections, k=2)) == 2

    def test_empty_input(self):
        assert top_indicators([]) == []
        assert top_indicators(tagged(None, None)) == []

    def test_every_count_positive(self):
        result = top_indicators(tagged(["a"], {"b": 0}, "c"))
        assert all(entry.count >= 1 for entry in result)


class TestCountLabels:
    def test_counts_in_first_seen_order(self):
        counts = count_labels(["neutral", "positive", "neutral"])

        assert counts == {"neutral": 2, "positive": 1}
        assert list(counts) == ["neutral", "positive"]
