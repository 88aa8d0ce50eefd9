"""Unit tests for the JSON artifacts exchanged between stages."""

import json

import pytest

from genre_recs.catalog.models import AggregatedRecord, AssetRecord
from genre_recs.pipeline.artifacts import (
    SerializationFailure,
    decode_aggregated,
    decode_asset_list,
    encode_aggregated,
)


class TestDecodeAssetList:
    """Tests for decode_asset_list()."""

    def test_parses_assets_in_order(self):
        payload = json.dumps([{"id": "2", "title": "B"}, {"id": "1", "title": "A"}]).encode()

        assert decode_asset_list(payload) == [AssetRecord(id="2", title="B"), AssetRecord(id="1", title="A")]

    def test_missing_title_defaults_to_empty(self):
        """Test that title may be absent or empty while extra fields are ignored."""
        payload = b'[{"id": "1", "year": 1999}]'

        assert decode_asset_list(payload) == [AssetRecord(id="1", title="")]

    def test_null_title_reads_as_empty(self):
        assert decode_asset_list(b'[{"id": "1", "title": null}]') == [AssetRecord(id="1", title="")]

    @pytest.mark.parametrize(
        "payload",
        [
            b"not json",
            b'{"id": "1"}',
            b"null",
            b'[{"title": "no id"}]',
            b'[{"id": ""}]',
            b'[{"id": "1"}, {"id": "1"}]',
            b"\xff\xfe",
        ],
    )
    def test_invalid_documents_raise(self, payload):
        """Test that malformed asset info is a serialization failure."""
        with pytest.raises(SerializationFailure):
            decode_asset_list(payload)


class TestAggregatedArtifact:
    """Tests for the intermediate aggregated data artifact."""

    def test_encoded_schema(self):
        """Test that the artifact is an ordered array of id/title/genres objects."""
        records = [
            AggregatedRecord(id="b", title="B", genres=["Drama", "Comedy"]),
            AggregatedRecord(id="a", title="A", genres=[]),
        ]

        assert json.loads(encode_aggregated(records)) == [
            {"id": "b", "title": "B", "genres": ["Drama", "Comedy"]},
            {"id": "a", "title": "A", "genres": []},
        ]

    def test_empty_result_encodes_as_empty_array(self):
        assert encode_aggregated([]) == b"[]"

    def test_decode_preserves_order(self):
        payload = b'[{"id": "2", "title": "B", "genres": ["X"]}, {"id": "1", "title": "A", "genres": []}]'

        assert [record.id for record in decode_aggregated(payload)] == ["2", "1"]

    def test_null_document_is_empty(self):
        """Test compatibility with artifacts written when nothing succeeded."""
        assert decode_aggregated(b"null") == []

    def test_null_fields_read_as_empty(self):
        """Test that records with null title or genres load as empty values."""
        payload = b'[{"id": "1", "title": null, "genres": null}, {"id": "2"}]'

        assert decode_aggregated(payload) == [
            AggregatedRecord(id="1", title="", genres=[]),
            AggregatedRecord(id="2", title="", genres=[]),
        ]

    @pytest.mark.parametrize(
        "payload",
        [
            b"{",
            b'{"id": "1"}',
            b'[{"id": "1", "title": "A", "genres": "Drama"}]',
            b'[{"title": "A", "genres": []}]',
            b'[{"id": "", "title": "x", "genres": []}]',
        ],
    )
    def test_invalid_artifact_raises(self, payload):
        with pytest.raises(SerializationFailure):
            decode_aggregated(payload)
