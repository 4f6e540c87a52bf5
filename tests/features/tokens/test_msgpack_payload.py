"""Tests for MessagePackPayloadSerializer."""

import msgpack
import pytest

from neo_tokens.core.exceptions.tokens import DeserializeError, TokenIssueError
from neo_tokens.features.tokens.serializers.msgpack_payload import MessagePackPayloadSerializer


@pytest.fixture
def serializer():
    return MessagePackPayloadSerializer()


class TestSerialize:
    """Test cases for serialization."""
    
    def test_compact_login_record(self, serializer):
        """Test the login record packs to a two-entry map."""
        data = serializer.serialize({"t": 1_700_000_000, "u": 1234})
        assert data == b"\x82\xa1t\xce\x65\x53\xf1\x00\xa1u\xcd\x04\xd2"
    
    def test_unserializable_value(self, serializer):
        with pytest.raises(TokenIssueError):
            serializer.serialize({"t": object()})


class TestDeserialize:
    """Test cases for strict deserialization."""
    
    def test_reads_record(self, serializer):
        assert serializer.deserialize(msgpack.packb({"t": 1, "u": 2})) == {"t": 1, "u": 2}
    
    def test_trailing_bytes(self, serializer):
        """Test extra data after the object is rejected."""
        with pytest.raises(DeserializeError) as exc_info:
            serializer.deserialize(msgpack.packb({"t": 1}) + b"\x00")
        assert exc_info.value.details["reason"] == "ExtraData"
    
    def test_truncated_input(self, serializer):
        with pytest.raises(DeserializeError):
            serializer.deserialize(msgpack.packb({"t": 1, "u": 2})[:-1])
    
    def test_non_string_keys(self, serializer):
        with pytest.raises(DeserializeError):
            serializer.deserialize(msgpack.packb({1: 2}))
    
    def test_invalid_utf8(self, serializer):
        with pytest.raises(DeserializeError):
            serializer.deserialize(b"\xa1\xff")
    
    def test_oversized_payload(self):
        serializer = MessagePackPayloadSerializer(max_payload_bytes=4)
        with pytest.raises(DeserializeError):
            serializer.deserialize(msgpack.packb({"t": 1, "u": 2}))
