"""Payload serializers."""

from .msgpack_payload import MessagePackPayloadSerializer

__all__ = ["MessagePackPayloadSerializer"]
