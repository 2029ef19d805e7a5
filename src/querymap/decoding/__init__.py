"""Decoding subpackage: value tree -> typed record, backed by pydantic."""

from querymap.decoding.coercion import WeakCoercer
from querymap.decoding.config import DecoderConfig
from querymap.decoding.decoder import StructDecoder

__all__ = ["DecoderConfig", "StructDecoder", "WeakCoercer"]
