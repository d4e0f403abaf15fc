"""Serialization engine: domain objects to XML documents."""

from checkoutxml.serialization.encoders import encode

__all__ = ["encode"]
