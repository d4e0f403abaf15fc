"""Deserialization engine: inbound XML documents to domain objects."""

from checkoutxml.deserialization.router import decode

__all__ = ["decode"]
