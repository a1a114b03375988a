"""Error types raised by the box codec."""

from __future__ import annotations


class BoxCodeError(Exception):
    """Base class for all boxcode errors."""


class LayoutUnsatisfiableError(BoxCodeError, ValueError):
    """No layout within the configured bounds can hold the payload."""


class SerializationError(BoxCodeError):
    """The value could not be turned into bytes."""


class DeserializationError(BoxCodeError, ValueError):
    """Decoded bytes do not match the expected value shape or length."""


class MalformedGlyphError(BoxCodeError, RuntimeError):
    """A glyph matched a family but has no position in it.

    The glyph families are a closed, fixed set, so this signals a broken
    table rather than bad input.
    """
