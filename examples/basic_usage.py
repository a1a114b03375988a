#!/usr/bin/env python3
"""Basic usage example for boxcode.

Demonstrates encoding bytes and typed values into box-drawing grids and
decoding them back.

Usage:
    python examples/basic_usage.py
"""

import os
import sys

# Add parent directory to path for direct script execution
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pydantic import BaseModel

from boxcode.decoder import decode_to_bytes, decode_typed
from boxcode.encoder import encode, encode_typed
from boxcode.sizer import BoxLayoutConfig, layout_for_bytes


class Ticket(BaseModel):
    comments: str
    code: int


def example_bytes_roundtrip():
    """Encode raw bytes and decode them back."""
    print("=" * 60)
    print("Example 1: Byte Roundtrip")
    print("=" * 60)

    data = bytes.fromhex("deadbeefcafebabe")
    boxes = encode(data)
    print(boxes)

    # The grid has no length of its own; pass it to drop padding.
    decoded = decode_to_bytes(boxes, len(data))
    print(f"  Decoded:  {decoded.hex()}")
    print(f"  Match:    {decoded == data}")
    print()


def example_labelled_typed():
    """Encode a pydantic model into a grid with a readable label."""
    print("=" * 60)
    print("Example 2: Typed Value With Label")
    print("=" * 60)

    config = BoxLayoutConfig(blackouts=[(1, 1, " C+c ")])
    ticket = Ticket(comments="Hello", code=42)
    boxes = encode_typed(ticket, config)
    print(boxes)
    print(f"  Decoded:  {decode_typed(boxes, Ticket)}")
    print()


def example_layout_shapes():
    """Show how aspect ratio and bounds change the grid."""
    print("=" * 60)
    print("Example 3: Layout Shapes")
    print("=" * 60)

    for config in [
        BoxLayoutConfig(),
        BoxLayoutConfig(aspect_ratio=0.25),
        BoxLayoutConfig(max_width=80, max_height=5),
    ]:
        layout = layout_for_bytes(150, config)
        print(f"  {config}")
        print(f"    -> {layout.width}x{layout.height}, {layout.capacity_bits()} bits")
    print()


if __name__ == "__main__":
    example_bytes_roundtrip()
    example_labelled_typed()
    example_layout_shapes()
