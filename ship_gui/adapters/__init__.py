"""GUI adapter layer.

This package provides thin Qt-shaped adapters over engine objects.

Notes
-----
Adapters exist to:
- keep GUI code free of persistence details,
- turn engine change notifications into Qt signals,
- translate engine domain errors into user-visible messages.
"""
