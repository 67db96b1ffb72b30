"""Utility modules for the atlas packer.

This package contains the building blocks driven by ``Packer``:
- images: Ingested image records, placement states and the registry
- codec: Pillow based decoding and encoding at the file format boundary
- pixels: numpy pixel buffers and verbatim pasting
- packers: Free region tracking, placement heuristics and canvas growth
"""
