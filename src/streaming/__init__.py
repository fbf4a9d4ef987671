"""Stateful byte-stream transform pipeline.

This package adapts byte sources into chunk streams, applies stateful
per-chunk transforms lazily, and copies the result into byte sinks.
"""
