"""Query layer: plain functions over a `Session`, one module per entity.

Lookups by id return ``None`` when the row is absent; callers decide whether
that is an error. Nothing here commits.
"""
