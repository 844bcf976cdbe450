"""State layer.

Caller-owned, in-memory stores for observed navigation transitions and
registered resource metadata. Nothing here is process-wide: construct
one set of stores per independent tracking session and discard it when
the session ends.
"""
