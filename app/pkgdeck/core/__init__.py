"""Core state machines for pkgdeck.

Collections, selection, drag/drop classification, the cooperative task
scheduler and the workflows that run on it.
"""
