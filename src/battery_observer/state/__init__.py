"""State/event layer.

This package owns the observer's process-wide state and is the only
place allowed to mutate it.  Everything else sees immutable snapshots
and published events.
"""
