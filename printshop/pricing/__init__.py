"""
Quote entry flows.

Pure Python math. No I/O.
Each flow takes an entry dataclass with resolved catalog entities and
returns an EntryResult carrying the priced LineItem or a Rejection.
"""
