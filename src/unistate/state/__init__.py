"""State/store layer.

This package is the single source of truth for the application state: the
store owns the current snapshot, commits use-case results and fans each
commit out to subscribers.
"""

from unistate.state.store import ErrorListener, Store
from unistate.state.subscription import StateCallback, Subscription

__all__ = ["ErrorListener", "StateCallback", "Store", "Subscription"]
