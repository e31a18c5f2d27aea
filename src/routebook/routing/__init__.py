"""Routing: the router side of the dispatch-table boundary.

``Mux`` is the protocol a service binds its routes into; ``Router`` is
the bundled trie-based implementation.
"""

from routebook.routing.mux import Mux
from routebook.routing.router import Binding, RouteMatch, Router, parse_path

__all__ = ["Binding", "Mux", "RouteMatch", "Router", "parse_path"]
