"""Shared type aliases used across wayfinder modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Bare handler callback: receives a HandlerContext, returns a response
# (or an awaitable of one)
HandlerCallback: TypeAlias = Callable[..., Any]

# Route match callback: receives (url, event), returns a match result or None
MatchCallback: TypeAlias = Callable[..., Any]

# What a match callback may return: extracted params, a marker, or None
MatchResult: TypeAlias = Any
