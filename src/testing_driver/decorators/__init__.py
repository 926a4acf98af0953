# testing_driver/decorators/__init__.py
#
# Re-exports decorators from their respective modules.

from .ensure import ensure_session_ready
from .envelope import best_effort

__all__ = [
    "ensure_session_ready",
    "best_effort",
]
