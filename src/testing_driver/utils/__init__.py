from .retry import retry_op, is_transient_lookup_error, TRANSIENT_LOOKUP_ERRORS
from .diagnostics import collect_diagnostics

__all__ = [
    "retry_op",
    "is_transient_lookup_error",
    "TRANSIENT_LOOKUP_ERRORS",
    "collect_diagnostics",
]
