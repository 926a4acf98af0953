# testing_driver/decorators/ensure.py
import functools

from ..base import SessionState
from ..errors import SessionNotStartedError, SessionTerminatedError


def ensure_session_ready(_func=None, *, sync_context=False):
    """
    Guard a SeleniumDriver method that needs a live remote session.

    Raises SessionTerminatedError after quit() and SessionNotStartedError
    before the first instantiation. With sync_context=True the active tab is
    re-synchronized before the method runs.
    """
    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(self, *args, **kwargs):
            if self.state == SessionState.TERMINATED:
                raise SessionTerminatedError(
                    f"Cannot call '{fn.__name__}': the session was quit."
                )
            if self.web_driver is None:
                raise SessionNotStartedError(
                    f"Cannot call '{fn.__name__}': no browser session. "
                    "Call 'navigate_to_url' or 'instantiate' first."
                )
            if sync_context:
                self.context.ensure_active_tab(self.web_driver)
            return fn(self, *args, **kwargs)
        return wrapper
    return decorator if _func is None else decorator(_func)
