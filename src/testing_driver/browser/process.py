"""Driver process tree tracking and termination."""

from abc import ABC, abstractmethod
from typing import List, Optional
import psutil

import logging
logger = logging.getLogger(__name__)


class ProcessPlatform(ABC):
    """
    The two OS capabilities the process tree needs.

    Core logic only ever asks for the direct children of a pid and for a pid to
    be terminated; how that is done is platform specific.
    """

    @abstractmethod
    def children(self, pid: int) -> List[int]:
        """Pids of the direct children of `pid`."""

    @abstractmethod
    def terminate(self, pid: int) -> None:
        """Kill `pid`; psutil.NoSuchProcess when it already exited."""


class PsutilPlatform(ProcessPlatform):
    """psutil backed implementation (Windows, Linux, macOS)."""

    def children(self, pid: int) -> List[int]:
        return [child.pid for child in psutil.Process(pid).children(recursive=False)]

    def terminate(self, pid: int) -> None:
        psutil.Process(pid).kill()


class ProcessTree:
    """
    Owns the pid of one spawned driver service.

    Every session holds its own ProcessTree, so killing one session's tree can
    never reach the browser of another session running in parallel.
    """

    def __init__(self, platform: Optional[ProcessPlatform] = None):
        self.platform = platform or PsutilPlatform()
        self._pid: Optional[int] = None

    @property
    def tracked_pid(self) -> Optional[int]:
        return self._pid

    def track(self, pid: Optional[int]) -> None:
        """Remember the driver service pid (None forgets it)."""
        self._pid = pid
        if pid is not None:
            logger.info(f"Driver service PID is: {pid}")

    def kill_all(self) -> List[int]:
        """
        Terminate the tracked process and its direct children.

        Failures on individual processes are logged and skipped so one
        unkillable process does not keep the rest alive. Safe to call with
        nothing tracked, and repeated calls are no-ops.

        Returns:
            List[int]: pids that were terminated
        """
        pid = self._pid
        if pid is None:
            return []

        killed = []
        try:
            pids = [pid]
            try:
                pids.extend(c for c in self.platform.children(pid) if c != pid)
            except Exception as e:
                logger.debug(f"Could not list children of {pid}: {e}")

            for target in pids:
                try:
                    self.platform.terminate(target)
                    killed.append(target)
                    logger.debug(f"Killed driver process {target}")
                except psutil.NoSuchProcess:
                    logger.debug(f"Process {target} already exited")
                except Exception as e:
                    logger.warning(f"Could not kill process {target}: {e}")
        finally:
            self._pid = None

        return killed


__all__ = [
    "ProcessPlatform",
    "PsutilPlatform",
    "ProcessTree",
]
