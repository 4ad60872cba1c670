"""
CPU profiling session wrapped around a whole comparison run.

yappi hooks every thread started while the session is running, so the
benchmark worker threads are profiled along with the main thread.
"""

import logging

import yappi

from .errors import ResourceError

logger = logging.getLogger(__name__)


class ProfileSession:
    """
    yappi CPU profile written to a file in pstat format.

    start() must succeed before any workload runs: failing to create the
    output file or to start the profiler raises ResourceError.
    """

    def __init__(self, path: str, clock_type: str = 'cpu'):
        """
        Initialize profile session.

        Args:
            path: Output file, readable afterwards with pstats.Stats
            clock_type: yappi clock, 'cpu' or 'wall'
        """
        self.path = path
        self.clock_type = clock_type
        self._active = False

    def start(self):
        """
        Create the output file and start profiling all threads.

        Raises:
            ResourceError: If the file cannot be created or profiling cannot start
        """
        try:
            # Create the file before any workload runs
            with open(self.path, 'wb'):
                pass
        except OSError as e:
            raise ResourceError(f"Could not create CPU profile {self.path}: {e}") from e

        if yappi.is_running():
            raise ResourceError("Could not start CPU profile: another yappi session is running")

        yappi.clear_stats()
        yappi.set_clock_type(self.clock_type)
        yappi.start(builtins=False, profile_threads=True)

        self._active = True
        logger.info(f"CPU profiling to {self.path} ({self.clock_type} clock)")

    def stop(self):
        """Stop profiling and write the collected stats."""
        if not self._active:
            return

        yappi.stop()
        self._active = False
        try:
            yappi.get_func_stats().save(self.path, type='pstat')
        except OSError as e:
            raise ResourceError(f"Could not write CPU profile {self.path}: {e}") from e
        finally:
            yappi.clear_stats()

        logger.info(f"CPU profile written to {self.path}")

    @property
    def active(self) -> bool:
        return self._active

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        return False
