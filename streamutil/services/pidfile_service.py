"""
This module manages the process id file written at startup.

A pid-file holds the decimal id of the running process followed by a newline.
The file stays open and exclusively locked (advisory `flock`) for the life of
the process and is removed by an exit hook at normal termination.

`PidFileManager` owns one such file at a time. Writing a new path releases the
handle of the previous one without deleting it; automatic cleanup then targets
the new file only. The exit hook removes the file only when it runs in the
process that wrote it, so a forked child never deletes its parent's pid-file.

Most callers use the module-level `write_pid_file()`, which is backed by a
single process-wide manager because `atexit` hooks are process-wide too.
"""

import atexit
import os
import sys
from pathlib import Path
from typing import IO, Optional, Union

from loguru import logger

try:
    import fcntl
except ImportError:  # Windows has no flock(); the file is written unlocked there.
    fcntl = None


class PidFileManager:
    """
    Owns the pid-file of the current process.

    Lifecycle:
    1. `write(path)` creates the file, writes the pid, flushes and locks it.
       The first successful write registers `cleanup()` with `atexit`.
    2. A further `write(other_path)` replaces the owned file; the previous
       file is left on disk.
    3. `cleanup()` (normally run by `atexit`) unlinks the owned file and
       closes its handle if the current pid matches the recording pid.

    Attributes:
        path (Optional[Path]): The owned pid-file, or `None`.
        pid (Optional[int]): Id of the process that wrote `path`.
    """

    def __init__(self):
        self.path: Optional[Path] = None
        self.pid: Optional[int] = None
        self._file: Optional[IO[str]] = None
        self._exit_hook_registered = False

    @property
    def is_owned(self) -> bool:
        """True while a pid-file is written, locked and subject to cleanup."""
        return self.path is not None and self._file is not None

    def write(self, path: Union[str, Path, None]):
        """
        Writes the current process id to `path` and locks the file.

        Args:
            path: Where to write the pid-file. `None` means no pid-file is
                  wanted and the call does nothing.

        Raises:
            OSError: If the file cannot be opened, written, flushed or locked.
                     Any partially written file has been removed and no
                     pid-file is owned afterwards.
        """
        if path is None:
            return

        self._release()
        self.path = Path(path)

        try:
            self._file = self.path.open("w", encoding="ascii")
        except OSError as e:
            logger.error(f"Cannot open pid-file '{self.path}': {e}")
            self.path = None
            raise

        pid = os.getpid()
        try:
            self._file.write(f"{pid}\n")
            self._file.flush()
            if fcntl is not None:
                fcntl.flock(self._file.fileno(), fcntl.LOCK_EX)
            else:
                logger.warning(f"File locking is not available on {sys.platform}; '{self.path}' is unlocked.")
        except OSError as e:
            logger.error(f"Cannot write pid-file '{self.path}': {e}")
            self._rollback()
            raise

        self.pid = pid
        if not self._exit_hook_registered:
            atexit.register(self.cleanup)
            self._exit_hook_registered = True
        logger.debug(f"Wrote pid {pid} to '{self.path}'.")

    def cleanup(self):
        """
        Removes the owned pid-file and closes its handle.

        Does nothing when no file is owned, or when called from a process
        other than the one that wrote the file.
        """
        if self.path is None or self.pid != os.getpid():
            return

        try:
            self.path.unlink()
        except FileNotFoundError:
            logger.debug(f"Pid-file '{self.path}' was already removed.")
        except OSError as e:
            logger.warning(f"Could not remove pid-file '{self.path}': {e}")
        self._release()

    def _release(self):
        # Forget the owned file without touching it on disk.
        if self._file is not None:
            try:
                self._file.close()
            except OSError as e:
                logger.debug(f"Error closing pid-file handle for '{self.path}': {e}")
        self._file = None
        self.path = None
        self.pid = None

    def _rollback(self):
        try:
            self.path.unlink()
        except OSError as e:
            logger.debug(f"Could not remove partial pid-file '{self.path}': {e}")
        self._release()


# The process-wide manager behind write_pid_file().
_pid_file_manager = PidFileManager()


def get_pid_file_manager() -> PidFileManager:
    """Returns the process-wide pid-file manager."""
    return _pid_file_manager


def write_pid_file(path: Union[str, Path, None]):
    """Writes the process-wide pid-file. See `PidFileManager.write()`."""
    _pid_file_manager.write(path)
