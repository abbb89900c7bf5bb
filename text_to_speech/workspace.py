"""Transient working directory for per-chunk text and audio artifacts."""

import logging
import os
import shutil
import tempfile
from datetime import datetime, timezone

from text_to_speech.constants import WORK_DIR_PREFIX, DEBUG_DIR_PREFIX
from text_to_speech.errors import FilesystemError, OutputError

logger = logging.getLogger(__name__)


def _report(error: FilesystemError) -> FilesystemError:
    logger.warning("%s", error)
    return error


class Workspace:
    """Owns one temporary directory for the lifetime of a run.

    Created by prepare(), removed by cleanup(). When debug_dir is set,
    finalize() snapshots the whole directory there before removal.
    """

    def __init__(self, debug_dir: str | None = None, base_dir: str | None = None):
        self.debug_dir = debug_dir
        self.base_dir = base_dir
        self.work_dir: str | None = None

    def prepare(self) -> str:
        """Create the working directory and return its path."""
        if self.work_dir is None:
            try:
                self.work_dir = tempfile.mkdtemp(prefix=WORK_DIR_PREFIX, dir=self.base_dir)
            except OSError as e:
                raise OutputError(f"Could not create temporary directory: {e}") from e
            logger.debug("Workspace created at %s", self.work_dir)
        return self.work_dir

    def path(self, name: str) -> str:
        if self.work_dir is None:
            raise RuntimeError("Workspace has not been prepared")
        return os.path.join(self.work_dir, name)

    def save(self, name: str, data: bytes) -> str:
        """Write bytes to name inside the workspace. Returns the stored path."""
        path = self.path(name)
        with open(path, "wb") as f:
            f.write(data)
        return path

    def save_text(self, name: str, text: str) -> str:
        path = self.path(name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        return path

    def finalize(self, temp_name: str, destination: str) -> str:
        """Copy the finished file to destination, snapshot if requested, then clean up.

        Missing parent directories of destination are created. Returns the
        destination path. Raises OutputError when destination cannot be
        written; the workspace is left for the caller to clean up.
        """
        source = self.path(temp_name)
        dest_dir = os.path.dirname(os.path.abspath(destination))

        print(f"Saving file: {destination}")
        try:
            os.makedirs(dest_dir, exist_ok=True)
            shutil.copyfile(source, destination)
        except OSError as e:
            raise OutputError(f"Could not write {destination}: {e}") from e

        if self.debug_dir:
            self.copy_debug()

        self.cleanup()
        return destination

    def copy_debug(self) -> str | None:
        """Copy every workspace file to <debug_dir>/tts-debug-<timestamp>/.

        Best-effort: failures are logged and None is returned.
        """
        if not self.debug_dir or self.work_dir is None or not os.path.isdir(self.work_dir):
            return None

        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
        target = os.path.join(self.debug_dir, f"{DEBUG_DIR_PREFIX}{timestamp}")
        print(f"[DEBUG] Saving intermediate files: {target}")
        try:
            shutil.copytree(self.work_dir, target, dirs_exist_ok=True)
        except (OSError, shutil.Error) as e:
            _report(FilesystemError(f"Debug copy to {target} failed: {e}"))
            return None
        return target

    def cleanup(self) -> FilesystemError | None:
        """Remove the working directory. Never raises.

        Returns the logged FilesystemError when removal failed, else None.
        Subsequent calls are no-ops.
        """
        work_dir, self.work_dir = self.work_dir, None
        if work_dir is None or not os.path.exists(work_dir):
            return None
        try:
            shutil.rmtree(work_dir)
        except OSError as e:
            return _report(FilesystemError(f"Failed to remove temporary directory {work_dir}: {e}"))
        logger.debug("Workspace removed: %s", work_dir)
        return None
