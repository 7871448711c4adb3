"""Runs the external ``mr_hedgehog`` analyser and reports a tagged result.

A run happens on a single background worker. Its outcome is delivered once,
as ``Success(text)`` with the produced DOT text or ``Failure(message)`` with
something fit to show the user.
"""

import logging
import os
import subprocess
import sys
import tempfile
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

from .config import (
    ANALYSIS_FAILED_MESSAGE, BACKEND_MISSING_MESSAGE, BACKEND_NAME, NO_OUTPUT_MESSAGE,
)

log = logging.getLogger("hedgehog_viewer.analysis")


@dataclass(frozen=True)
class Success:
    text: str


@dataclass(frozen=True)
class Failure:
    message: str


class AnalysisError(Exception):
    """A run that should end as a Failure with this message."""


def find_backend(explicit: Optional[str] = None) -> Optional[Path]:
    candidates = []
    if explicit:
        candidates.append(Path(explicit))
    env = os.environ.get("HEDGEHOG_BACKEND")
    if env:
        candidates.append(Path(env))
    candidates.append(Path(sys.argv[0]).resolve().parent / BACKEND_NAME)
    candidates.append(Path.cwd() / "target" / "release" / BACKEND_NAME)
    for path in candidates:
        if path.is_file():
            return path
    return None


def build_command(backend, folder, output) -> List[str]:
    return [
        str(backend),
        "--workspace", str(Path(folder) / "Cargo.toml"),
        "--output", str(output),
        "--engine", "syn",
    ]


def list_source_files(folder) -> List[Path]:
    """``*.rs`` files directly in ``folder`` and in its ``src/`` directory."""
    folder = Path(folder)
    files = sorted(p for p in folder.glob("*.rs") if p.is_file())
    src = folder / "src"
    if src.is_dir():
        files.extend(sorted(p for p in src.glob("*.rs") if p.is_file()))
    return files


def run_analysis(backend, folder, timeout: Optional[float] = None) -> str:
    """Run the backend synchronously and return the DOT text it wrote.

    Raises AnalysisError for every failure mode.
    """
    with tempfile.TemporaryDirectory(prefix="hedgehog_") as tmp:
        output = Path(tmp) / "mr_hedgehog_output.dot"
        cmd = build_command(backend, folder, output)
        log.info("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=False, timeout=timeout)
        except FileNotFoundError:
            raise AnalysisError(BACKEND_MISSING_MESSAGE)
        except subprocess.TimeoutExpired:
            raise AnalysisError(f"{ANALYSIS_FAILED_MESSAGE}timed out after {timeout} seconds")
        if result.returncode != 0:
            raise AnalysisError(ANALYSIS_FAILED_MESSAGE + (result.stderr or "").strip())
        if not output.is_file():
            raise AnalysisError(NO_OUTPUT_MESSAGE)
        return output.read_text(encoding="utf-8")


class AnalysisRunner:
    """At most one analysis in flight; a second start() is refused."""

    def __init__(self, backend_path: Optional[str] = None, timeout: Optional[float] = None):
        self.backend_path = backend_path
        self.timeout = timeout
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="analysis")
        self._future: Optional[Future] = None

    @property
    def running(self) -> bool:
        return self._future is not None and not self._future.done()

    def start(self, folder, on_done: Callable) -> Future:
        if not folder:
            raise ValueError("no workspace folder selected")
        if self.running:
            raise RuntimeError("analysis already running")
        self._future = self._executor.submit(self._run, str(folder))
        self._future.add_done_callback(lambda f: on_done(f.result()))
        return self._future

    def _run(self, folder):
        backend = find_backend(self.backend_path)
        if backend is None:
            log.warning("Backend executable not found")
            return Failure(BACKEND_MISSING_MESSAGE)
        try:
            return Success(run_analysis(backend, folder, self.timeout))
        except AnalysisError as e:
            log.warning("Analysis failed: %s", e)
            return Failure(str(e))
        except (OSError, UnicodeDecodeError) as e:
            log.warning("Could not read analysis output: %s", e)
            return Failure(ANALYSIS_FAILED_MESSAGE + str(e))
        except Exception as e:
            # on_done must still hear about the run
            log.exception("Unexpected error during analysis")
            return Failure(ANALYSIS_FAILED_MESSAGE + str(e))

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False)
