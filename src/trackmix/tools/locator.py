"""External tool location.

This module resolves the ffprobe and mkvmerge executables by walking an
ordered chain of candidate generators. The first candidate that exists as a
file wins. Resolutions are cached per locator.
"""

from __future__ import annotations

import logging
import platform
import shutil
import threading
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path

from trackmix.config.models import ToolPathsConfig
from trackmix.errors import ToolNotFoundError

logger = logging.getLogger(__name__)

# Tools the pipeline depends on
TOOL_NAMES: tuple[str, ...] = ("ffprobe", "mkvmerge")

# Packaged binaries live beside the package sources
DEFAULT_RESOURCE_DIR = Path(__file__).resolve().parent.parent / "bin"

CandidateGenerator = Callable[[str], Iterator[Path]]


@dataclass
class ToolResolution:
    """Outcome of resolving one tool, used for diagnostics."""

    name: str
    path: Path | None = None
    error: str | None = None

    @property
    def available(self) -> bool:
        """Return True if the tool was found."""
        return self.path is not None


def executable_names(name: str, system: str) -> list[str]:
    """Return the file names to try for a tool on the given platform.

    On Windows the ``.exe`` variant is tried first; elsewhere only the bare
    name is tried.
    """
    if system == "Windows":
        return [f"{name}.exe", name]
    return [name]


class ToolLocator:
    """Resolve external executables through an ordered candidate chain.

    The chain is:

    1. The explicitly configured path for the tool.
    2. The packaged resource directory.
    3. The development tools directory (only in dev mode).
    4. The system PATH (when enabled).

    Example:
        locator = ToolLocator(config.tools)
        mkvmerge = locator.resolve("mkvmerge")
    """

    def __init__(
        self,
        config: ToolPathsConfig | None = None,
        platform_system: str | None = None,
    ) -> None:
        """Initialize the locator.

        Args:
            config: Tool path configuration. Defaults are used if None.
            platform_system: Override for platform.system(), used in tests.
        """
        self._config = config or ToolPathsConfig()
        self._system = platform_system or platform.system()
        self._cache: dict[str, Path] = {}
        self._lock = threading.Lock()

    @property
    def resource_dir(self) -> Path:
        """Return the packaged resource directory in effect."""
        return self._config.resource_dir or DEFAULT_RESOURCE_DIR

    def candidate_generators(self) -> list[CandidateGenerator]:
        """Return the candidate generators in priority order."""
        generators: list[CandidateGenerator] = [
            self._configured_candidates,
            self._resource_candidates,
        ]
        if self._config.dev_mode:
            generators.append(self._dev_candidates)
        if self._config.search_path:
            generators.append(self._path_candidates)
        return generators

    def candidates(self, name: str) -> Iterator[Path]:
        """Yield every candidate path for a tool in priority order."""
        for generator in self.candidate_generators():
            yield from generator(name)

    def resolve(self, name: str) -> Path:
        """Resolve a tool to an existing executable path.

        Args:
            name: Tool name (e.g., "mkvmerge").

        Returns:
            Path to the executable.

        Raises:
            ToolNotFoundError: If no candidate location holds the tool.
        """
        # Fast path: read without lock (dict reads are atomic in CPython)
        cached = self._cache.get(name)
        if cached is not None:
            return cached

        with self._lock:
            # Double-check after acquiring lock
            cached = self._cache.get(name)
            if cached is not None:
                return cached

            searched: list[Path] = []
            for candidate in self.candidates(name):
                searched.append(candidate)
                if candidate.is_file():
                    logger.debug(
                        "Resolved %s",
                        name,
                        extra={"tool": name, "path": str(candidate)},
                    )
                    self._cache[name] = candidate
                    return candidate

        logger.debug(
            "Tool not found: %s",
            name,
            extra={"tool": name, "searched": [str(p) for p in searched]},
        )
        raise ToolNotFoundError(name, searched)

    def clear_cache(self) -> None:
        """Forget every cached resolution."""
        with self._lock:
            self._cache.clear()

    def describe(self, names: tuple[str, ...] = TOOL_NAMES) -> list[ToolResolution]:
        """Resolve each tool and report the outcome without raising."""
        resolutions = []
        for name in names:
            try:
                resolutions.append(ToolResolution(name=name, path=self.resolve(name)))
            except ToolNotFoundError as e:
                resolutions.append(ToolResolution(name=name, error=str(e)))
        return resolutions

    # -------------------------------------------------------------------------
    # Candidate generators
    # -------------------------------------------------------------------------

    def _configured_candidates(self, name: str) -> Iterator[Path]:
        configured = self._config.get_tool_path(name)
        if configured is not None:
            yield Path(configured).expanduser()

    def _resource_candidates(self, name: str) -> Iterator[Path]:
        for filename in executable_names(name, self._system):
            yield self.resource_dir / filename

    def _dev_candidates(self, name: str) -> Iterator[Path]:
        for filename in executable_names(name, self._system):
            yield self._config.dev_tools_dir / filename

    def _path_candidates(self, name: str) -> Iterator[Path]:
        found = shutil.which(name)
        if found:
            yield Path(found)
