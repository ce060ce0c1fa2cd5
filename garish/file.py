from __future__ import annotations

from collections.abc import Iterator
import contextlib
import functools
import os
import subprocess
import sys
import threading
from typing import TYPE_CHECKING, Any, ClassVar, TextIO
import weakref

from . import defaults as defaults
from .colors import ColorValue, escape_sequence

if TYPE_CHECKING:
    from _typeshed import SupportsWrite


@functools.cache
def terminal_colors(term: str) -> int | None:
    """Number of colors reported by `tput` for `term`, or `None` if it cannot be queried."""
    try:
        result = subprocess.run(
            ["tput", "-T", term, "colors"], capture_output=True, text=True, check=True, timeout=1
        )
        return int(result.stdout.strip())
    except (OSError, subprocess.SubprocessError, ValueError):
        return None


class FileWrapper:
    _locks: ClassVar[weakref.WeakKeyDictionary[Any, threading.RLock]] = (
        weakref.WeakKeyDictionary()
    )
    _locks_guard: ClassVar[threading.Lock] = threading.Lock()
    _file: SupportsWrite[str]

    def __init__(
        self,
        file: SupportsWrite[str],
        *,
        color: bool | None = None,
        compact: bool = False,
        displaysize: tuple[int, int] | None = None,
    ) -> None:
        self._file = file
        self._color = color
        self._compact = compact
        self._displaysize = displaysize
        # Locks a file that cannot be weakly referenced. It is not shared with other wrappers.
        self._wrapper_lock = threading.RLock()

    @classmethod
    def _pytest_enabled(cls) -> bool:
        return "PYTEST_VERSION" in os.environ

    @classmethod
    def _fallback_file(cls, file: Any) -> TextIO | None:
        if file == sys.stdout and sys.__stdout__ is not None:
            return sys.__stdout__
        elif file == sys.stderr and sys.__stderr__ is not None:
            return sys.__stderr__
        return None

    @property
    def forced_color(self) -> bool | None:
        """`True` or `False` if color was forcibly enabled or disabled, `None` otherwise."""
        return self._color

    @property
    def color_enabled(self) -> bool:
        if self._color is not None:
            return self._color
        return self.supports_color

    @property
    def compact(self) -> bool:
        return self._compact

    @functools.cached_property
    def supports_color(self) -> bool:
        """
        Returns True if the running system's terminal supports color, and False otherwise.
        Modified from from https://stackoverflow.com/a/22254892.
        """
        plat = sys.platform
        supported_platform = plat != "Pocket PC" and (plat != "win32" or "ANSICON" in os.environ)
        if not supported_platform:
            return False
        is_a_tty = hasattr(self._file, "isatty") and self._file.isatty()
        if not is_a_tty and self._pytest_enabled():
            fallback_file = self._fallback_file(self._file)
            if fallback_file is not None:
                is_a_tty = hasattr(fallback_file, "isatty") and fallback_file.isatty()
        return is_a_tty

    @functools.cached_property
    def supports_color256(self) -> bool:
        term = os.environ.get("TERM")
        if not term:
            return False
        if os.environ.get("COLORTERM") in ("truecolor", "24bit"):
            return True
        colors = terminal_colors(term)
        return colors is not None and colors >= 256

    @functools.cached_property
    def displaysize(self) -> tuple[int, int]:
        if self._displaysize is not None:
            return self._displaysize
        height, width = defaults.DEFAULT_HEIGHT, defaults.DEFAULT_WIDTH
        try:
            width, height = os.get_terminal_size(self._file.fileno())  # type: ignore
        except (OSError, AttributeError, ValueError):
            if self._pytest_enabled():
                fallback_file = self._fallback_file(self._file)
                if fallback_file is not None:
                    try:
                        width, height = os.get_terminal_size(fallback_file.fileno())
                    except (OSError, AttributeError, ValueError):
                        ...
        if width < defaults.DEFAULT_WIDTH / 2:
            width = defaults.DEFAULT_WIDTH
        return height, width

    def write(self, text: str) -> None:
        self._file.write(text)

    @contextlib.contextmanager
    def colored(self, color: ColorValue) -> Iterator[None]:
        sequence = escape_sequence(color)
        self.write(sequence.color_string())
        try:
            yield
        finally:
            self.write(sequence.reset_string())

    @classmethod
    def _lock_for(cls, wrapper: FileWrapper) -> threading.RLock:
        with cls._locks_guard:
            try:
                return cls._locks.setdefault(wrapper._file, threading.RLock())
            except TypeError:
                return wrapper._wrapper_lock

    class lock:
        """Hold exclusive access to a file for the duration of the `with` block."""

        _wrapper: FileWrapper

        def __init__(self, wrapper: FileWrapper) -> None:
            self._wrapper = wrapper
            self._lock = FileWrapper._lock_for(wrapper)

        def __enter__(self) -> FileWrapper:
            self._lock.acquire()
            return self._wrapper

        def __exit__(
            self, exception_type: Any, exception_value: Any, exception_traceback: Any
        ) -> None:
            self._lock.release()
