from collections.abc import Callable, Generator
import io
from typing import Any

import pytest

from .config import CONFIG, GarishConfig
from .context import OutputContext
from .file import FileWrapper

ContextFactory = Callable[..., tuple[OutputContext, io.StringIO]]


@pytest.fixture(autouse=True)
def default_config() -> Generator[None]:
    saved = dict(vars(CONFIG))
    vars(CONFIG).update(vars(GarishConfig()))
    yield
    vars(CONFIG).clear()
    vars(CONFIG).update(saved)


@pytest.fixture(autouse=True)
def ansi_terminal(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TERM", raising=False)
    monkeypatch.delenv("COLORTERM", raising=False)


@pytest.fixture
def make_context() -> ContextFactory:
    def factory(
        *, color: bool = False, width: int = 80, **kwargs: Any
    ) -> tuple[OutputContext, io.StringIO]:
        buffer = io.StringIO()
        file = FileWrapper(buffer, displaysize=(24, width))
        return OutputContext.new(file, color=color, **kwargs), buffer

    return factory
