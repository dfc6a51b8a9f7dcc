import sys
from abc import ABC, abstractmethod
from typing import Optional


def _resolve_print():
    basic_mod = sys.modules.get("basic")
    return getattr(basic_mod, "print", print)


class IOHandler(ABC):
    """Abstracts I/O so the driver can be hosted in different frontends."""

    @abstractmethod
    def emit(self, message: str) -> None: ...

    @abstractmethod
    def error(self, message: str) -> None: ...

    @abstractmethod
    def read_input(self, prompt: str) -> Optional[str]: ...


class ConsoleIO(IOHandler):
    """Console-backed I/O used by the CLI and REPL."""

    def emit(self, message: str) -> None:
        _resolve_print()(message)

    def error(self, message: str) -> None:
        _resolve_print()(message, file=sys.stderr)

    def read_input(self, prompt: str) -> Optional[str]:
        try:
            return input(prompt)
        except EOFError:
            return None
