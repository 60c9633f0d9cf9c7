"""Console output abstraction.

Notifications (headers, tables, warnings) go to stderr so that stdout carries
nothing but the changelog Markdown, which can then be piped or redirected.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
    "OutputRecord",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DIM = auto()
    BOLD = auto()
    HEADER = auto()
    MARKDOWN = auto()  # raw stdout payload

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        ...

    def success(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...

    def warning(self, message: str) -> None:
        ...

    def info(self, message: str) -> None:
        ...

    def header(self, message: str) -> None:
        ...

    def newline(self) -> None:
        ...

    def table(self, title: str, headers: list[str], rows: list[list[str]]) -> None:
        """Render a boxed table with a title."""
        ...

    def markdown(self, text: str) -> None:
        """Write text verbatim to stdout, without markup processing."""
        ...

    def labels(self, prefix: str, labels: list[tuple[str, str]]) -> None:
        """Print `(name, "#rrggbb")` labels on their own background color."""
        ...

    def ask(self, question: str, default: str | None = None) -> str:
        """Read one answer; an empty answer gives the default."""
        ...


class RichConsole:
    """Production console backed by rich."""

    def __init__(self) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console
        from rich.markup import escape

        self._escape = escape

        self._err = Console(stderr=True)
        self._out = Console(highlight=False, soft_wrap=True)
        self._style_map = {
            Style.DEFAULT: "",
            Style.SUCCESS: "green",
            Style.ERROR: "red bold",
            Style.WARNING: "yellow",
            Style.INFO: "cyan",
            Style.DIM: "dim",
            Style.BOLD: "bold",
            Style.HEADER: "blue bold",
        }

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        if style is Style.MARKDOWN:
            self.markdown(message)
            return
        rich_style = self._style_map.get(style, "")
        self._err.print(message, style=rich_style or None, markup=False)

    def success(self, message: str) -> None:
        self._err.print(f"[green]OK[/green] {self._escape(message)}")

    def error(self, message: str) -> None:
        self._err.print(f"[red bold]error:[/red bold] {self._escape(message)}")

    def warning(self, message: str) -> None:
        self._err.print(f"[yellow]warning:[/yellow] {self._escape(message)}")

    def info(self, message: str) -> None:
        self._err.print(f"[cyan]info:[/cyan] {self._escape(message)}")

    def header(self, message: str) -> None:
        self._err.print(f"\n[blue bold]{self._escape(message)}[/blue bold]")

    def newline(self) -> None:
        self._err.print()

    def table(self, title: str, headers: list[str], rows: list[list[str]]) -> None:
        from rich import box
        from rich.table import Table
        from rich.text import Text

        tbl = Table(title=title, box=box.SQUARE)
        for h in headers:
            tbl.add_column(h)
        for row in rows:
            tbl.add_row(*(Text(cell) for cell in row))
        self._err.print(tbl)

    def labels(self, prefix: str, labels: list[tuple[str, str]]) -> None:
        from rich.text import Text

        text = Text(f"{prefix} ")
        for i, (name, color) in enumerate(labels):
            if i:
                text.append(", ")
            text.append(name, style=f"black on {color}")
        self._err.print(text)

    def markdown(self, text: str) -> None:
        self._out.print(text, markup=False, end="")

    def ask(self, question: str, default: str | None = None) -> str:
        # Prompts go to stderr; stdout carries only Markdown.
        suffix = f" [{default}]" if default else ""
        answer = self._err.input(self._escape(f"{question}{suffix}: "))
        return answer.strip() or (default or "")


@dataclass
class OutputRecord:
    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


def _no_answers() -> list[str]:
    return []


@dataclass
class MockConsole:
    """Captures output for tests."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)
    answers: list[str] = field(default_factory=_no_answers)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"OK {message}", Style.SUCCESS))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    def warning(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"warning: {message}", Style.WARNING))

    def info(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"info: {message}", Style.INFO))

    def header(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.HEADER))

    def newline(self) -> None:
        self.outputs.append(OutputRecord("", Style.DEFAULT))

    def table(self, title: str, headers: list[str], rows: list[list[str]]) -> None:
        self.outputs.append(OutputRecord(title, Style.HEADER))
        self.outputs.append(OutputRecord(" | ".join(headers), Style.BOLD))
        for row in rows:
            self.outputs.append(OutputRecord(" | ".join(row), Style.DEFAULT))

    def labels(self, prefix: str, labels: list[tuple[str, str]]) -> None:
        names = ", ".join(name for name, _ in labels)
        self.outputs.append(OutputRecord(f"{prefix} {names}", Style.DEFAULT))

    def markdown(self, text: str) -> None:
        self.outputs.append(OutputRecord(text, Style.MARKDOWN))

    def ask(self, question: str, default: str | None = None) -> str:
        """Pop the next scripted answer."""
        self.outputs.append(OutputRecord(question, Style.INFO))
        answer = self.answers.pop(0).strip() if self.answers else ""
        return answer or (default or "")

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    @property
    def stdout(self) -> str:
        """Everything that would have reached stdout."""
        return "".join(o.message for o in self.outputs if o.style == Style.MARKDOWN)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def has_warning(self) -> bool:
        return any(o.style == Style.WARNING for o in self.outputs)

    def has_success(self) -> bool:
        return any(o.style == Style.SUCCESS for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]
