# -*- coding: utf-8 -*-
"""
Parser Base - Shared contract for every text notation.

Each parser exposes two class-level operations, `parse(text)` and
`generate(graph)`. Parsing is lenient: a line that matches no
pattern is skipped and recorded as a diagnostic in the
ParseReport instead of raising.

Example:
    report = ArrowParser.parse_with_report("A -> B\\n???")
    report.graph            # best-effort graph
    report.skipped_count    # 1
    report.raise_if_strict()  # StrictParseError
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..config import AppConfig, get_default_config
from ..core.graph import Graph


class StrictParseError(ValueError):
    """Raised by ParseReport.raise_if_strict when lines were skipped."""

    def __init__(self, diagnostics: List['ParseDiagnostic']):
        self.diagnostics = diagnostics
        summary = "; ".join(f"line {d.line_no}: {d.reason}" for d in diagnostics[:5])
        super().__init__(f"{len(diagnostics)} line(s) skipped: {summary}")


class ParseDiagnostic(BaseModel):
    """A line the parser could not use, and why."""
    line_no: int
    line: str
    reason: str


class ParseReport(BaseModel):
    """Best-effort graph plus the diagnostics gathered while parsing."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    graph: Graph
    diagnostics: List[ParseDiagnostic] = Field(default_factory=list)

    def skip(self, line_no: int, line: str, reason: str) -> None:
        self.diagnostics.append(ParseDiagnostic(line_no=line_no, line=line, reason=reason))

    @property
    def skipped_count(self) -> int:
        return len(self.diagnostics)

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    def raise_if_strict(self) -> None:
        if self.diagnostics:
            raise StrictParseError(self.diagnostics)


class BaseGraphParser(ABC):
    """
    Base class for text notation parsers.

    Subclasses implement `_parse_into(report, text, config)` and
    `generate(graph)`. `format_name` identifies the notation.
    """
    format_name: str = "base"

    @classmethod
    def parse(cls, text: str, config: Optional[AppConfig] = None) -> Graph:
        """
        Parse text into a Graph. Never raises for malformed lines.

        Args:
            text: Raw notation text
            config: Optional settings (defaults used when omitted)

        Returns:
            Best-effort Graph
        """
        return cls.parse_with_report(text, config).graph

    @classmethod
    def parse_with_report(cls, text: str, config: Optional[AppConfig] = None) -> ParseReport:
        """Parse and keep the diagnostics for skipped lines."""
        report = ParseReport(graph=Graph())
        cls._parse_into(report, text, config or get_default_config())
        return report

    @classmethod
    @abstractmethod
    def _parse_into(cls, report: ParseReport, text: str, config: AppConfig) -> None:
        pass

    @classmethod
    @abstractmethod
    def generate(cls, graph: Graph) -> str:
        pass


def iter_lines(text: str):
    """Yield (1-based line number, raw line) pairs."""
    for line_no, line in enumerate(text.splitlines(), start=1):
        yield line_no, line
