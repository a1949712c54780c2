# ============================================================================
# ReportDesk - Text Rendering Primitives
#
# Purpose: Line-oriented text document builder and value formatting shared by
#          every department renderer
# Inputs: Section headings, field values, repeatable rows
# Outputs: Deterministic plain-text documents
# Dependencies: None
# Usage: doc = TextDocument(); doc.banner("FINANCE DEPARTMENT REPORT"); doc.render()
#
# Changelog:
#   2026-09-12: Initial text builder (banner, numbered sections, bullets, tables)
#   2026-09-24: RenderOptions (currency symbol, portfolio row limit)
# ============================================================================

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Any, Iterable, List, Optional, Sequence

from ReportDesk.calculator import coerce_amount

if TYPE_CHECKING:
    from ReportDesk.config import RenderingConfig

RULE_WIDTH = 40
NOT_AVAILABLE = "N/A"
PENDING = "Pending"


@dataclass(frozen=True)
class RenderOptions:
    """Rendering knobs; everything else about the layout is fixed."""

    currency_symbol: str = "$"
    portfolio_row_limit: int = 20

    @classmethod
    def from_config(cls, rendering: "RenderingConfig") -> "RenderOptions":
        return cls(
            currency_symbol=rendering.currency_symbol,
            portfolio_row_limit=rendering.portfolio_row_limit,
        )


def format_money(value: Any, symbol: str = "$") -> str:
    """Currency with thousands separators and exactly two decimals ($1,234.50)."""
    amount = coerce_amount(value)
    if amount < 0:
        return f"-{symbol}{abs(amount):,.2f}"
    return f"{symbol}{amount:,.2f}"


def format_number(value: Any, placeholder: str = NOT_AVAILABLE) -> str:
    """Plain number as authored: integral floats lose their ".0"."""
    if value is None or value == "":
        return placeholder
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_date(value: Optional[date], placeholder: str = NOT_AVAILABLE) -> str:
    return value.isoformat() if value else placeholder


def text_or(value: Any, placeholder: str = NOT_AVAILABLE) -> str:
    """The value as text, or the placeholder when it is blank."""
    if value is None:
        return placeholder
    if isinstance(value, date):
        return value.isoformat()
    text = str(value)
    return text if text.strip() else placeholder


def count_files(files: Any) -> int:
    if not files:
        return 0
    return len(files)


class TextDocument:
    """Accumulates lines of a plain-text report in authoring order."""

    def __init__(self) -> None:
        self._lines: List[str] = []

    def banner(self, title: str, rule: str = "=", width: int = RULE_WIDTH) -> None:
        self._lines.append(title)
        self._lines.append(rule * width)
        self._lines.append("")

    def section(self, heading: str, number: Optional[int] = None, width: int = RULE_WIDTH) -> None:
        self._lines.append(f"{number}. {heading}" if number is not None else heading)
        self._lines.append("-" * width)

    def line(self, text: str = "") -> None:
        self._lines.append(text)

    def blank(self) -> None:
        self._lines.append("")

    def field(self, label: str, value: Any, placeholder: str = NOT_AVAILABLE) -> None:
        self._lines.append(f"{label}: {text_or(value, placeholder)}")

    def optional_field(self, label: str, value: Any) -> None:
        """Emit ``label: value`` only when the value is present."""
        if value is not None and str(value).strip():
            self.field(label, value)

    def bullets(self, items: Iterable[str], placeholder: Optional[str] = None, indent: str = "  ") -> None:
        """Bulleted free-text list; blank items are skipped."""
        written = False
        for item in items:
            if item and item.strip():
                self._lines.append(f"{indent}• {item}")
                written = True
        if not written and placeholder:
            self._lines.append(f"{indent}{placeholder}")

    def numbered(self, items: Sequence[str], placeholder: Optional[str] = None, indent: str = "  ") -> None:
        """Numbered list keeping each item's position in the sequence."""
        for index, item in enumerate(items, start=1):
            self._lines.append(f"{indent}{index}. {item}")
        if not items and placeholder:
            self._lines.append(f"{indent}{placeholder}")

    def table(
        self,
        headers: Sequence[str],
        rows: Sequence[Sequence[str]],
        placeholder: Optional[str] = None,
        rule_width: Optional[int] = None,
    ) -> None:
        """Pipe-delimited table with a header row and a dashed rule."""
        if not rows:
            if placeholder:
                self._lines.append(f"  {placeholder}")
            return
        header = " | ".join(headers)
        self._lines.append(header)
        self._lines.append("-" * (rule_width or len(header)))
        for row in rows:
            self._lines.append(" | ".join(row))

    def render(self) -> str:
        return "\n".join(self._lines).rstrip("\n") + "\n"
