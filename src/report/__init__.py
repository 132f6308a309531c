"""Report models and renderers for svcmap."""

from report.symbols import DEFAULT_SYMBOLS, SymbolTable

__all__ = ["DEFAULT_SYMBOLS", "SymbolTable"]
