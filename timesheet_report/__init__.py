"""Employee time report: aggregate hours per employee and render reports."""

__version__ = "1.0.0"
