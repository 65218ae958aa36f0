"""Stock League - reconciliation core for a stock-direction prediction game."""

__version__ = "1.0.0"
