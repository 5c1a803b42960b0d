"""Pure forecasting and inventory logic (no I/O)."""
