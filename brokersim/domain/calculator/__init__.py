"""Pure per-month calculation functions."""
