"""G-code formatting and program validation."""
