"""Qt widgets and pointer interactions."""
