"""Core types shared by every layer: errors and exit codes."""
