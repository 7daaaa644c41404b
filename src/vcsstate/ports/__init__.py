"""Ports: interfaces the adapters implement."""
