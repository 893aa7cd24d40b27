"""Hosts that connect the engine to a real terminal."""
