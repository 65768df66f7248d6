"""Core translation and visibility logic."""
