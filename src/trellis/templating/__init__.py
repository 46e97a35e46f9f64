"""Templating — kida environment construction and built-in helpers."""
