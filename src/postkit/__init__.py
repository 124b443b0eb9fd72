"""Tooling for a Markdown blog post collection with YAML front matter."""

__version__ = "0.3.0"
