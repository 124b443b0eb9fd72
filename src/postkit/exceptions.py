"""Centralized exceptions for postkit."""


class PostkitError(Exception):
    """Base exception for all postkit errors."""
