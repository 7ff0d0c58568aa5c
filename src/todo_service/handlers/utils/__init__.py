"""Shared observability and error handling utilities for the handlers."""
