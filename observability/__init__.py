"""Observability utilities for the ZONE services."""
from .logger import log_event

__all__ = ["log_event"]
