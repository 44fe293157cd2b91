"""Handlers de Stage built-in."""

from .noop import Noop

__all__ = ["Noop"]
