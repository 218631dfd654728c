"""Core module for the tourneyhub application."""

from .types import FirestoreDocument

__all__ = ["FirestoreDocument"]
