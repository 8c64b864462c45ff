"""Core interfaces."""

from aurora.core.interfaces.document_store import IDocumentStore

__all__ = ["IDocumentStore"]
