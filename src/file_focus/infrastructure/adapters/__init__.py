"""Adapters isolating the domain from the operating system."""

from .filesystem_adapter import FilesystemAdapter, ResourceProvider

__all__ = ["FilesystemAdapter", "ResourceProvider"]
