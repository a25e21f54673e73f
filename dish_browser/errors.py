"""Failure taxonomy for catalog fetches."""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for every failure talking to the catalog service."""


class NetworkFailure(CatalogError):
    """Request rejected, timed out, or answered with a non-success status."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class ParseFailure(CatalogError):
    """Response body could not be decoded into catalog models."""
