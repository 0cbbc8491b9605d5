"""Application layer for the hierarchy bounded context."""
