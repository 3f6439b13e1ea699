"""Core package: configuration, credentials, metadata and errors."""
