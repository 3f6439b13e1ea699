"""In-memory fakes for unit tests."""
