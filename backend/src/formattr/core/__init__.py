"""Core infrastructure: configuration, logging and store client."""
