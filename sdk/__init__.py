"""Python client for the store API."""
