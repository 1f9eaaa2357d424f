"""Command-line interface for modelmove."""
