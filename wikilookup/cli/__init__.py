"""Command line interface for wikilookup."""
