"""Command line tools for cfgtree."""
