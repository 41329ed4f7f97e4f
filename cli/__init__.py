"""Command line interface for denseprop."""
