"""Command groups for Fly CLI."""
