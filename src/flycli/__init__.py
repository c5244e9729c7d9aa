"""Fly CLI - command-line interface for the Fly platform."""

__version__ = "0.1.0"
