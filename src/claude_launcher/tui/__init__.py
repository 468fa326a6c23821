"""Textual frontend for Claude Launcher."""
