"""Subcommand parsers and handlers for the guidectl CLI."""
