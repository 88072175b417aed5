"""
Command-line Layer.

The Typer application and the Rich formatters it prints through.
"""
