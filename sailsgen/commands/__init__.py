"""CLI command groups for sailsgen."""
