"""CLI de quickapi (Typer + Rich)."""
