"""Visit store database layer."""
