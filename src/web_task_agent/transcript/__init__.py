"""Progress output for agent runs."""
