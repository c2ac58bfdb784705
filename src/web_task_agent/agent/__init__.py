"""The model-driven agent loop."""
