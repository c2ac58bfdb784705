"""HTML simplification for the model-visible page state."""
