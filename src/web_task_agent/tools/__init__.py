"""Browser tools exposed to the agent loop."""
