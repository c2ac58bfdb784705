"""Browser session management."""
