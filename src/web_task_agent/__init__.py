"""Natural-language browser automation agent."""
