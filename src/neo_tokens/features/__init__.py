"""Feature modules for neo-tokens."""
