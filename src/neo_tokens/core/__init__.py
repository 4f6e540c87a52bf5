"""Core building blocks shared by all neo-tokens features."""
