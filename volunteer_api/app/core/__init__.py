"""Configuration, database access, logging and error handling."""
