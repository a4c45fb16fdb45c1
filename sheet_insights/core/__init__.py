"""Configuration, errors, logging and terminal output shared across Sheet Insights."""
