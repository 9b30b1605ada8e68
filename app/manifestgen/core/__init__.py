"""Core infrastructure: paths, project configuration and console theme."""
