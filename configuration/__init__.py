"""Configuration package: conf.yml plus the loader that reads it."""
