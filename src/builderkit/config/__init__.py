"""Configuration layer: settings discovery, section models, and logging setup."""
