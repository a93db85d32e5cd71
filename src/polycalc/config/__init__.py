"""Configuration layer -- settings models, discovery, and logging setup."""
