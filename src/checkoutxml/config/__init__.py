"""Configuration: TOML section models, unified settings, and logging."""
