"""Configuration — settings models, ``scuttle.toml`` discovery, logging."""
