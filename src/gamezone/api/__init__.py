"""HTTP surface for page controllers and games."""
