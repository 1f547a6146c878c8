"""Version normalization, matching and package resolution."""
