"""Adoptium Marketplace catalog: models, filtering and paginated fetching."""
