"""Infrastructure layer: database, repositories and external services."""
