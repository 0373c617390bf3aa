"""Infrastructure layer: configuration, database, logging and storage adapters."""
