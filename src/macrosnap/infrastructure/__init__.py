"""Infrastructure layer: providers, aggregation, storage and wiring."""
