"""Infrastructure layer - dispatcher, cache, resilience, logging and persistence."""
