"""Infrastructure layer - logging, adapters and factories."""
