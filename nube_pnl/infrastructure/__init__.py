"""Infrastructure layer - marketplace adapters and logging."""
