"""Domain layer: errors shared across the service."""
