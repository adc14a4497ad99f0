"""Application layer: options, DTOs, services and use cases."""
