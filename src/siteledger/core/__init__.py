"""Core domain layer: entities, ports, services."""
