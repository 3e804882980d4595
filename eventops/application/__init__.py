"""Application layer: DTOs, ports, services and use cases (no infrastructure imports)."""
