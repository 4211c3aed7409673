"""Application layer: service interfaces and use cases."""
