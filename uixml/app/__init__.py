"""Composition layer wiring the registry, adapters and use cases."""
