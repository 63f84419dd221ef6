"""Use-case layer: rendering markup and loading it from URIs.

Modules here drive domain objects through ports and never open files or
sockets themselves.
"""
