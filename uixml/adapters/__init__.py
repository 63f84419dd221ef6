"""Adapter package for external I/O implementations.

Purpose:
    Concrete implementations of the domain ports: XML parsing (minidom),
    URI opening (filesystem, ``requests`` over http(s), package scheme) and a
    directory-backed package for resources.
"""
