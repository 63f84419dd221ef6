"""Domain types: control definitions, registry, render results and errors."""
