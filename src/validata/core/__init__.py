"""Core table model, enumerations and errors shared across the package."""
