"""The `validata` command line interface."""
