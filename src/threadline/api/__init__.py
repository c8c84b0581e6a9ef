"""HTTP API for the Threadline application."""
