"""Live tests against a PlatON node."""
