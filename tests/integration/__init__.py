"""Integration tests against the live RIKA Firenet portal."""
