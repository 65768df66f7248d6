"""HTTP boundary of the portal."""
