"""Document portal backend package."""
