"""HTTP surface for the calendar engine."""
