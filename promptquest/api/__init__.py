"""HTTP surface for the question bank."""
