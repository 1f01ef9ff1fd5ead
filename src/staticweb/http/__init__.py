"""HTTP primitives — immutable request, response, and header types."""
