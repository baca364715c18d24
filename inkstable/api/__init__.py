"""HTTP service for stabilizing recorded strokes."""
