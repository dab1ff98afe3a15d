"""JSON API over the import pipeline and season lifecycle."""
