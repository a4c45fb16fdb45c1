"""Type inference, coercion, summarization and chart recommendation."""
