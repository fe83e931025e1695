"""Service layer orchestrating compilation, corpus evaluation and ranking."""
