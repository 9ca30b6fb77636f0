"""Unit tests for the résumé extraction and match-scoring pipeline."""
