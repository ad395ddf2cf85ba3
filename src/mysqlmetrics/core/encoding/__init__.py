"""Output encoders for metric samples."""
