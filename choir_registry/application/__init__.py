"""Application layer: use cases coordinating repositories and storage."""
