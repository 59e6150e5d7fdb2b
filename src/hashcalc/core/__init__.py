"""Core hashing, pipeline and file collaborators."""
