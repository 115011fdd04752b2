"""Core domain logic: chunking, indexing, prompts and exceptions."""
