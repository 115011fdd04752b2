"""
Repository audit service.

Chunked LLM security analysis of source repositories, with GitHub and
GitLab indexing that streams progress to the caller.
"""

__version__ = "0.1.0"
