"""Remote repository indexing."""

from repo_audit.core.indexing.indexer import RepositoryIndexer, corpus_to_file_records

__all__ = ["RepositoryIndexer", "corpus_to_file_records"]
