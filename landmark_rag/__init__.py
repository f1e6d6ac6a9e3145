"""
Landmark RAG.

Retrieval-augmented generation over landmark articles: chunking, pluggable
vector stores, rank fusion, HYDE query expansion and streamed tool-calling
chat progress.
"""

__version__ = "0.1.0"
