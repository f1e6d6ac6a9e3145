"""
Core retrieval logic.

Chunking, rank fusion, HYDE expansion and tool-calling progress tracking.
"""
