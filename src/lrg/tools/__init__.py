"""
Traversal and ranking tools for lrg.

The walker collects entries from the filesystem; the ranker orders and
truncates them in memory.
"""
