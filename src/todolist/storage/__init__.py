"""
Durable document storage.

Components:
- documents.py: FileDocumentStore, whole-file read/write of named JSON documents
"""
