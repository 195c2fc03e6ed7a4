"""
Sync services: snapshot persistence and the end-to-end registry sync.
"""
