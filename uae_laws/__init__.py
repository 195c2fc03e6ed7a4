"""
UAE Laws Registry - tracks MOHRE legal instruments over time.

Discovers instruments from index pages, enriches them from the UAE legislation
portal, links amendments and repeals, and diffs dated snapshots.
"""

__version__ = "1.0.0"
