"""
Finance Tracker - Source Package

A personal finance tracker core: record income and expenses,
compute dashboard statistics, export to CSV.

DESIGN PRINCIPLES:
1. All state lives in a local key-value store
2. Derived numbers are recomputed from the full transaction list
3. Unreadable stored data degrades to "no data yet"
4. Every mutation is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Finance Tracker Team"
