"""
safelink - Terminal client for the SafeLink contacts REST API.

Lists, paginates, searches, creates, updates and deletes contacts held by a
remote contact service.
"""

__version__ = "0.1.0"
