"""
ReState: property listings on top of Appwrite.
"""

__version__ = "1.0.0"
