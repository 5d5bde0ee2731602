"""
Legalens
Contract risk analysis and drafting backend.
"""

__version__ = "1.0.0"
