"""
MetaCoin deploy and interaction scripts
"""

__version__ = "0.1.0"
