"""
setup-skaffold: download, verify and install Skaffold in CI.
"""

__version__ = "0.1.0"
