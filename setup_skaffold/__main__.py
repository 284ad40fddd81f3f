"""
Entry point for running setup-skaffold as a module.

Usage: python -m setup_skaffold [VERSION] [options]
"""

from setup_skaffold.cli.parser import main

if __name__ == "__main__":
    main()
