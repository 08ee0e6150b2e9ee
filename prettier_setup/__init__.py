"""
prettier-setup — add Prettier, lint-staged and husky to a Node project.
"""

__version__ = "0.1.0"
