"""commitlanes - lane layout for commit history graphs"""

__version__ = "0.1.0"
