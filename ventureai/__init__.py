"""Document-grounded AI generation for venture workspaces."""

__version__ = "0.1.0"
