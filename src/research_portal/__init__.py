"""Research portal: mind map explorer and backend gateway."""

__version__ = "0.1.0"
