"""Building blocks for a blog backend: categories, posts, filters, loaders and an HTTP shell."""

__version__ = "0.1.0"