"""shelterpost - moderation dashboard core for shelter blog posts."""

__version__ = "0.1.0"
