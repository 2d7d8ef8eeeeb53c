"""cfimport: migrate Contentful posts and pages to static-site files."""

__version__ = "0.1.0"
