"""Convert GraphQL schemas and queries into a JSON IR for code generators."""

__version__ = "0.1.0"
