"""Query compilation: GraphQL builder, templates and the compiler."""

from .compiler import QueryCompiler
from .templates import TEMPLATES, paginated_connection, simple_nested

__all__ = ["QueryCompiler", "TEMPLATES", "paginated_connection", "simple_nested"]
