"""Core modules for the interactive GraphQL explorer."""

from .auth import Auth, SessionAuth
from .config import ConfigStore, SessionConfig
from .errors import (
    ConfigError,
    ExplorerError,
    HTTPError,
    LoginError,
    OperationFileError,
    QueryError,
    SchemaResolutionError,
    TransportError,
)
from .explorer import Explorer
from .files import detect_kind, export_operation, extract_auth_token
from .introspection import SchemaCache, leaf_type_name
from .login import Authenticator
from .models import (
    BenchmarkStats,
    ExecutionResult,
    FieldPath,
    MutationDescriptor,
    Operation,
    OperationKind,
    SchemaCacheEntry,
    SelectionSet,
)
from .prompts import ClickEditor, ClickPrompter, Editor, Prompter
from .query_builder import (
    MutationBuilder,
    QueryBuilder,
    fill_template,
    render_mutation_template,
    render_query,
)
from .session import OperationSession, SessionAction, SessionState
from .transport import GraphQLTransport

__all__ = [
    # Auth
    "Auth",
    "SessionAuth",
    # Config
    "ConfigStore",
    "SessionConfig",
    # Errors
    "ExplorerError",
    "TransportError",
    "HTTPError",
    "QueryError",
    "SchemaResolutionError",
    "OperationFileError",
    "LoginError",
    "ConfigError",
    # Models
    "BenchmarkStats",
    "ExecutionResult",
    "FieldPath",
    "MutationDescriptor",
    "Operation",
    "OperationKind",
    "SchemaCacheEntry",
    "SelectionSet",
    # Transport and schema
    "GraphQLTransport",
    "SchemaCache",
    "leaf_type_name",
    # Builders
    "QueryBuilder",
    "MutationBuilder",
    "render_query",
    "render_mutation_template",
    "fill_template",
    # Interaction
    "Prompter",
    "Editor",
    "ClickPrompter",
    "ClickEditor",
    # Files
    "detect_kind",
    "export_operation",
    "extract_auth_token",
    # Session
    "Authenticator",
    "OperationSession",
    "SessionAction",
    "SessionState",
    "Explorer",
]
