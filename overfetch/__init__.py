from .applications import GraphQL, create_app
from .data import STORE, Post, Store, User
from .schema import schema, type_defs

__all__ = ['GraphQL', 'Post', 'STORE', 'Store', 'User', 'create_app', 'schema', 'type_defs']
