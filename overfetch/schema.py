from gql import gql, make_schema
from gql.resolver import register_resolvers

from . import resolvers  # noqa: F401  registers the resolvers

type_defs = gql('''
"""A blog post by a user"""
type Post {
  id: String!
  title: String!
  content: String!
  likes: Int!
}

"""A user of the application"""
type User {
  id: String!
  name: String!
  email: String!
  phone: String!
  """List of posts by this user"""
  posts: [Post]
}

"""Root Query"""
type Query {
  """Get a single user by ID"""
  user(id: String): User
  """Get all users"""
  users: [User]
  """Get a single post by ID"""
  post(id: String!): Post
  """Get all posts"""
  posts: [Post]
}
''')

schema = make_schema(type_defs)
register_resolvers(schema)
