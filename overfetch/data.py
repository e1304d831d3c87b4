from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple


@dataclass(frozen=True)
class Post:
    id: str
    title: str
    content: str
    likes: int


@dataclass(frozen=True)
class User:
    id: str
    name: str
    email: str
    phone: str
    post_ids: Tuple[str, ...] = field(default_factory=tuple)


def find_one(records, key, value):
    for item in records:
        if getattr(item, key) == value:
            return item

    return None


def check_ids(records, kind):
    seen = set()
    for item in records:
        if not isinstance(item.id, str) or not item.id:
            raise ValueError(f'{kind} id must be a non-empty string, got {item.id!r}.')
        if item.id in seen:
            raise ValueError(f'Duplicate {kind} id {item.id!r}.')
        seen.add(item.id)


class Store:
    """Read-only lookups over the fixed post and user collections.

    Both collections keep their load order. Ids are validated once here, so
    a broken fixture fails at startup rather than on the first request.
    """

    posts: Tuple[Post, ...]
    users: Tuple[User, ...]

    def __init__(self, posts: Iterable[Post], users: Iterable[User]) -> None:
        self.posts = tuple(posts)
        self.users = tuple(users)
        check_ids(self.posts, 'post')
        check_ids(self.users, 'user')

    def find_post(self, post_id: str) -> Optional[Post]:
        return find_one(self.posts, 'id', post_id)

    def find_user(self, user_id: str) -> Optional[User]:
        return find_one(self.users, 'id', user_id)

    def first_user(self) -> Optional[User]:
        return self.users[0] if self.users else None

    def posts_for(self, user: User) -> List[Post]:
        # unknown ids are dropped, the rest keep post_ids order
        found = (self.find_post(post_id) for post_id in user.post_ids)
        return [post for post in found if post is not None]


posts = (
    Post(
        id='1',
        title='Introduction to GraphQL',
        content=(
            'GraphQL is a query language for APIs and a runtime for fulfilling those queries with '
            'your existing data. GraphQL provides a complete and understandable description of the '
            'data in your API, gives clients the power to ask for exactly what they need and '
            'nothing more.'
        ),
        likes=142,
    ),
    Post(
        id='2',
        title='Building Mobile Apps with React Native',
        content=(
            "React Native lets you create truly native apps and doesn't compromise your users' "
            'experiences. It provides a core set of platform agnostic native components like View, '
            "Text, and Image that map directly to the platform's native UI building blocks."
        ),
        likes=89,
    ),
    Post(
        id='3',
        title='Understanding REST vs GraphQL',
        content=(
            'While REST has been the standard for API design for many years, GraphQL offers a more '
            'flexible approach. With GraphQL, you can request exactly the data you need, reducing '
            'over-fetching and under-fetching issues common in REST APIs.'
        ),
        likes=256,
    ),
    Post(
        id='4',
        title='Optimizing API Performance',
        content=(
            'Performance optimization is crucial for mobile applications. Reducing payload sizes, '
            'implementing caching strategies, and minimizing network requests can significantly '
            'improve the user experience.'
        ),
        likes=178,
    ),
    Post(
        id='5',
        title='The Future of Mobile Development',
        content=(
            'Mobile development continues to evolve rapidly. Cross-platform frameworks, AI '
            'integration, and 5G capabilities are shaping the future of how we build and '
            'experience mobile applications.'
        ),
        likes=312,
    ),
)

users = (
    User(
        id='1',
        name='John Doe',
        email='john.doe@example.com',
        phone='+1-555-123-4567',
        post_ids=('1', '2', '3'),
    ),
    User(
        id='2',
        name='Jane Smith',
        email='jane.smith@example.com',
        phone='+1-555-987-6543',
        post_ids=('4', '5'),
    ),
    User(
        id='3',
        name='Bob Johnson',
        email='bob.johnson@example.com',
        phone='+1-555-456-7890',
        post_ids=('1', '4'),
    ),
)

STORE = Store(posts, users)
