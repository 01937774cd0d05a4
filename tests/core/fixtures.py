"""
Shared schemas and normalized stores for the denormalization tests.
"""
from denormalizer import EntitySchema, array_of, union_of, values_of


def article_schemas():
    article = EntitySchema("articles")
    user = EntitySchema("users")
    collection = EntitySchema("collections")
    article.define(author=user, collections=array_of(collection))
    collection.define(curator=user)
    return article, user, collection


ARTICLE_1 = {
    "id": 1,
    "title": "Some Article",
    "author": {"id": 1, "name": "Dan"},
    "collections": [
        {"id": 1, "name": "Dan"},
        {"id": 2, "name": "Giampaolo"},
    ],
}

ARTICLE_2 = {
    "id": 2,
    "title": "Other Article",
    "author": {"id": 1, "name": "Dan"},
}

ARTICLE_3 = {
    "id": 3,
    "title": "Without author",
    "author": None,
}

ARTICLE_4 = {
    "id": 4,
    "title": "Some Article",
    "author": {"id": "", "name": "Deleted"},
    "collections": [{"id": "", "name": "Deleted"}],
}


def article_entities():
    return {
        "articles": {
            "1": {"id": 1, "title": "Some Article", "author": 1, "collections": [1, 2]},
            "2": {"id": 2, "title": "Other Article", "author": 1},
            "3": {"id": 3, "title": "Without author", "author": None},
            "4": {"id": 4, "title": "Some Article", "author": "", "collections": [""]},
        },
        "users": {
            "1": {"id": 1, "name": "Dan"},
            "": {"id": "", "name": "Deleted"},
        },
        "collections": {
            "1": {"id": 1, "name": "Dan"},
            "2": {"id": 2, "name": "Giampaolo"},
            "": {"id": "", "name": "Deleted"},
        },
    }


def interdependent_schemas():
    article = EntitySchema("articles")
    user = EntitySchema("users")
    article.define(author=user)
    user.define(articles=array_of(article))
    return article, user


def interdependent_entities():
    return {
        "articles": {"80": {"id": 80, "title": "Some Article", "author": 1}},
        "users": {"1": {"id": 1, "name": "Dan", "articles": [80]}},
    }


def union_item_schema():
    post = EntitySchema("posts")
    user = EntitySchema("users")
    post.define(user=user)
    return union_of({"post": post, "user": user}, "type")


UNION_ITEMS = [
    {
        "id": 1,
        "title": "Some Post",
        "user": {"id": 1, "name": "Dan"},
        "type": "post",
    },
    {"id": 2, "name": "Ashley", "type": "user"},
    {"id": 2, "title": "Other Post", "type": "post"},
]

UNION_RESULT = [
    {"id": 1, "schema": "post"},
    {"id": 2, "schema": "user"},
    {"id": 2, "schema": "post"},
]


def union_entities():
    return {
        "posts": {
            "1": {"id": 1, "title": "Some Post", "user": 1, "type": "post"},
            "2": {"id": 2, "title": "Other Post", "type": "post"},
        },
        "users": {
            "1": {"id": 1, "name": "Dan"},
            "2": {"id": 2, "name": "Ashley", "type": "user"},
        },
    }


def keyed_article_schema():
    article = EntitySchema("articles")
    collection = EntitySchema("collections")
    article.define(collections=values_of(collection))
    collection.define(curator=EntitySchema("users"))
    return article


KEYED_ARTICLES = [
    {
        "id": 1,
        "title": "Some Article",
        "collections": {
            "1": {"id": 1, "name": "Dan"},
            "2": {"id": 2, "name": "Giampaolo"},
        },
    },
    {"id": 2, "title": "Other Article"},
]


def keyed_article_entities():
    return {
        "articles": {
            "1": {"id": 1, "title": "Some Article", "collections": {"1": 1, "2": 2}},
            "2": {"id": 2, "title": "Other Article"},
        },
        "collections": {
            "1": {"id": 1, "name": "Dan"},
            "2": {"id": 2, "name": "Giampaolo"},
        },
    }
