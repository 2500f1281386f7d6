"""Example of reading and writing JSON:API documents with relationships.

Run with:
    python examples/jsonapi_client_example.py
"""
from __future__ import annotations

import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from jsonapi_client import (  # noqa: E402
    Attribute,
    ClientSettings,
    DateAttribute,
    JSONAPIRouter,
    JSONAPISerializer,
    PageBasedPagination,
    Query,
    Resource,
    ResourceFactory,
    SerializationOptions,
    ToManyRelationship,
    ToOneRelationship,
    configure,
)

BASE_URL = "http://localhost:8000"


class User(Resource):
    resource_type = "users"
    fields = [
        Attribute("name"),
        Attribute("email"),
        Attribute("bio"),
        ToManyRelationship("articles", "articles"),
    ]


class Article(Resource):
    resource_type = "articles"
    fields = [
        Attribute("title"),
        Attribute("content"),
        DateAttribute("published_at").serialize_as("publishedAt"),
        ToOneRelationship("author", User),
    ]


RESPONSE = b"""
{
  "data": [
    {
      "type": "articles",
      "id": "1",
      "attributes": {"title": "Hello", "content": "First post", "published-at": "2024-05-01T10:00:00Z"},
      "relationships": {
        "author": {
          "data": {"type": "users", "id": "7"},
          "links": {"self": "http://localhost:8000/articles/1/relationships/author"}
        }
      },
      "links": {"self": "http://localhost:8000/articles/1"}
    }
  ],
  "included": [
    {
      "type": "users",
      "id": "7",
      "attributes": {"name": "Ada", "email": "ada@example.com", "bio": "Engineer"},
      "relationships": {"articles": {"data": [{"type": "articles", "id": "1"}]}}
    }
  ],
  "links": {"next": "http://localhost:8000/articles?page[number]=2&page[size]=1"},
  "meta": {"count": 2}
}
"""


def main() -> None:
    settings = configure(ClientSettings(key_format="dasherized", log_level="info"))
    factory = ResourceFactory([User, Article])
    serializer = JSONAPISerializer.from_settings(settings, resource_factory=factory)
    router = JSONAPIRouter(BASE_URL, serializer.key_formatter, factory)

    query = (
        Query(Article)
        .include("author")
        .restrict_fields_to("title", "published_at")
        .add_descending_order("published_at")
        .paginate(PageBasedPagination(page_number=1, page_size=1))
    )
    print("GET", router.url_for_query(query))

    document = serializer.deserialize_data(RESPONSE)
    article = document.data[0]
    author = article.author
    print(f"{article.title!r} by {author.name} on {article.published_at:%Y-%m-%d}")
    print("author wrote", [a.title for a in author.articles])
    print("more pages:", document.pagination.can_fetch_next_page, document.pagination.next_url)

    article.title = "Hello, world"
    options = SerializationOptions.INCLUDE_ID | SerializationOptions.INCLUDE_TO_ONE
    print("PATCH", article.url, serializer.serialize_resources([article], options=options).decode())

    relationship = Article.field_named("author")
    print("PATCH", router.url_for_relationship(relationship, article))
    print(serializer.serialize_to_one_linkage(author).decode())


if __name__ == "__main__":
    main()
