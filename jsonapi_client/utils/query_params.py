"""Helpers for building JSON:API query parameters."""

from __future__ import annotations

from typing import Any, Mapping


def _join_csv(values: list[str]) -> str:
    return ",".join(value for value in values if value)


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple, set)):
        return _join_csv([_format_value(item) for item in value])
    return str(value)


def build_query_params(params: Mapping[str, Any]) -> list[tuple[str, str]]:
    """Encode normalized JSON:API query parameter families.

    ``params`` uses the following shape, every key is optional::

        {
            "include": ["author", "comments.author"],
            "fields": {"posts": ["title", "body"]},
            "sort": [{"field": "created", "direction": "desc"}],
            "page": {"number": 2, "size": 20},
            "filter": {"title": "Hello", "age": {"op": "gt", "val": 18}},
        }
    """
    items: list[tuple[str, str]] = []

    for field_name, value in (params.get("filter") or {}).items():
        if isinstance(value, dict) and "op" in value:
            if value["op"] in ("eq", None):
                items.append((f"filter[{field_name}]", _format_value(value.get("val"))))
            else:
                items.append(
                    (f"filter[{field_name}][{value['op']}]", _format_value(value.get("val")))
                )
        else:
            items.append((f"filter[{field_name}]", _format_value(value)))

    include = params.get("include") or []
    if include:
        items.append(("include", _join_csv(list(include))))

    for resource_type, fields in (params.get("fields") or {}).items():
        items.append((f"fields[{resource_type}]", _join_csv(list(fields))))

    sort = params.get("sort") or []
    if sort:
        items.append(
            (
                "sort",
                _join_csv(
                    [
                        f"-{item['field']}" if item.get("direction") == "desc" else item["field"]
                        for item in sort
                    ]
                ),
            )
        )

    for page_key, value in (params.get("page") or {}).items():
        items.append((f"page[{page_key}]", _format_value(value)))

    return items


def set_query_item(items: list[tuple[str, str]], name: str, value: str) -> list[tuple[str, str]]:
    """Return ``items`` with any item named ``name`` replaced by (name, value)."""
    return [item for item in items if item[0] != name] + [(name, value)]
