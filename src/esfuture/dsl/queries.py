"""ES Query DSL 헬퍼.

쿼리는 별도 타입 없이 ES가 받는 dict 그대로 표현합니다.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

Query = dict[str, Any]


def match_all() -> Query:
    return {"match_all": {}}


def match(field: str, text: str, **options: Any) -> Query:
    if options:
        return {"match": {field: {"query": text, **options}}}
    return {"match": {field: text}}


def multi_match(text: str, fields: Iterable[str], type: str = "best_fields") -> Query:
    return {"multi_match": {"query": text, "fields": list(fields), "type": type}}


def query_string(text: str, default_field: str | None = None) -> Query:
    body: dict[str, Any] = {"query": text}
    if default_field:
        body["default_field"] = default_field
    return {"query_string": body}


def term(field: str, value: Any) -> Query:
    return {"term": {field: value}}


def terms(field: str, values: Iterable[Any]) -> Query:
    return {"terms": {field: list(values)}}


def ids(*doc_ids: str | int) -> Query:
    return {"ids": {"values": [str(i) for i in doc_ids]}}


def range_query(
    field: str,
    *,
    gt: Any = None,
    gte: Any = None,
    lt: Any = None,
    lte: Any = None,
) -> Query:
    candidates = {"gt": gt, "gte": gte, "lt": lt, "lte": lte}
    bounds = {k: v for k, v in candidates.items() if v is not None}
    if not bounds:
        raise ValueError(f"range 쿼리 '{field}'에 경계값이 하나 이상 필요합니다.")
    return {"range": {field: bounds}}


def bool_query(
    *,
    must: Iterable[Query] = (),
    filter: Iterable[Query] = (),
    should: Iterable[Query] = (),
    must_not: Iterable[Query] = (),
    minimum_should_match: int | str | None = None,
) -> Query:
    """bool 쿼리 조합. 비어 있는 절은 생략."""
    clauses = {
        "must": list(must),
        "filter": list(filter),
        "should": list(should),
        "must_not": list(must_not),
    }
    body: dict[str, Any] = {k: v for k, v in clauses.items() if v}
    if minimum_should_match is not None:
        body["minimum_should_match"] = minimum_should_match
    return {"bool": body}


def as_query(query: Query | str) -> Query:
    """문자열이면 query_string 쿼리로 감쌈."""
    if isinstance(query, str):
        return query_string(query)
    return query
