"""요청 정의 DSL.

각 정의는 fluent builder이며, build()가 벤더 클라이언트 메서드의
키워드 인자를 반환합니다.

Usage:
    >>> from esfuture.dsl import index_into, search_in, term
    >>>
    >>> index_into("books").id("1").fields(title="Dune", year=1965)
    >>> search_in("books").query("dune").filter(term("year", 1965)).limit(10)
"""

from __future__ import annotations

from .base import BulkCompatibleDefinition, Definition
from .documents import (
    DeleteByIdDefinition,
    GetDefinition,
    IndexDefinition,
    MultiGetDefinition,
    UpdateDefinition,
)
from .indices import CreateIndexDefinition, DeleteIndexDefinition, OptimizeDefinition
from .percolate import PercolateDefinition, RegisterDefinition
from .queries import (
    bool_query,
    ids,
    match,
    match_all,
    multi_match,
    query_string,
    range_query,
    term,
    terms,
)
from .search import (
    CountDefinition,
    DeleteByQueryDefinition,
    MoreLikeThisDefinition,
    MultiSearchDefinition,
    SearchDefinition,
    ValidateDefinition,
)

# =============================================================================
# Entry points
# =============================================================================


def index_into(index: str) -> IndexDefinition:
    return IndexDefinition(index)


def search_in(*indexes: str) -> SearchDefinition:
    return SearchDefinition(*indexes)


def multi_search(*searches: SearchDefinition) -> MultiSearchDefinition:
    return MultiSearchDefinition(searches)


def count_from(*indexes: str) -> CountDefinition:
    return CountDefinition(*indexes)


def get_id(doc_id: str | int, index: str | None = None) -> GetDefinition:
    return GetDefinition(doc_id, index)


def multi_get(*gets: GetDefinition) -> MultiGetDefinition:
    return MultiGetDefinition(list(gets))


def delete_id(doc_id: str | int, index: str | None = None) -> DeleteByIdDefinition:
    return DeleteByIdDefinition(doc_id, index)


def delete_from(*indexes: str) -> DeleteByQueryDefinition:
    return DeleteByQueryDefinition(*indexes)


def update_id(doc_id: str | int, index: str | None = None) -> UpdateDefinition:
    return UpdateDefinition(doc_id, index)


def validate_in(*indexes: str) -> ValidateDefinition:
    return ValidateDefinition(*indexes)


def more_like_this(doc_id: str | int, index: str | None = None) -> MoreLikeThisDefinition:
    return MoreLikeThisDefinition(doc_id, index)


def create_index(name: str) -> CreateIndexDefinition:
    return CreateIndexDefinition(name)


def delete_index(*indexes: str) -> DeleteIndexDefinition:
    return DeleteIndexDefinition(*indexes)


def optimize_index(*indexes: str) -> OptimizeDefinition:
    return OptimizeDefinition(*indexes)


def register_query(name: str) -> RegisterDefinition:
    return RegisterDefinition(name)


def percolate_in(index: str) -> PercolateDefinition:
    return PercolateDefinition(index)


__all__ = [
    # Base
    "Definition",
    "BulkCompatibleDefinition",
    # Documents
    "IndexDefinition",
    "GetDefinition",
    "MultiGetDefinition",
    "DeleteByIdDefinition",
    "UpdateDefinition",
    # Search
    "SearchDefinition",
    "MultiSearchDefinition",
    "CountDefinition",
    "DeleteByQueryDefinition",
    "ValidateDefinition",
    "MoreLikeThisDefinition",
    # Indices
    "CreateIndexDefinition",
    "DeleteIndexDefinition",
    "OptimizeDefinition",
    # Percolate
    "RegisterDefinition",
    "PercolateDefinition",
    # Queries
    "match_all",
    "match",
    "multi_match",
    "query_string",
    "term",
    "terms",
    "ids",
    "range_query",
    "bool_query",
    # Entry points
    "index_into",
    "search_in",
    "multi_search",
    "count_from",
    "get_id",
    "multi_get",
    "delete_id",
    "delete_from",
    "update_id",
    "validate_in",
    "more_like_this",
    "create_index",
    "delete_index",
    "optimize_index",
    "register_query",
    "percolate_in",
]
