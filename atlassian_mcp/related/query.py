"""
Related - Query Synthesizer

Small expression tree for CQL / JQL. Clauses are built as nodes and only
rendered to text at the end, so quoting lives in one place and the shape of
a query can be inspected without parsing strings.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple, Union


def quote(value: str) -> str:
    """Double-quote a string literal for CQL/JQL."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


@dataclass(frozen=True)
class Match:
    """Text match: ``field ~ "value"``."""
    field: str
    value: str

    def render(self) -> str:
        return f"{self.field} ~ {quote(self.value)}"


@dataclass(frozen=True)
class Equals:
    """Equality: ``field = value``. Bare values are used for ids and keys."""
    field: str
    value: str
    quoted: bool = True

    def render(self) -> str:
        return f"{self.field} = {self._value()}"

    def _value(self) -> str:
        return quote(self.value) if self.quoted else str(self.value)


@dataclass(frozen=True)
class Not:
    """Negation. ``Not(Equals(...))`` renders as ``field != value``."""
    clause: "Expression"

    def render(self) -> str:
        if isinstance(self.clause, Equals):
            return f"{self.clause.field} != {self.clause._value()}"
        return f"NOT ({self.clause.render()})"


@dataclass(frozen=True)
class And:
    clauses: Tuple["Expression", ...]

    def render(self) -> str:
        return " AND ".join(_wrap(c, Or) for c in self.clauses)


@dataclass(frozen=True)
class Or:
    clauses: Tuple["Expression", ...]

    def render(self) -> str:
        return " OR ".join(_wrap(c, And) for c in self.clauses)


Expression = Union[Match, Equals, Not, And, Or]


@dataclass(frozen=True)
class Ordered:
    """An expression with an ``ORDER BY`` suffix (JQL only)."""
    where: Expression
    field: str
    descending: bool = True

    def render(self) -> str:
        direction = "DESC" if self.descending else "ASC"
        return f"{self.where.render()} ORDER BY {self.field} {direction}"


def _wrap(clause: Expression, other: type) -> str:
    if isinstance(clause, other):
        return f"({clause.render()})"
    return clause.render()


def _combine(kind: type, clauses: Iterable[Optional[Expression]]) -> Optional[Expression]:
    flat = []
    for clause in clauses:
        if clause is None:
            continue
        if isinstance(clause, kind):
            flat.extend(clause.clauses)
        else:
            flat.append(clause)
    if not flat:
        return None
    if len(flat) == 1:
        return flat[0]
    return kind(tuple(flat))


def and_(*clauses: Optional[Expression]) -> Optional[Expression]:
    """Conjunction of the non-empty clauses (flattened)."""
    return _combine(And, clauses)


def or_(*clauses: Optional[Expression]) -> Optional[Expression]:
    """Disjunction of the non-empty clauses (flattened)."""
    return _combine(Or, clauses)


def any_match(field: str, values: Sequence[str]) -> Optional[Expression]:
    return or_(*(Match(field, v) for v in values))


def any_equal(field: str, values: Sequence[str]) -> Optional[Expression]:
    return or_(*(Equals(field, v) for v in values))


def related_pages_query(
    page_id: str,
    keywords: Sequence[str],
    labels: Sequence[str],
) -> Expression:
    """
    CQL for pages related to ``page_id``.

    Keyword title matches narrow the base clause. Shared labels broaden the
    result with a top-level OR when keyword matches exist, and narrow it
    with AND when they do not.

    Args:
        page_id: Source page ID (excluded from the match)
        keywords: Keywords from the source title
        labels: Label names of the source page

    Returns:
        Expression tree; call ``.render()`` for the CQL string
    """
    query = and_(
        Equals("type", "page", quoted=False),
        Not(Equals("id", page_id, quoted=False)),
    )

    title_terms = any_match("title", keywords)
    if title_terms is not None:
        query = and_(query, title_terms)

    label_terms = any_equal("labelText", labels)
    if label_terms is not None:
        if title_terms is not None:
            query = or_(query, label_terms)
        else:
            query = and_(query, label_terms)

    return query


def related_issues_query(
    issue_key: str,
    project_key: Optional[str],
    keywords: Sequence[str],
    labels: Sequence[str],
) -> Ordered:
    """
    JQL for issues related to ``issue_key``.

    Same project, summary keywords and shared labels are OR'd together,
    the source issue is excluded and the newest updates come first.

    Args:
        issue_key: Source issue key (excluded from the match)
        project_key: Project of the source issue
        keywords: Keywords from the source summary
        labels: Labels of the source issue

    Returns:
        Ordered expression; call ``.render()`` for the JQL string
    """
    related = or_(
        Equals("project", project_key, quoted=False) if project_key else None,
        any_match("summary", keywords),
        any_equal("labels", labels),
    )
    exclude_self = Not(Equals("issuekey", issue_key, quoted=False))
    return Ordered(and_(related, exclude_self), "updated", descending=True)
