"""Filter, sort and paginate list endpoints from a ``UniversalQuery`` body.

Field names arrive in camelCase and resolve to snake_case model attributes.
Unknown fields are ignored so list views can send columns that only exist on
the client.
"""
import operator
import uuid
from datetime import date, datetime, timedelta, timezone

from fastapi import HTTPException
from pydantic.alias_generators import to_snake
from sqlalchemy import asc, desc
from sqlalchemy.orm import Query

from apollo_cms.schemas.universal import SortClause, UniversalQuery

_COMPARATORS = {
    "=": operator.eq,
    "!=": operator.ne,
    ">": operator.gt,
    "<": operator.lt,
    ">=": operator.ge,
    "<=": operator.le,
}
_TRUE_WORDS = frozenset({"1", "true", "yes", "y", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "n", "off"})


def _invalid(field: str, kind: str) -> HTTPException:
    return HTTPException(status_code=400, detail=f'Invalid filter value for field "{field}" ({kind})')


def _as_bool(field: str, value):
    if isinstance(value, bool):
        return value
    word = str(value or "").strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise _invalid(field, "boolean")


def _as_number(python_type):
    def _coerce(field: str, value):
        if value is None:
            return None
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return python_type(value)
        try:
            return python_type(str(value).strip().replace(",", "."))
        except (TypeError, ValueError):
            raise _invalid(field, "number")
    return _coerce


def _is_date_literal(value) -> bool:
    if isinstance(value, date) and not isinstance(value, datetime):
        return True
    text = value.strip() if isinstance(value, str) else ""
    if not text or "T" in text or " " in text:
        return False
    try:
        date.fromisoformat(text)
    except ValueError:
        return False
    return True


def _as_datetime(field: str, value):
    if isinstance(value, datetime):
        parsed = value
    elif _is_date_literal(value):
        # A bare date on a timestamp column means midnight of that day.
        day = value if isinstance(value, date) else date.fromisoformat(value.strip())
        parsed = datetime.combine(day, datetime.min.time())
    else:
        try:
            parsed = datetime.fromisoformat(str(value or "").strip().replace("Z", "+00:00"))
        except ValueError:
            raise _invalid(field, "datetime")
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def _as_uuid(field: str, value):
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value or "").strip())
    except ValueError:
        raise _invalid(field, "uuid")


_COERCERS = {
    bool: _as_bool,
    int: _as_number(int),
    float: _as_number(float),
    datetime: _as_datetime,
    uuid.UUID: _as_uuid,
}


def _python_type(column):
    try:
        return column.property.columns[0].type.python_type
    except (AttributeError, IndexError, NotImplementedError):
        return None


def _coerce_filter_value(column, value):
    coerce = _COERCERS.get(_python_type(column))
    return coerce(column.key, value) if coerce else value


def _resolve(model, field: str):
    return getattr(model, to_snake(str(field or "").strip()), None)


def _filter_expression(column, op: str, raw):
    if op == "in":
        values = raw if isinstance(raw, list) else [raw]
        return column.in_([_coerce_filter_value(column, v) for v in values])
    if op == "~":
        return column.ilike(f"%{raw}%")
    value = _coerce_filter_value(column, raw)
    if op in {"=", "!="} and _python_type(column) is datetime and _is_date_literal(raw):
        whole_day = (column >= value) & (column < value + timedelta(days=1))
        return whole_day if op == "=" else ~whole_day
    return _COMPARATORS[op](column, value)


def apply_universal_query(q: Query, model, uq: UniversalQuery, default_sort: list[SortClause] | None = None) -> Query:
    for clause in uq.filters:
        column = _resolve(model, clause.field)
        if column is not None:
            q = q.filter(_filter_expression(column, clause.op, clause.value))
    for clause in uq.sort or default_sort or []:
        column = _resolve(model, clause.field)
        if column is not None:
            q = q.order_by(asc(column) if clause.dir == "asc" else desc(column))
    return q


def run_universal_query(q: Query, model, uq: UniversalQuery, default_sort: list[SortClause] | None = None):
    """Apply filters and sort, then return ``(rows, total)`` for the requested page."""
    q = apply_universal_query(q, model, uq, default_sort)
    total = q.count()
    rows = q.offset(uq.page.offset).limit(uq.page.limit).all()
    return rows, total
