"""
Jobs Repository.

Responsibilities:
- CRUD operations for the jobs table.
- Translating rows to the external (camel case) shape.

Non-Responsibilities:
- No transport concerns; errors are raised, never formatted.
- No logging; the database client does that.

Every operation issues exactly one query.
"""
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from .errors import NotFoundError, ValidationError
from .schema import validate_filters, validate_job, validate_job_update
from .sql import build_set_clause

JOB_COLUMNS = {
    "companyHandle": "company_handle",
}

_RETURNING = 'id, title, salary, equity, company_handle AS "companyHandle"'


def _format_equity(value: Any) -> Optional[str]:
    # text on SQLite, Decimal on PostgreSQL; other drivers may hand back floats
    if value is None or isinstance(value, str):
        return value
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return format(value, "f")


def _to_job(row: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": row["id"],
        "title": row["title"],
        "salary": row["salary"],
        "equity": _format_equity(row["equity"]),
        "companyHandle": row["companyHandle"],
    }


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def build_job_filters(filters: Dict[str, Any]) -> Tuple[str, List[Any]]:
    """
    Build the WHERE clause for find_all.

    Predicates are added in a fixed order and each bound value is appended
    to a single list, so $n always matches its value's position.

    Returns:
        Tuple of (where_clause, values); where_clause is "" when no
        predicate applies
    """
    predicates: List[Tuple[str, Optional[Any]]] = []

    title = filters.get("title")
    if title:
        predicates.append(
            ("LOWER(title) LIKE LOWER(${}) ESCAPE '\\'", f"%{_escape_like(title)}%")
        )

    min_salary = filters.get("minSalary")
    if min_salary is not None:
        predicates.append(("salary >= ${}", min_salary))

    if filters.get("hasEquity") is True:
        predicates.append(("CAST(equity AS NUMERIC) > 0", None))

    clauses: List[str] = []
    values: List[Any] = []
    for template, value in predicates:
        if "${}" in template:
            values.append(value)
            template = template.replace("${}", f"${len(values)}")
        clauses.append(template)

    if not clauses:
        return "", values
    return "WHERE " + " AND ".join(clauses), values


class JobRepository:
    """Data access for job listings."""

    def __init__(self, db):
        """
        Args:
            db: Client with query(sql, values) -> QueryResult, normally
                jobboard.database.Database
        """
        self.db = db

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a job from data and return it.

        data should be {title, salary, equity, companyHandle}; salary and
        equity may be omitted.

        Raises:
            ValidationError: if data is malformed
            ConstraintError: if companyHandle does not reference a company
        """
        errors = validate_job(data)
        if errors:
            raise ValidationError(errors)

        result = self.db.query(
            f"""INSERT INTO jobs (title, salary, equity, company_handle)
                VALUES ($1, $2, $3, $4)
                RETURNING {_RETURNING}""",
            [
                data["title"],
                data.get("salary"),
                data.get("equity"),
                data["companyHandle"],
            ],
        )
        return _to_job(result.rows[0])

    def find_all(self, filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """
        Find all jobs matching the optional filters.

        Filters:
            title: case-insensitive substring of the title
            minSalary: salary must be at least this
            hasEquity: when True, only jobs with non-zero equity

        Returns jobs ordered by title, then id.
        """
        if filters is None:
            filters = {"noFilter": True}

        errors = validate_filters(filters)
        if errors:
            raise ValidationError(errors)

        where, values = build_job_filters(filters)
        sql = f"SELECT {_RETURNING} FROM jobs"
        if where:
            sql += f" {where}"
        sql += " ORDER BY title, id"

        result = self.db.query(sql, values)
        return [_to_job(row) for row in result.rows]

    def get(self, id: int) -> Dict[str, Any]:
        """Given a job id, return the job. Raises NotFoundError if missing."""
        result = self.db.query(
            f"SELECT {_RETURNING} FROM jobs WHERE id = $1",
            [id],
        )
        if not result.rows:
            raise NotFoundError(f"No job: {id}")
        return _to_job(result.rows[0])

    def update(self, id: int, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Update job data with `data`.

        This is a "partial update": only the provided fields change. Data can
        include {title, salary, equity}; id and companyHandle are fixed.

        Raises:
            ValidationError: if data contains a field that cannot be updated
            InvalidUpdateError: if data is empty
            NotFoundError: if no job has this id
        """
        errors = validate_job_update(data)
        if errors:
            raise ValidationError(errors)

        set_cols, values = build_set_clause(data, JOB_COLUMNS)
        id_idx = f"${len(values) + 1}"

        result = self.db.query(
            f"""UPDATE jobs
                SET {set_cols}
                WHERE id = {id_idx}
                RETURNING {_RETURNING}""",
            [*values, id],
        )
        if not result.rows:
            raise NotFoundError(f"No job: {id}")
        return _to_job(result.rows[0])

    def remove(self, id: int) -> None:
        """Delete the job; raises NotFoundError if missing."""
        result = self.db.query(
            "DELETE FROM jobs WHERE id = $1 RETURNING id",
            [id],
        )
        if not result.rows:
            raise NotFoundError(f"No job: {id}")
