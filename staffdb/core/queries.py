from __future__ import annotations

from typing import Any

from pydantic import BaseModel

EMPLOYEE_COLLECTION = "Employee"
DEPARTMENT_COLLECTION = "Department"
DEVELOPER_COLLECTION = "Developer"
TESTER_COLLECTION = "Tester"

RELATED_COLLECTIONS: tuple[str, ...] = (
    DEPARTMENT_COLLECTION,
    DEVELOPER_COLLECTION,
    TESTER_COLLECTION,
)
PROFILE_COLLECTIONS: tuple[str, ...] = (EMPLOYEE_COLLECTION, *RELATED_COLLECTIONS)

# Employee documents carry their id as "id", related documents point at it with "emp_id"
EMPLOYEE_KEY = "id"
FOREIGN_KEY = "emp_id"


class FieldEquals(BaseModel):
    field: str
    value: Any

    def to_document(self) -> dict[str, Any]:
        return {self.field: self.value}


class SetFields(BaseModel):
    values: dict[str, Any]

    def to_document(self) -> dict[str, Any]:
        return {"$set": dict(self.values)}


class Lookup(BaseModel):
    from_: str
    local_field: str
    foreign_field: str
    as_: str

    def to_document(self) -> dict[str, Any]:
        return {
            "$lookup": {
                "from": self.from_,
                "localField": self.local_field,
                "foreignField": self.foreign_field,
                "as": self.as_,
            }
        }


def id_filter(collection: str, emp_id: int) -> FieldEquals:
    """Filter selecting the documents of ``collection`` that belong to ``emp_id``."""
    field = EMPLOYEE_KEY if collection == EMPLOYEE_COLLECTION else FOREIGN_KEY
    return FieldEquals(field=field, value=emp_id)


def profile_pipeline() -> list[dict[str, Any]]:
    """Aggregation run on Employee that attaches the related records of each employee."""
    return [
        Lookup(
            from_=collection,
            local_field=EMPLOYEE_KEY,
            foreign_field=FOREIGN_KEY,
            as_=f"{collection.lower()}_info",
        ).to_document()
        for collection in RELATED_COLLECTIONS
    ]
