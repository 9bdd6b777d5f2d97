"""Employee profile records stored across the four MongoDB collections."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, Field


class EmployeeRecord(BaseModel):
    """Core employee document. Stored with the id under the ``id`` key."""

    emp_id: int = Field(validation_alias=AliasChoices("emp_id", "id"))
    name: str
    salary: float

    def to_document(self) -> dict[str, Any]:
        return {"id": self.emp_id, "name": self.name, "salary": self.salary}


class DepartmentRecord(BaseModel):
    name: str
    emp_id: int

    def to_document(self) -> dict[str, Any]:
        return {"name": self.name, "emp_id": self.emp_id}


class DeveloperRecord(BaseModel):
    language: str
    emp_id: int

    def to_document(self) -> dict[str, Any]:
        return {"language": self.language, "emp_id": self.emp_id}


class TesterRecord(BaseModel):
    language: str
    emp_id: int

    def to_document(self) -> dict[str, Any]:
        return {"language": self.language, "emp_id": self.emp_id}


class EmployeeProfile(EmployeeRecord):
    """Read-side aggregate assembled by the join. Never persisted."""

    departments: list[DepartmentRecord] = Field(
        default_factory=list,
        validation_alias=AliasChoices("departments", "department_info"),
    )
    developers: list[DeveloperRecord] = Field(
        default_factory=list,
        validation_alias=AliasChoices("developers", "developer_info"),
    )
    testers: list[TesterRecord] = Field(
        default_factory=list,
        validation_alias=AliasChoices("testers", "tester_info"),
    )


class ProfileCreate(BaseModel):
    """Everything needed to create a profile in one request."""

    emp_id: int
    name: str
    salary: float
    department: str
    developer_language: str
    tester_language: str

    def records(self) -> tuple[EmployeeRecord, DepartmentRecord, DeveloperRecord, TesterRecord]:
        return (
            EmployeeRecord(emp_id=self.emp_id, name=self.name, salary=self.salary),
            DepartmentRecord(name=self.department, emp_id=self.emp_id),
            DeveloperRecord(language=self.developer_language, emp_id=self.emp_id),
            TesterRecord(language=self.tester_language, emp_id=self.emp_id),
        )


class ProfileUpdate(BaseModel):
    name: str
    salary: float


class CollectionOutcome(BaseModel):
    collection: str
    ok: bool
    affected: int = 0
    error: str | None = None


class ProfileWriteResult(BaseModel):
    emp_id: int | None = None
    outcomes: list[CollectionOutcome] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(o.ok for o in self.outcomes)

    @property
    def failed(self) -> list[str]:
        return [o.collection for o in self.outcomes if not o.ok]


class ProfileUpdateResult(BaseModel):
    emp_id: int
    matched: bool
    modified: bool
