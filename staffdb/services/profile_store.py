"""MongoDB-backed store for employee profiles spread over four collections.

The four writes of a profile are independent and not transactional. Cascade
insert and delete attempt every collection and report per-collection outcomes
instead of stopping at the first failure.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Iterable

from pydantic import ValidationError
from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

from staffdb.core.config import Settings
from staffdb.core.queries import (
    DEPARTMENT_COLLECTION,
    DEVELOPER_COLLECTION,
    EMPLOYEE_COLLECTION,
    EMPLOYEE_KEY,
    PROFILE_COLLECTIONS,
    TESTER_COLLECTION,
    SetFields,
    id_filter,
    profile_pipeline,
)
from staffdb.models.profile import (
    CollectionOutcome,
    DepartmentRecord,
    DeveloperRecord,
    EmployeeProfile,
    EmployeeRecord,
    ProfileCreate,
    ProfileUpdateResult,
    ProfileWriteResult,
    TesterRecord,
)

logger = logging.getLogger(__name__)

SAMPLE_PROFILES: list[ProfileCreate] = [
    ProfileCreate(
        emp_id=1, name="Alice", salary=50000, department="IT", developer_language="Go", tester_language="JavaScript"
    ),
    ProfileCreate(
        emp_id=2, name="Bob", salary=60000, department="HR", developer_language="Python", tester_language="Ruby"
    ),
    ProfileCreate(
        emp_id=3, name="Charlie", salary=55000, department="Finance", developer_language="Java", tester_language="C#"
    ),
]


class StoreConnectionError(RuntimeError):
    """The database could not be reached or the connection settings are unusable."""


class ProfileStore:
    def __init__(self, database: Any, client: AsyncMongoClient | None = None) -> None:
        self.database = database
        self.client = client

    @classmethod
    async def connect(
        cls,
        uri: str,
        database_name: str,
        *,
        timeout_seconds: float = 10.0,
    ) -> ProfileStore:
        if not uri:
            raise StoreConnectionError("MONGO_URI is not set")
        if timeout_seconds <= 0:
            raise StoreConnectionError(f"MongoDB timeout must be positive, got {timeout_seconds}")

        timeout_ms = int(timeout_seconds * 1000)
        try:
            client: AsyncMongoClient = AsyncMongoClient(
                uri,
                timeoutMS=timeout_ms,
                serverSelectionTimeoutMS=timeout_ms,
            )
        except (PyMongoError, ValueError) as err:
            raise StoreConnectionError(f"Invalid MongoDB configuration: {err}") from err

        try:
            await client.admin.command("ping")
        except PyMongoError as err:
            await client.close()
            raise StoreConnectionError(f"MongoDB ping failed: {err}") from err

        logger.info("Connected to MongoDB (database=%s)", database_name)
        return cls(client[database_name], client)

    async def close(self) -> None:
        if self.client:
            await self.client.close()
            self.client = None

    async def __aenter__(self) -> ProfileStore:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def check_connection(self) -> bool:
        if not self.client:
            return False
        try:
            await self.client.admin.command("ping")
            return True
        except PyMongoError:
            logger.exception("MongoDB connection check failed")
            return False

    async def create_profile(
        self,
        employee: EmployeeRecord,
        department: DepartmentRecord,
        developer: DeveloperRecord,
        tester: TesterRecord,
    ) -> ProfileWriteResult:
        writes = [
            (EMPLOYEE_COLLECTION, employee.to_document()),
            (DEPARTMENT_COLLECTION, department.to_document()),
            (DEVELOPER_COLLECTION, developer.to_document()),
            (TESTER_COLLECTION, tester.to_document()),
        ]

        result = ProfileWriteResult(emp_id=employee.emp_id)
        for collection, document in writes:
            try:
                await self.database[collection].insert_one(document)
                result.outcomes.append(CollectionOutcome(collection=collection, ok=True, affected=1))
            except PyMongoError as err:
                logger.warning("Insert into %s failed for employee %s: %s", collection, employee.emp_id, err)
                result.outcomes.append(CollectionOutcome(collection=collection, ok=False, error=str(err)))

        return result

    async def update_profile(self, emp_id: int, name: str, salary: float) -> ProfileUpdateResult:
        update = SetFields(values={"name": name, "salary": salary})
        res = await self.database[EMPLOYEE_COLLECTION].update_one(
            id_filter(EMPLOYEE_COLLECTION, emp_id).to_document(),
            update.to_document(),
        )
        if not res.matched_count:
            logger.info("No employee with id %s to update", emp_id)
        return ProfileUpdateResult(
            emp_id=emp_id,
            matched=res.matched_count > 0,
            modified=res.modified_count > 0,
        )

    async def delete_profile(self, emp_id: int) -> ProfileWriteResult:
        result = ProfileWriteResult(emp_id=emp_id)
        for collection in PROFILE_COLLECTIONS:
            try:
                res = await self.database[collection].delete_many(id_filter(collection, emp_id).to_document())
                result.outcomes.append(CollectionOutcome(collection=collection, ok=True, affected=res.deleted_count))
            except PyMongoError as err:
                logger.warning("Delete from %s failed for employee %s: %s", collection, emp_id, err)
                result.outcomes.append(CollectionOutcome(collection=collection, ok=False, error=str(err)))

        return result

    async def read_profiles_joined(self) -> AsyncIterator[EmployeeProfile]:
        cursor = await self.database[EMPLOYEE_COLLECTION].aggregate(profile_pipeline())
        try:
            async for doc in cursor:
                try:
                    yield EmployeeProfile.model_validate(doc)
                except ValidationError:
                    logger.exception("Skipping undecodable employee document %s", doc.get(EMPLOYEE_KEY))
        finally:
            await cursor.close()

    async def insert_employees(self, employees: Iterable[EmployeeRecord]) -> list[str]:
        docs = [e.to_document() for e in employees]
        if not docs:
            return []
        res = await self.database[EMPLOYEE_COLLECTION].insert_many(docs)
        return [str(i) for i in res.inserted_ids]

    async def list_employees(self) -> list[EmployeeRecord]:
        results: list[EmployeeRecord] = []
        cursor = self.database[EMPLOYEE_COLLECTION].find({})
        try:
            async for doc in cursor:
                results.append(EmployeeRecord.model_validate(doc))
        finally:
            await cursor.close()
        return results

    async def load_sample_data(
        self,
        profiles: list[ProfileCreate] | None = None,
        *,
        drop: bool = True,
    ) -> ProfileWriteResult:
        profiles = SAMPLE_PROFILES if profiles is None else profiles

        result = ProfileWriteResult()
        if drop:
            for collection in PROFILE_COLLECTIONS:
                try:
                    await self.database[collection].drop()
                    logger.info("Dropped collection %s", collection)
                except PyMongoError as err:
                    logger.warning("Dropping %s failed, skipping its sample data: %s", collection, err)
                    result.outcomes.append(CollectionOutcome(collection=collection, ok=False, error=str(err)))

        skipped = set(result.failed)
        by_collection: dict[str, list[dict[str, Any]]] = {c: [] for c in PROFILE_COLLECTIONS}
        for profile in profiles:
            for collection, record in zip(PROFILE_COLLECTIONS, profile.records()):
                by_collection[collection].append(record.to_document())

        for collection, docs in by_collection.items():
            if collection in skipped:
                continue
            if not docs:
                result.outcomes.append(CollectionOutcome(collection=collection, ok=True))
                continue
            try:
                res = await self.database[collection].insert_many(docs)
                result.outcomes.append(
                    CollectionOutcome(collection=collection, ok=True, affected=len(res.inserted_ids))
                )
            except PyMongoError as err:
                logger.warning("Sample data insert into %s failed: %s", collection, err)
                result.outcomes.append(CollectionOutcome(collection=collection, ok=False, error=str(err)))

        return result


@asynccontextmanager
async def open_profile_store(settings: Settings, uri: str | None = None) -> AsyncIterator[ProfileStore]:
    store = await ProfileStore.connect(
        uri if uri is not None else settings.mongo_uri(),
        settings.MONGO_DATABASE,
        timeout_seconds=settings.MONGO_TIMEOUT_SECONDS,
    )
    try:
        yield store
    finally:
        await store.close()
