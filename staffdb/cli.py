"""Interactive menu for managing employee profiles.

    staffdb [--verbose]

Connects using MONGO_URI (or MONGO_USERNAME/MONGO_PASSWORD), prompting for
credentials when neither is configured.
"""

from __future__ import annotations

import argparse
import asyncio
import getpass
import logging
import sys
from typing import Callable

from pymongo.errors import PyMongoError

from staffdb.core.config import Settings, build_mongo_uri
from staffdb.models.profile import ProfileCreate, ProfileWriteResult
from staffdb.services.profile_store import ProfileStore, StoreConnectionError, open_profile_store

logger = logging.getLogger(__name__)

Prompt = Callable[[str], str]
Output = Callable[[str], None]

MENU = """
===== MENU =====
1. Insert Employee
2. Update Employee
3. Delete Employee
4. Read Employees with Join
5. Exit"""


async def _ask(ask: Prompt, label: str) -> str:
    # Blocking reads stay off the event loop
    return await asyncio.to_thread(ask, label)


async def _ask_int(ask: Prompt, label: str) -> int:
    return int((await _ask(ask, label)).strip())


async def _ask_float(ask: Prompt, label: str) -> float:
    return float((await _ask(ask, label)).strip())


async def _ask_text(ask: Prompt, label: str) -> str:
    value = (await _ask(ask, label)).strip()
    if not value:
        raise ValueError(f"{label.strip(': ')} must not be empty")
    return value


async def read_profile_request(ask: Prompt) -> ProfileCreate:
    return ProfileCreate(
        emp_id=await _ask_int(ask, "Enter Employee ID: "),
        name=await _ask_text(ask, "Enter Name: "),
        salary=await _ask_float(ask, "Enter Salary: "),
        department=await _ask_text(ask, "Enter Department: "),
        developer_language=await _ask_text(ask, "Enter Developer Language: "),
        tester_language=await _ask_text(ask, "Enter Tester Language: "),
    )


def _report(result: ProfileWriteResult, action: str, out: Output) -> None:
    if result.ok:
        out(f"Employee {action} successfully")
    else:
        out(f"Employee {action} with failures in: {', '.join(result.failed)}")


async def insert_employee(store: ProfileStore, ask: Prompt, out: Output) -> None:
    request = await read_profile_request(ask)
    result = await store.create_profile(*request.records())
    _report(result, "inserted", out)


async def update_employee(store: ProfileStore, ask: Prompt, out: Output) -> None:
    emp_id = await _ask_int(ask, "Enter Employee ID to update: ")
    name = await _ask_text(ask, "Enter new Name: ")
    salary = await _ask_float(ask, "Enter new Salary: ")

    try:
        result = await store.update_profile(emp_id, name, salary)
    except PyMongoError as err:
        logger.error("Update of employee %s failed: %s", emp_id, err)
        out(f"Update failed: {err}")
        return

    if result.matched:
        out("Employee updated successfully")
    else:
        out(f"No employee with ID {emp_id}, nothing updated")


async def delete_employee(store: ProfileStore, ask: Prompt, out: Output) -> None:
    emp_id = await _ask_int(ask, "Enter Employee ID to delete: ")
    result = await store.delete_profile(emp_id)
    _report(result, "deleted", out)


async def read_employees(store: ProfileStore, out: Output) -> None:
    out("\n=== Employee Records with Full Details ===")
    count = 0
    try:
        async for profile in store.read_profiles_joined():
            out(profile.model_dump_json(indent=2))
            count += 1
    except PyMongoError as err:
        logger.error("Aggregation failed: %s", err)
        out(f"Read failed: {err}")
        return
    if not count:
        out("No employees found")


async def run_menu(store: ProfileStore, ask: Prompt = input, out: Output = print) -> None:
    while True:
        out(MENU)
        try:
            choice = (await _ask(ask, "Choose option: ")).strip()
        except EOFError:
            out("Exiting...")
            return

        try:
            if choice == "1":
                await insert_employee(store, ask, out)
            elif choice == "2":
                await update_employee(store, ask, out)
            elif choice == "3":
                await delete_employee(store, ask, out)
            elif choice == "4":
                await read_employees(store, out)
            elif choice == "5":
                out("Exiting...")
                return
            else:
                out("Invalid choice, try again.")
        except ValueError as err:
            out(f"Invalid input: {err}")
        except EOFError:
            out("Exiting...")
            return


def prompt_mongo_uri(settings: Settings, ask: Prompt = input, secret: Prompt = getpass.getpass) -> str:
    username = ask("Enter MongoDB Username: ").strip()
    password = secret("Enter MongoDB Password: ")
    return build_mongo_uri(username, password, settings.MONGO_HOST, settings.MONGO_SCHEME)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Insert, update, delete and read employee profiles stored in MongoDB",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    settings = Settings()
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(message)s")

    uri = settings.mongo_uri()
    if not uri:
        try:
            uri = await asyncio.to_thread(prompt_mongo_uri, settings)
        except EOFError:
            logger.error("No MongoDB credentials provided")
            return 1

    try:
        async with open_profile_store(settings, uri) as store:
            await run_menu(store)
    except StoreConnectionError as err:
        logger.error("MongoDB connection failed: %s", err)
        return 1
    return 0


def main() -> None:
    args = parse_args()
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
