"""Listing and deleting saved food logs."""

from ..config import FOOD_LOGS_TABLE
from ..errors import PersistenceError
from ..storage import IdentityContext, PlatformBackend
from .models import FoodLog


async def list_logs(identity: IdentityContext, store: PlatformBackend) -> list[FoodLog]:
    """Return the current user's food logs, newest first.

    Raises:
        NotAuthenticatedError: If nobody is signed in
    """
    user = identity.require_user("Please sign in to view your food logs")
    records = await store.select_records(FOOD_LOGS_TABLE, filters={"user_id": user.id})
    return [FoodLog.from_record(record) for record in records]


async def get_log(identity: IdentityContext, store: PlatformBackend, log_id: str) -> FoodLog:
    """Return one of the current user's food logs.

    Raises:
        NotAuthenticatedError: If nobody is signed in
        PersistenceError: If no such log belongs to the user
    """
    for log in await list_logs(identity, store):
        if log.id == log_id:
            return log
    raise PersistenceError(f"Food log not found: {log_id}")


async def delete_log(identity: IdentityContext, store: PlatformBackend, log_id: str) -> None:
    """Delete one of the current user's food logs.

    Raises:
        NotAuthenticatedError: If nobody is signed in
        PersistenceError: If no such log belongs to the user
    """
    user = identity.require_user("Please sign in to manage your food logs")
    deleted = await store.delete_record(FOOD_LOGS_TABLE, log_id, filters={"user_id": user.id})
    if not deleted:
        raise PersistenceError(f"Failed to delete log: {log_id}")
