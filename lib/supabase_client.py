# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database and storage
# operations. It implements the singleton pattern to reuse a single client
# connection and exposes the small data-access surface every admin screen
# needs:
# - fetch_all: full table, newest first (the list engine filters in-process)
# - insert / update / update_many / delete: row writes
# - count: exact row counts for dashboard stats
# - upload_file / get_public_url / remove_files: Storage objects
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   rows = SupabaseClient.fetch_all("student_applications")
# =============================================================================

from __future__ import annotations

import logging
from typing import Any, Iterable
from uuid import UUID

from supabase import create_client, Client

from app.config import settings
from lib.utils import ApplicationError, normalize_id, normalize_ids

logger = logging.getLogger(__name__)

# PostgREST code for "no rows returned" on .single()
NO_ROWS_CODE = "PGRST116"


class SupabaseClientError(ApplicationError):
    """
    Error during Supabase operations.

    Raised for any failed remote call. Callers surface it to the user and
    refetch; local state is never trusted after one of these.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, suggestion=suggestion, details=details)

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Typed wrapper for Supabase operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        rows = SupabaseClient.fetch_all("consultations")
        row = SupabaseClient.insert("consultations", {"member_name": "김민수"})
        SupabaseClient.delete("consultations", [row["id"]])
    """

    _instance: Client | None = None

    # Rows per request in fetch_all; at most PostgREST's max-rows (1000 by default)
    FETCH_PAGE_SIZE = 1000

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS);
        permission checks happen in the API layer instead.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the cached client (used by tests)."""
        cls._instance = None

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_all(
        cls,
        table: str,
        order_by: str = "created_at",
        desc: bool = True,
        columns: str = "*",
    ) -> list[dict[str, Any]]:
        """
        Fetch every row of a table.

        Rows are read in FETCH_PAGE_SIZE batches with `.range()` so the
        server's max-rows cap never truncates the result. They come back
        ordered by `order_by` (newest first by default), with `id` breaking
        ties so batches don't overlap. The list engine relies on this order
        and never re-sorts.

        Args:
            table: Table name
            order_by: Column to order by
            desc: Descending order when True
            columns: PostgREST select expression

        Returns:
            List of row dicts (empty list when the table is empty)

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            rows: list[dict[str, Any]] = []
            start = 0
            while True:
                query = client.table(table).select(columns).order(order_by, desc=desc)
                if order_by != "id":
                    query = query.order("id", desc=desc)
                response = query.range(start, start + cls.FETCH_PAGE_SIZE - 1).execute()

                batch = response.data or []
                rows.extend(batch)
                if len(batch) < cls.FETCH_PAGE_SIZE:
                    break
                start += cls.FETCH_PAGE_SIZE

            logger.debug(f"Fetched {len(rows)} rows from {table}")
            return rows

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch {table}: {e}",
                code="FETCH_FAILED",
                suggestion="Check that the table exists and the service key can read it",
                details={"table": table}
            )

    @classmethod
    def fetch_one(
        cls,
        table: str,
        record_id: str | int | UUID,
        columns: str = "*",
    ) -> dict[str, Any] | None:
        """
        Fetch a single row by ID.

        Returns:
            Row dict, or None if not found

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        id_str = normalize_id(record_id)

        try:
            response = (
                client.table(table)
                .select(columns)
                .eq("id", id_str)
                .single()
                .execute()
            )
            return response.data

        except Exception as e:
            if NO_ROWS_CODE in str(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch {table} row: {e}",
                code="FETCH_ONE_FAILED",
                details={"table": table, "id": id_str}
            )

    @classmethod
    def fetch_where(
        cls,
        table: str,
        filters: dict[str, Any],
        columns: str = "*",
        order_by: str | None = None,
        desc: bool = False,
    ) -> list[dict[str, Any]]:
        """
        Fetch rows matching equality filters.

        Example:
            SupabaseClient.fetch_where(
                "admin_users",
                {"id": user_id, "is_active": True},
                columns="*, role:admin_roles(*)",
            )
        """
        client = cls.get_client()

        try:
            query = client.table(table).select(columns)
            for column, value in filters.items():
                query = query.eq(column, value)
            if order_by:
                query = query.order(order_by, desc=desc)
            response = query.execute()
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to query {table}: {e}",
                code="FETCH_WHERE_FAILED",
                details={"table": table, "filters": {k: str(v) for k, v in filters.items()}}
            )

    @classmethod
    def count(
        cls,
        table: str,
        column: str = "created_at",
        gte: str | None = None,
        lte: str | None = None,
    ) -> int:
        """
        Count rows, optionally bounded on one column.

        Uses a HEAD request with count="exact" so no rows are transferred.
        """
        client = cls.get_client()

        try:
            query = client.table(table).select("*", count="exact", head=True)
            if gte is not None:
                query = query.gte(column, gte)
            if lte is not None:
                query = query.lte(column, lte)
            response = query.execute()
            return response.count or 0

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to count {table}: {e}",
                code="COUNT_FAILED",
                details={"table": table, "gte": gte, "lte": lte}
            )

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    @classmethod
    def insert(cls, table: str, fields: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a row. The store assigns `id` and `created_at`.

        Returns:
            Inserted row dict with generated id and created_at

        Raises:
            SupabaseClientError: If insert fails
        """
        client = cls.get_client()

        try:
            response = client.table(table).insert(fields).execute()

            if response.data:
                return response.data[0]
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA",
                details={"table": table}
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert into {table}: {e}",
                code="INSERT_FAILED",
                suggestion="Check required columns and value formats",
                details={"table": table, "fields": sorted(fields)}
            )

    @classmethod
    def update(
        cls,
        table: str,
        record_id: str | int | UUID,
        patch: dict[str, Any],
    ) -> dict[str, Any] | None:
        """
        Update one row by ID.

        Returns:
            Updated row dict, or None if no row matched

        Raises:
            SupabaseClientError: If update fails
        """
        client = cls.get_client()
        id_str = normalize_id(record_id)

        try:
            response = (
                client.table(table)
                .update(patch)
                .eq("id", id_str)
                .execute()
            )
            if response.data:
                return response.data[0]
            return None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update {table} row: {e}",
                code="UPDATE_FAILED",
                details={"table": table, "id": id_str, "fields": sorted(patch)}
            )

    @classmethod
    def update_many(
        cls,
        table: str,
        record_ids: Iterable[str | int | UUID],
        patch: dict[str, Any],
    ) -> list[dict[str, Any]]:
        """
        Apply the same patch to several rows in one request (`id IN (...)`).
        """
        client = cls.get_client()
        ids = normalize_ids(record_ids)
        if not ids:
            return []

        try:
            response = (
                client.table(table)
                .update(patch)
                .in_("id", ids)
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update {table} rows: {e}",
                code="UPDATE_MANY_FAILED",
                details={"table": table, "ids": ids, "fields": sorted(patch)}
            )

    @classmethod
    def delete(cls, table: str, record_ids: Iterable[str | int | UUID]) -> None:
        """
        Delete rows by ID in one request.

        Raises:
            SupabaseClientError: If delete fails
        """
        client = cls.get_client()
        ids = normalize_ids(record_ids)
        if not ids:
            return

        try:
            client.table(table).delete().in_("id", ids).execute()
            logger.debug(f"Deleted {len(ids)} rows from {table}")

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete from {table}: {e}",
                code="DELETE_FAILED",
                details={"table": table, "ids": ids}
            )

    # -------------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------------

    @classmethod
    def upload_file(
        cls,
        bucket: str,
        path: str,
        content: bytes,
        content_type: str = "application/octet-stream",
    ) -> str:
        """
        Upload bytes to a Storage bucket.

        Returns:
            The storage path that was written
        """
        client = cls.get_client()

        try:
            client.storage.from_(bucket).upload(
                path=path,
                file=content,
                file_options={"content-type": content_type},
            )
            logger.info(f"Uploaded file to storage: {bucket}/{path}")
            return path

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to upload file: {e}",
                code="UPLOAD_FAILED",
                suggestion="Check that the bucket exists and the file name is unique",
                details={"bucket": bucket, "path": path}
            )

    @classmethod
    def get_public_url(cls, bucket: str, path: str) -> str:
        """Public URL of a stored object."""
        client = cls.get_client()
        return client.storage.from_(bucket).get_public_url(path)

    @classmethod
    def remove_files(cls, bucket: str, paths: list[str]) -> None:
        """Remove objects from a Storage bucket."""
        if not paths:
            return
        client = cls.get_client()

        try:
            client.storage.from_(bucket).remove(paths)
            logger.info(f"Removed {len(paths)} file(s) from storage bucket {bucket}")

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to remove files: {e}",
                code="REMOVE_FILES_FAILED",
                details={"bucket": bucket, "paths": paths}
            )
