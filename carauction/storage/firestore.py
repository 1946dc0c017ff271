"""Firestore storage backend leveraging google-cloud-firestore."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Mapping

from google.cloud import firestore
from google.oauth2 import service_account


class FirestoreStorage:
    def __init__(
        self,
        *,
        project_id: str,
        collection: str = "ledger_state",
        credentials_path: str | None = None,
    ) -> None:
        if not project_id:
            raise ValueError("project_id required for firestore backend")
        client_kwargs: dict[str, Any] = {"project": project_id}
        if credentials_path:
            client_kwargs["credentials"] = service_account.Credentials.from_service_account_file(
                credentials_path
            )
        self._client = firestore.Client(**client_kwargs)
        self._collection_name = collection

    def _collection(self):
        return self._client.collection(self._collection_name)

    async def _run(self, func: Callable, *args, **kwargs):
        return await asyncio.to_thread(func, *args, **kwargs)

    async def get_state(self, key: str) -> bytes | None:
        doc = await self._run(self._collection().document(key).get)
        if not doc.exists:
            return None
        return doc.to_dict()["value"]

    async def put_states(self, writes: Mapping[str, bytes]) -> None:
        if not writes:
            return
        batch = self._client.batch()
        for key, value in writes.items():
            batch.set(self._collection().document(key), {"value": value})
        await self._run(batch.commit)

    async def list_states(self) -> dict[str, bytes]:
        docs = await self._run(lambda: list(self._collection().stream()))
        return {doc.id: doc.to_dict()["value"] for doc in docs}
