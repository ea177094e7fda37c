"""
Acceso al document store (MongoDB) para las pasadas de migración.

Componentes:
- MongoRecordSource: Lectura completa de una colección (Record Source Adapter)
- MongoBatchWriter: Acumula operaciones y las aplica en lotes (Batch Writer)
- SetDocument / UpdateFields: Operaciones de escritura que se acumulan en el lote

El orquestador (mongomigra.DataMigration) recibe ambas piezas por inyección,
así los tests pueden reemplazarlas por un store en memoria.

Garantías del lote:
- Atomicidad por commit con transacciones (default); nunca por pasada completa
- Operaciones acumuladas y nunca confirmadas se pierden
- Sin reintentos ni timeouts propios (los maneja pymongo)
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterator

from pymongo import ReplaceOne, UpdateOne

import config


@dataclass(frozen=True)
class SourceRecord:
    """Documento leído de una colección: id opaco + campos (sin '_id')."""

    id: Any
    data: Dict[str, Any]


@dataclass(frozen=True)
class SetDocument:
    """Escribe el documento completo (crea o reemplaza)."""

    collection: str
    doc_id: Any
    data: Dict[str, Any]

    def to_request(self):
        return ReplaceOne({"_id": self.doc_id}, dict(self.data), upsert=True)


@dataclass(frozen=True)
class UpdateFields:
    """Actualiza solo los campos indicados; el resto del documento no se toca."""

    collection: str
    doc_id: Any
    fields: Dict[str, Any]

    def to_request(self):
        return UpdateOne({"_id": self.doc_id}, {"$set": dict(self.fields)})


class BatchFullError(RuntimeError):
    """Se intentó acumular una operación en un lote que ya está lleno."""


class PartialCommitError(RuntimeError):
    """Falló un commit sin transacción: parte del lote pudo quedar escrita."""


class MongoRecordSource:
    """
    Lectura de todos los documentos de una colección.

    Cada llamada a read() lanza una consulta nueva, así que refleja el
    contenido actual de la colección. No hay filtros ni orden garantizado.
    """

    def __init__(self, client, db):
        self.client = client
        self.db = db

    def read(self, collection_name: str) -> Iterator[SourceRecord]:
        # Sesión explícita para prevenir timeout de cursor en colecciones grandes
        with self.client.start_session() as session:
            cursor = self.db[collection_name].find(
                no_cursor_timeout=True, session=session
            )
            try:
                for doc in cursor:
                    doc_id = doc.pop("_id")
                    yield SourceRecord(id=doc_id, data=doc)
            finally:
                cursor.close()


class MongoBatchWriter:
    """
    Acumula operaciones de escritura y las aplica juntas en commit().

    El writer solo garantiza el tamaño máximo del lote; decidir cuándo
    hacer commit es responsabilidad del orquestador.

    Attributes:
        max_batch_size (int): Máximo de operaciones por lote
        use_transactions (bool): Si True, cada commit corre en una transacción
            (default: config.MONGO_USE_TRANSACTIONS)
    """

    def __init__(self, client, db, max_batch_size=500, use_transactions=None):
        if max_batch_size < 1:
            raise ValueError(f"max_batch_size debe ser >= 1 (recibido {max_batch_size})")
        if use_transactions is None:
            use_transactions = config.MONGO_USE_TRANSACTIONS
        self.client = client
        self.db = db
        self.max_batch_size = max_batch_size
        self.use_transactions = use_transactions
        self._pending = []

    @property
    def count(self) -> int:
        return len(self._pending)

    @property
    def is_full(self) -> bool:
        return self.count >= self.max_batch_size

    def stage(self, operation):
        if self.is_full:
            raise BatchFullError(
                f"El lote ya tiene {self.count} operaciones (máximo {self.max_batch_size})"
            )
        self._pending.append(operation)

    def discard(self):
        """Descarta las operaciones pendientes sin escribirlas."""
        self._pending = []

    def commit(self) -> int:
        """
        Aplica todas las operaciones pendientes y deja el lote vacío.

        Las operaciones se agrupan por colección (bulk_write ordenado por
        colección). Con transacción, si falla no se escribe nada y la
        excepción de pymongo se propaga. Sin transacción se lanza
        PartialCommitError: parte del lote pudo quedar escrita. En ambos
        casos las operaciones pendientes se pierden.

        Returns:
            int: Cantidad de operaciones aplicadas
        """
        operations, self._pending = self._pending, []
        if not operations:
            return 0

        grouped = {}
        for op in operations:
            grouped.setdefault(op.collection, []).append(op.to_request())

        if self.use_transactions:
            with self.client.start_session() as session:
                with session.start_transaction():
                    for collection_name, requests in grouped.items():
                        self.db[collection_name].bulk_write(
                            requests, ordered=True, session=session
                        )
        else:
            try:
                for collection_name, requests in grouped.items():
                    self.db[collection_name].bulk_write(requests, ordered=True)
            except Exception as e:
                raise PartialCommitError(
                    f"Commit sin transacción fallido, el lote de {len(operations)} "
                    f"operaciones pudo quedar aplicado parcialmente: {e}"
                ) from e

        return len(operations)
