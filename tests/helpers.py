"""
Funciones helper compartidas para todos los tests.

Proporciona:
- Carga dinámica de migradores basándose en config.py
- InMemoryDocumentStore / InMemoryBatchWriter: document store falso que
  cumple los mismos contratos que docstore.MongoRecordSource y
  docstore.MongoBatchWriter, para correr pasadas sin MongoDB
"""

import sys
import os
from datetime import datetime, timezone

# Agregar directorio raíz al path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import config
from docstore import BatchFullError, SetDocument, SourceRecord, UpdateFields
from mongomigra import load_migrator_for_collection

NOW = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


def fixed_clock():
    return NOW


def get_all_migrator_instances():
    """
    Retorna lista de tuplas (colección, instancia) para todas las pasadas.

    Lee desde config.MIGRATION_ORDER para respetar el orden de ejecución.
    """
    return [
        (collection_name, load_migrator_for_collection(collection_name))
        for collection_name in config.MIGRATION_ORDER
    ]


class InMemoryDocumentStore:
    """
    Colecciones en memoria: {colección: {id: documento}}.

    Attributes:
        failing_reads (set): Colecciones cuya lectura lanza excepción
        read_calls (list): Colecciones leídas, en orden
    """

    def __init__(self, collections=None):
        self.collections = {
            name: {doc_id: dict(data) for doc_id, data in docs.items()}
            for name, docs in (collections or {}).items()
        }
        self.failing_reads = set()
        self.read_calls = []

    def read(self, collection_name):
        self.read_calls.append(collection_name)
        if collection_name in self.failing_reads:
            raise RuntimeError(f"No se pudo leer '{collection_name}'")
        for doc_id, data in list(self.collections.get(collection_name, {}).items()):
            yield SourceRecord(id=doc_id, data=dict(data))

    def get(self, collection_name, doc_id):
        return self.collections.get(collection_name, {}).get(doc_id)


class InMemoryBatchWriter:
    """
    Writer en memoria que registra cada commit.

    Attributes:
        commits (list): Lista de lotes confirmados (lista de operaciones)
        failing_commits (set): Números de commit (1..N) que lanzan excepción
        staged (list): Todas las operaciones que pasaron por stage()
    """

    def __init__(self, store, max_batch_size=500):
        self.store = store
        self.max_batch_size = max_batch_size
        self.commits = []
        self.failing_commits = set()
        self.commit_attempts = 0
        self.staged = []
        self.discards = 0
        self._pending = []

    @property
    def count(self):
        return len(self._pending)

    def stage(self, operation):
        if self.count >= self.max_batch_size:
            raise BatchFullError("lote lleno")
        self._pending.append(operation)
        self.staged.append(operation)

    def discard(self):
        self.discards += 1
        self._pending = []

    def commit(self):
        operations, self._pending = self._pending, []
        self.commit_attempts += 1
        if self.commit_attempts in self.failing_commits:
            raise RuntimeError(f"Commit {self.commit_attempts} rechazado")

        for op in operations:
            docs = self.store.collections.setdefault(op.collection, {})
            if isinstance(op, SetDocument):
                docs[op.doc_id] = dict(op.data)
            elif isinstance(op, UpdateFields):
                docs.setdefault(op.doc_id, {}).update(op.fields)
        self.commits.append(operations)
        return len(operations)

    @property
    def commit_sizes(self):
        return [len(batch) for batch in self.commits]


def collect_tests(namespace):
    """Funciones test_* de un módulo, en orden alfabético."""
    return [
        value
        for name, value in sorted(namespace.items())
        if name.startswith("test_") and callable(value)
    ]


def run_test_functions(tests):
    """
    Ejecuta tests sin pytest y reporta fallos.

    Returns:
        bool: True si todos pasaron
    """
    failed = 0

    for test_func in tests:
        try:
            test_func()
        except AssertionError as e:
            print(f"\n❌ FALLO: {test_func.__name__}")
            print(f"   {e}")
            failed += 1
        except Exception as e:
            print(f"\n❌ ERROR: {test_func.__name__}")
            print(f"   {type(e).__name__}: {e}")
            failed += 1

    print("\n" + "=" * 70)
    if failed == 0:
        print("✅ TODOS LOS TESTS PASARON")
    else:
        print(f"❌ {failed} TEST(S) FALLARON")
    return failed == 0
