"""
Módulo base para los normalizadores de cada pasada de migración.

Define la interfaz común (contrato) que todos los migradores específicos
deben implementar. Esto permite que mongomigra.py recorra cualquier
colección sin conocer sus detalles internos.

Patrón de diseño: Strategy Pattern
- mongomigra.DataMigration = Contexto (orquestador)
- BaseMigrator = Estrategia abstracta
- ClientesMigrator, PedidosMigrator, EnderecosMigrator = Estrategias concretas

Flujo de uso:
1. mongomigra.py carga dinámicamente un migrador
2. Lee cada documento de la colección de origen
3. Llama a normalize() que retorna un resultado etiquetado:
   - Stage: operación lista para acumular en el lote
   - Skip: el documento ya está normalizado (no cuenta como actualizado)
   - InvalidRecord: falta un campo requerido (se registra como error)
4. Acumula las operaciones y hace commit cada BATCH_SIZE

normalize() es una función pura: no escribe nada ni modifica el documento.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Union

from docstore import SetDocument, SourceRecord, UpdateFields


@dataclass(frozen=True)
class Stage:
    operation: Union[SetDocument, UpdateFields]


@dataclass(frozen=True)
class Skip:
    reason: str


@dataclass(frozen=True)
class InvalidRecord:
    message: str


NormalizeOutcome = Union[Stage, Skip, InvalidRecord]


class BaseMigrator(ABC):
    """
    Clase abstracta que define la interfaz para migradores de colecciones.

    Attributes:
        collection (str): Colección de origen (ej: 'pedidos')
        target_collection (str): Colección donde se escribe el resultado
        label (str): Nombre en singular para mensajes (ej: 'pedido')
    """

    # Texto usado en el mensaje final de la pasada ("N <summary>")
    summary = "registros migrados"

    def __init__(self, collection: str, target_collection: str, label: str):
        self.collection = collection
        self.target_collection = target_collection
        self.label = label

    @abstractmethod
    def normalize(self, record: SourceRecord, now) -> NormalizeOutcome:
        """
        Calcula la forma destino de un documento.

        Args:
            record: Documento leído de la colección de origen
            now: Timestamp de la migración (se guarda en updatedAt)

        Returns:
            Stage | Skip | InvalidRecord
        """

    def get_primary_key(self, record: SourceRecord) -> str:
        return str(record.id)
