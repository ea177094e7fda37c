"""
Normalizador compartido para documentos que referencian a su dueño.

Pedidos y endereços guardaron el dueño bajo tres nombres distintos según
la versión de la app:
- userId: nombre canónico
- clienteId: app cliente legacy
- usuarioId: admin legacy

Regla (en orden):
1. Si ya tiene userId → Skip (no cuenta como actualizado ni como error)
2. userId = clienteId, y si no existe usuarioId
3. Si no tiene ninguno → InvalidRecord con el id del documento
4. Si no → update parcial {userId, updatedAt} sobre la misma colección
"""

from docstore import SourceRecord, UpdateFields
from models import LegacyOwnedRecord
from .base import BaseMigrator, InvalidRecord, Skip, Stage

LEGACY_OWNER_FIELDS = ("clienteId", "usuarioId")


class UserRefMigrator(BaseMigrator):
    """Completa userId a partir de los campos legacy del dueño."""

    def normalize(self, record: SourceRecord, now):
        data: LegacyOwnedRecord = record.data

        if data.get("userId"):
            return Skip("ya tiene userId")

        user_id = None
        for field in LEGACY_OWNER_FIELDS:
            user_id = data.get(field)
            if user_id:
                break

        if not user_id:
            return InvalidRecord(
                f"{self.label.capitalize()} {self.get_primary_key(record)} "
                f"no tiene clienteId ni usuarioId"
            )

        return Stage(
            UpdateFields(
                self.target_collection,
                record.id,
                {"userId": user_id, "updatedAt": now},
            )
        )
