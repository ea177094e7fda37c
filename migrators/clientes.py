"""
Migrador para la colección clientes.

Copia cada cliente legacy a la colección users con el mismo id.

DECISIONES DE DISEÑO:
- Se conservan todos los campos originales del cliente
- telefone y whatsapp quedan iguales (whatsapp tiene prioridad) para no
  romper las pantallas que todavía leen whatsapp
- Valores vacíos ('') se tratan como ausentes al elegir el teléfono
- Nunca se saltea un cliente: un documento sin teléfonos se copia igual
"""

from docstore import SetDocument, SourceRecord
from models import LegacyCliente
from .base import BaseMigrator, Stage


class ClientesMigrator(BaseMigrator):
    """Normaliza clientes → users (set del documento completo)."""

    summary = "clientes migrados a users"

    def __init__(self, collection="clientes", target_collection="users", label="cliente"):
        super().__init__(collection, target_collection, label)

    def normalize(self, record: SourceRecord, now):
        cliente: LegacyCliente = record.data
        telefone = cliente.get("whatsapp") or cliente.get("telefone")

        user = dict(cliente)
        user["telefone"] = telefone
        user["whatsapp"] = telefone
        user["updatedAt"] = now

        return Stage(SetDocument(self.target_collection, record.id, user))
