"""Migrador para la colección enderecos (clienteId/usuarioId → userId)."""

from .user_ref import UserRefMigrator


class EnderecosMigrator(UserRefMigrator):
    summary = "endereços actualizados con userId"

    def __init__(self, collection="enderecos", target_collection="enderecos", label="endereço"):
        super().__init__(collection, target_collection, label)
