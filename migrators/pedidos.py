"""Migrador para la colección pedidos (clienteId/usuarioId → userId)."""

from .user_ref import UserRefMigrator


class PedidosMigrator(UserRefMigrator):
    summary = "pedidos actualizados con userId"

    def __init__(self, collection="pedidos", target_collection="pedidos", label="pedido"):
        super().__init__(collection, target_collection, label)
