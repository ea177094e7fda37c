"""
Migradores que normalizan las colecciones legacy de Mercado Fácil.

Cada migrador implementa la interfaz BaseMigrator y se carga dinámicamente
en runtime según la colección de origen.

Estructura:
    base.py: Clase abstracta BaseMigrator y resultados de normalize()
    clientes.py: clientes → users
    user_ref.py: Lógica compartida clienteId/usuarioId → userId
    pedidos.py: Migrador para pedidos
    enderecos.py: Migrador para enderecos

Los migradores son instanciados por load_migrator_for_collection() en
mongomigra.py usando importlib.import_module() para carga dinámica.

Interfaz requerida (ver BaseMigrator):
    - normalize(record, now)
    - get_primary_key(record)
"""
