r"""
Script de migración única para estandarizar datos entre admin y cliente.

Arquitectura:
- mongomigra.py: Orquestador (DataMigration) y punto de entrada CLI
- docstore.py: Lectura de colecciones y escritura en lotes (MongoDB)
- migrators/*.py: Normalización específica por colección (BaseMigrator)
- config.py: Configuración centralizada de colecciones y lotes

Flujo de cada pasada:
1. Carga dinámica del migrador de la colección
2. Lectura completa de la colección de origen
3. Por documento: normalize() → acumular / saltear / registrar error
4. Commit cada BATCH_SIZE operaciones
5. Commit final si quedan operaciones pendientes
6. MigrationResult con éxito, mensaje, registros actualizados y errores

Las tres pasadas (clientes → users, pedidos → userId, enderecos → userId)
corren siempre en orden, aunque alguna falle.

Prerrequisitos:
- Variables MONGO_* configuradas (.env)
- Una sola ejecución activa a la vez (no hay locks sobre los documentos)

Uso:
    python mongomigra.py
"""

from datetime import datetime, timezone
import importlib
import sys

from pymongo import MongoClient
from pymongo.errors import ConnectionFailure

import config
from docstore import MongoBatchWriter, MongoRecordSource
from migrators.base import BaseMigrator, InvalidRecord, Skip
from report import MigrationResult, print_results


def utcnow():
    return datetime.now(timezone.utc)


def connect_to_mongo():
    """
    Establece conexión a MongoDB usando credenciales de config.py.

    Returns:
        tuple: (client, database) de pymongo

    Raises:
        SystemExit: Si no puede conectar
    """
    try:
        print("🔌 Conectando a MongoDB...")
        client = MongoClient(config.MONGO_URI, serverSelectionTimeoutMS=5000)
        client.admin.command("ping")
        db = client[config.MONGO_DATABASE_NAME]
        print("✅ Conexión a MongoDB exitosa")
        return client, db
    except ConnectionFailure as e:
        print("❌ Error de conexión a MongoDB", file=sys.stderr)
        print(f"   Detalle: {e}", file=sys.stderr)
        sys.exit(1)


def load_migrator_for_collection(collection_name):
    """
    Carga dinámicamente el migrador correspondiente a una colección.

    Convención de nombres:
        clientes → migrators.clientes → ClientesMigrator
        pedidos → migrators.pedidos → PedidosMigrator

    Args:
        collection_name: Nombre de la colección de origen

    Returns:
        BaseMigrator: Instancia configurada con target_collection y label

    Raises:
        KeyError: Si la colección no está configurada
        SystemExit: Si no existe el módulo o la clase
    """
    collection_config = config.get_collection_config(collection_name)
    class_name = (
        "".join(word.capitalize() for word in collection_name.split("_")) + "Migrator"
    )

    try:
        module = importlib.import_module(f"migrators.{collection_name}")
        migrator_class = getattr(module, class_name)
    except ModuleNotFoundError:
        print(f"❌ No existe migrador para '{collection_name}'", file=sys.stderr)
        print(f"   Se esperaba: migrators/{collection_name}.py", file=sys.stderr)
        sys.exit(1)
    except AttributeError:
        print(
            f"❌ El módulo migrators.{collection_name} no tiene la clase '{class_name}'",
            file=sys.stderr,
        )
        sys.exit(1)

    if not issubclass(migrator_class, BaseMigrator):
        print(f"❌ {class_name} no hereda de BaseMigrator", file=sys.stderr)
        sys.exit(1)

    return migrator_class(
        collection=collection_name,
        target_collection=collection_config["target_collection"],
        label=collection_config["label"],
    )


class DataMigration:
    """
    Orquesta las pasadas de migración sobre el document store.

    No es un singleton: recibe la fuente de documentos y el writer por
    constructor, así cada ejecución (o test) usa su propio estado.

    Attributes:
        source: Objeto con read(collection) → iterable de SourceRecord
        writer: Objeto con stage(op), commit(), discard() y count
        batch_size (int): Operaciones acumuladas que disparan un commit
        clock: Callable que retorna el timestamp para updatedAt
    """

    def __init__(self, source, writer, batch_size=None, clock=None):
        if batch_size is None:
            batch_size = config.BATCH_SIZE
        if batch_size < 1:
            raise ValueError(f"batch_size debe ser >= 1 (recibido {batch_size})")

        writer_limit = getattr(writer, "max_batch_size", None)
        if writer_limit is not None and batch_size > writer_limit:
            raise ValueError(
                f"batch_size ({batch_size}) supera el máximo del writer ({writer_limit})"
            )

        self.source = source
        self.writer = writer
        self.batch_size = batch_size
        self.clock = clock or utcnow

    def run_pass(self, collection_name, migrator=None):
        """
        Ejecuta una pasada completa sobre una colección.

        Errores por documento (campo faltante o excepción al normalizar /
        acumular) se registran y la pasada continúa. Un fallo al leer la
        colección o al hacer commit termina la pasada como fallida.

        Returns:
            FinalResult: Resultado inmutable de la pasada
        """
        if migrator is None:
            migrator = load_migrator_for_collection(collection_name)

        result = MigrationResult()
        # Cada pasada arranca con un lote vacío
        self.writer.discard()

        print(
            f"\n🚚 Iniciando migración de '{collection_name}' → "
            f"'{migrator.target_collection}'..."
        )

        try:
            for record in self.source.read(collection_name):
                try:
                    outcome = migrator.normalize(record, self.clock())
                    if isinstance(outcome, Skip):
                        continue
                    if isinstance(outcome, InvalidRecord):
                        result.errors.append(outcome.message)
                        continue
                    self.writer.stage(outcome.operation)
                except Exception as e:
                    result.errors.append(
                        f"Error al migrar {migrator.label} "
                        f"{migrator.get_primary_key(record)}: {e}"
                    )
                    continue

                result.records_updated += 1

                if self.writer.count >= self.batch_size:
                    self.writer.commit()
                    print(f"   💾 Migrados {result.records_updated} registros...")

            # Commit del lote final
            if self.writer.count > 0:
                self.writer.commit()

            result.success = True
            result.message = (
                f"Migración concluida: {result.records_updated} {migrator.summary}"
            )
            print(f"✅ {result.message}")

        except Exception as e:
            self.writer.discard()
            result.success = False
            result.message = f"Error en la migración: {e}"
            result.errors.append(str(e))
            print(f"❌ {result.message}", file=sys.stderr)

        return result.finalize()

    def migrate_clientes_to_users(self):
        return self.run_pass("clientes")

    def migrate_pedidos_to_user_id(self):
        return self.run_pass("pedidos")

    def migrate_enderecos_to_user_id(self):
        return self.run_pass("enderecos")

    def run_all_migrations(self):
        """
        Ejecuta todas las pasadas de config.MIGRATION_ORDER.

        Una pasada fallida no impide las siguientes.

        Returns:
            list: Un FinalResult por pasada, en orden de ejecución
        """
        print("🚀 Iniciando migración completa de los datos...")

        results = [self.run_pass(name) for name in config.MIGRATION_ORDER]

        print("\n🏁 Migración completa finalizada")
        return results


def run_migration(migration):
    """Ejecuta todas las pasadas e imprime el resumen."""
    results = migration.run_all_migrations()
    print()
    print_results(results)
    return results


def main():
    """
    Función principal: conecta, migra todo y cierra la conexión.

    El código de salida no distingue entre pasadas exitosas o fallidas;
    el detalle queda en el resumen impreso.
    """
    # UTF-8 en stdout/stderr para emojis en Windows
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

    print("=" * 70)
    print("🚀 MIGRACIÓN DE DATOS MERCADO FÁCIL")
    print("=" * 70)
    print(f"📍 MongoDB: {config.MONGO_DATABASE_NAME}")
    print(f"📦 Tamaño de lote: {config.BATCH_SIZE}")

    client, db = connect_to_mongo()

    try:
        source = MongoRecordSource(client, db)
        writer = MongoBatchWriter(
            client,
            db,
            max_batch_size=config.BATCH_SIZE,
            use_transactions=config.MONGO_USE_TRANSACTIONS,
        )
        run_migration(DataMigration(source, writer))
    finally:
        print("\n🔒 Cerrando conexión...")
        client.close()
        print("✅ Conexión cerrada correctamente")


if __name__ == "__main__":
    main()
