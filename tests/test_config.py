"""
Test de validación para config.py.

Verifica que:
- Configuración carga correctamente
- Funciones helper funcionan según lo documentado
- Manejo de errores es apropiado
"""

import sys
import os

# === RESOLUCIÓN DE PATH ===
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import config
from tests.helpers import collect_tests, run_test_functions


def test_get_collection_config():
    """Verifica que get_collection_config retorna estructura correcta para TODAS las colecciones."""
    print("\n=== TEST 1: get_collection_config ===")

    errors = []
    required_keys = ["target_collection", "record_type", "label", "description"]

    for collection_name in config.COLLECTIONS:
        cfg = config.get_collection_config(collection_name)

        for key in required_keys:
            if key not in cfg:
                errors.append(f"{collection_name}: Falta key '{key}'")

        if cfg.get("record_type") not in ["customer", "owned"]:
            errors.append(f"{collection_name}: record_type debe ser 'customer' u 'owned'")

    assert not errors, f"Errores en configuración: {errors}"
    print(f"✅ Todas las {len(config.COLLECTIONS)} colecciones tienen configuración válida")


def test_target_collections():
    print("\n=== TEST 2: get_target_collection ===")
    assert config.get_target_collection("clientes") == "users"
    assert config.get_target_collection("pedidos") == "pedidos"
    assert config.get_target_collection("enderecos") == "enderecos"
    print("✅ clientes → users, pedidos/enderecos se actualizan in situ")


def test_error_handling():
    """Verifica que errores se manejan apropiadamente."""
    print("\n=== TEST 3: Error handling ===")

    try:
        config.get_collection_config("coleccion_inexistente")
        assert False, "Debería lanzar KeyError"
    except KeyError as e:
        assert "coleccion_inexistente" in str(e)
        assert "disponibles" in str(e).lower()
        print("✅ Error manejado correctamente")


def test_migration_order():
    """Las tres pasadas, en orden fijo, y todas configuradas."""
    print("\n=== TEST 4: MIGRATION_ORDER ===")
    assert config.MIGRATION_ORDER == ["clientes", "pedidos", "enderecos"]
    assert set(config.MIGRATION_ORDER) == set(config.COLLECTIONS)
    print(f"   Orden: {' → '.join(config.MIGRATION_ORDER)}")


def test_batch_size_por_defecto():
    if os.getenv("MIGRATION_BATCH_SIZE"):
        return
    assert config.BATCH_SIZE == 500


def test_env_flag():
    os.environ["MERCADO_TEST_FLAG"] = "true"
    try:
        assert config._env_flag("MERCADO_TEST_FLAG") is True
        os.environ["MERCADO_TEST_FLAG"] = "0"
        assert config._env_flag("MERCADO_TEST_FLAG") is False
    finally:
        del os.environ["MERCADO_TEST_FLAG"]
    assert config._env_flag("MERCADO_TEST_FLAG", default=True) is True


def run_all_tests():
    return run_test_functions(collect_tests(globals()))


# === EJECUCIÓN ===

if __name__ == "__main__":
    print("=" * 70)
    print("🧪 TESTS DE VALIDACIÓN: config.py")
    print("=" * 70)
    sys.exit(0 if run_all_tests() else 1)
