"""
Test de sintaxis para todos los módulos del proyecto.

Valida que no hay errores de sintaxis Python antes de ejecutar la migración.
Útil para detectar errores introducidos durante refactoring.
"""

import py_compile
import os
import sys

# Agregar directorio raíz al path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import config

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def files_to_check():
    # Archivos core (siempre validar)
    core_files = [
        "mongomigra.py",
        "config.py",
        "docstore.py",
        "report.py",
        "models.py",
        "auth.py",
        "send_notification.py",
        "migrators/base.py",
        "migrators/user_ref.py",
    ]
    # Un migrador por colección de config.MIGRATION_ORDER
    migrator_files = [f"migrators/{name}.py" for name in config.MIGRATION_ORDER]
    return core_files + migrator_files


def check_syntax():
    """
    Compila todos los .py del proyecto sin ejecutarlos.

    Retorna:
        tuple: (success: bool, errors: list)
    """
    errors = []
    files = files_to_check()

    print("🔍 Validando sintaxis de archivos Python...")
    print(f"   Total archivos: {len(files)}")

    for filepath in files:
        full_path = os.path.join(PROJECT_ROOT, filepath)

        if not os.path.exists(full_path):
            errors.append(f"Archivo no encontrado: {filepath}")
            print(f"   ❌ {filepath} (no existe)")
            continue

        try:
            py_compile.compile(full_path, doraise=True)
            print(f"   ✅ {filepath}")
        except py_compile.PyCompileError as e:
            errors.append(f"{filepath}: {e}")
            print(f"   ❌ {filepath}: {e}")

    return len(errors) == 0, errors


def test_syntax():
    success, errors = check_syntax()
    assert success, f"Errores de sintaxis: {errors}"


if __name__ == "__main__":
    success, errors = check_syntax()

    print("\n" + "=" * 70)

    if success:
        print("✅ Todos los archivos tienen sintaxis correcta")
        print("=" * 70)
        sys.exit(0)
    else:
        print(f"❌ Errores encontrados: {len(errors)}")
        print("=" * 70)
        for error in errors:
            print(f"   - {error}")
        sys.exit(1)
