"""
Resultado de cada pasada de migración y resumen impreso al final.

El orquestador crea un MigrationResult por pasada; una vez terminada la
pasada el resultado se congela con finalize() y ya no se modifica.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class MigrationResult:
    success: bool = False
    message: str = ""
    records_updated: int = 0
    errors: List[str] = field(default_factory=list)

    def finalize(self):
        """Retorna una copia inmutable (errors como tupla) del resultado."""
        return FinalResult(
            success=self.success,
            message=self.message,
            records_updated=self.records_updated,
            errors=tuple(self.errors),
        )


@dataclass(frozen=True)
class FinalResult:
    success: bool
    message: str
    records_updated: int
    errors: tuple

    def to_dict(self):
        return {
            "success": self.success,
            "message": self.message,
            "recordsUpdated": self.records_updated,
            "errors": list(self.errors),
        }


def format_results(results) -> str:
    """
    Arma el resumen de todas las pasadas, una por bloque.

    Ejemplo:
        Migración 1:
          Éxito: True
          Mensaje: Migración concluida: 2 clientes migrados a users
          Registros actualizados: 2
          Errores: ninguno
        ---
    """
    lines = ["=== RESULTADOS DE LA MIGRACIÓN ==="]
    for index, result in enumerate(results, 1):
        lines.append(f"Migración {index}:")
        lines.append(f"  Éxito: {result.success}")
        lines.append(f"  Mensaje: {result.message}")
        lines.append(f"  Registros actualizados: {result.records_updated}")
        lines.append(f"  Errores: {', '.join(result.errors) or 'ninguno'}")
        lines.append("---")
    return "\n".join(lines)


def print_results(results):
    print(format_results(results))
