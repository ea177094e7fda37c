"""
Suite de tests para la migración de datos y los scripts compartidos.

Los tests NO se conectan a MongoDB ni a servicios externos, solo validan:
- Sintaxis de código Python
- Implementación correcta de la interfaz de migradores
- Normalización y orquestación de pasadas contra un store en memoria
- Payloads y llamadas HTTP de auth y notificaciones (simuladas)
"""
