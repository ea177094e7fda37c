"""
Configuración centralizada para la migración de datos de Mercado Fácil.

ARQUITECTURA:
Una pasada de migración por colección de origen, en orden fijo:
- clientes → users: Unifica clientes legacy en la colección users
- pedidos → userId: Normaliza el dueño del pedido (clienteId/usuarioId → userId)
- enderecos → userId: Normaliza el dueño del endereço

Además contiene la configuración de los servicios externos que usan los
scripts compartidos:
- Proveedor de identidad (auth.py)
- Gateway de push notifications (send_notification.py)

USO DE LAS FUNCIONES HELPER:
    # Obtener configuración de colección
    cfg = get_collection_config('pedidos')
    destino = cfg['target_collection']  # 'pedidos'

    # Colección destino de una pasada
    get_target_collection('clientes')  # 'users'
"""

import os
from dotenv import load_dotenv

# Carga las variables del archivo .env en las variables de entorno del sistema
load_dotenv(override=True)


def _env_flag(name, default=False):
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "si", "on")


# --- Configuración de MongoDB (document store) ---
MONGO_URI = os.getenv("MONGO_URI") or (
    f"mongodb://{os.getenv('MONGO_USER')}:{os.getenv('MONGO_PASSWORD')}"
    f"@{os.getenv('MONGO_HOST') or 'localhost'}:{os.getenv('MONGO_PORT') or '27017'}/"
    f"?authSource={os.getenv('MONGO_AUTH_SOURCE') or 'admin'}&readPreference=primary"
)
MONGO_DATABASE_NAME = os.getenv("MONGO_DATABASE_NAME") or "mercadofacil"

# Cada commit corre dentro de una transacción multi-documento (requiere replica set).
# Con false un commit fallido puede dejar el lote aplicado a medias.
MONGO_USE_TRANSACTIONS = _env_flag("MONGO_USE_TRANSACTIONS", default=True)

# --- Configuración de Migración ---
# Máximo de operaciones por lote antes de hacer commit
BATCH_SIZE = int(os.getenv("MIGRATION_BATCH_SIZE") or 500)

# --- Configuración por colección ---
# Cada colección de origen define:
# - target_collection: Colección donde se escriben los documentos normalizados
# - record_type: 'customer' (set del documento completo) u 'owned' (update parcial de userId)
# - label: Nombre en singular usado en mensajes de error
# - description: Descripción de negocio de la pasada

COLLECTIONS = {
    "clientes": {
        "target_collection": "users",
        "record_type": "customer",
        "label": "cliente",
        "description": "Clientes legacy copiados a users con telefone/whatsapp sincronizados",
    },
    "pedidos": {
        "target_collection": "pedidos",
        "record_type": "owned",
        "label": "pedido",
        "description": "Pedidos con clienteId/usuarioId normalizados a userId",
    },
    "enderecos": {
        "target_collection": "enderecos",
        "record_type": "owned",
        "label": "endereço",
        "description": "Endereços con clienteId/usuarioId normalizados a userId",
    },
}

# --- Orden de Migración ---
# Las pasadas se ejecutan siempre en este orden, aunque una anterior falle.
MIGRATION_ORDER = [
    "clientes",
    "pedidos",
    "enderecos",
]

# --- Proveedor de identidad (auth.py) ---
AUTH_API_KEY = os.getenv("AUTH_API_KEY") or ""
AUTH_BASE_URL = os.getenv("AUTH_BASE_URL") or "https://identitytoolkit.googleapis.com/v1"

# --- Push notifications (send_notification.py) ---
FCM_SERVER_KEY_PLACEHOLDER = "SUBSTITUA_PELA_SERVER_KEY_DO_FIREBASE_CONSOLE"
FCM_SERVER_KEY = os.getenv("FCM_SERVER_KEY") or FCM_SERVER_KEY_PLACEHOLDER
FCM_URL = os.getenv("FCM_URL") or "https://fcm.googleapis.com/fcm/send"
FCM_PROJECT_ID = os.getenv("FCM_PROJECT_ID") or "mercadofacilweb"

REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT") or 30)  # segundos


# --- Funciones Helper ---


def get_collection_config(collection_name: str) -> dict:
    """
    Obtiene la configuración de una colección por nombre.

    Args:
        collection_name: Nombre de la colección de origen (ej: 'pedidos')

    Returns:
        dict: Configuración con keys target_collection, record_type,
              label y description

    Raises:
        KeyError: Si la colección no está configurada

    Ejemplo:
        >>> get_collection_config('clientes')['target_collection']
        'users'
    """
    if collection_name not in COLLECTIONS:
        available = ", ".join(COLLECTIONS.keys())
        raise KeyError(
            f"Colección '{collection_name}' no está configurada.\n"
            f"Colecciones disponibles: {available}"
        )
    return COLLECTIONS[collection_name]


def get_target_collection(collection_name: str) -> str:
    """Retorna la colección destino de la pasada sobre collection_name."""
    return get_collection_config(collection_name)["target_collection"]
