"""
Servicio de autenticación compartido entre admin y cliente.

Envuelve la API REST del proveedor de identidad (Identity Toolkit) y
mantiene el estado de autenticación actual:
- AuthState: usuario actual, flag de carga y último error
- subscribe(listener): registra un callback que recibe cada nuevo estado y
  retorna una función para desuscribirse
- login / register / logout: publican un estado "cargando" y luego el
  resultado; si el proveedor falla se publica el error traducido y se
  lanza AuthError

Los códigos de error del proveedor se traducen con una tabla fija de
mensajes para el usuario final (en portugués, el idioma de la app).

Uso:
    service = get_auth_service()
    unsubscribe = service.subscribe(lambda state: print(state.user))
    user = service.login(LoginCredentials("ana@example.com", "secreta"))
    unsubscribe()
"""

from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Callable, List, Optional

import requests

import config

# Mensajes mostrados al usuario por código de error del proveedor
ERROR_MESSAGES = {
    "auth/user-not-found": "Usuário não encontrado.",
    "auth/wrong-password": "Senha incorreta.",
    "auth/email-already-in-use": "Este email já está em uso.",
    "auth/weak-password": "A senha deve ter pelo menos 6 caracteres.",
    "auth/invalid-email": "Email inválido.",
    "auth/user-disabled": "Esta conta foi desabilitada.",
    "auth/too-many-requests": "Muitas tentativas. Tente novamente mais tarde.",
    "auth/network-request-failed": "Erro de conexão. Verifique sua internet.",
    "auth/invalid-credential": "Credenciais inválidas.",
    "auth/operation-not-allowed": "Operação não permitida.",
    "auth/requires-recent-login": "Por segurança, faça login novamente.",
}
DEFAULT_ERROR_MESSAGE = "Erro de autenticação. Tente novamente."

# Errores de la API REST → códigos de error del SDK
REST_ERROR_CODES = {
    "EMAIL_NOT_FOUND": "auth/user-not-found",
    "INVALID_PASSWORD": "auth/wrong-password",
    "EMAIL_EXISTS": "auth/email-already-in-use",
    "WEAK_PASSWORD": "auth/weak-password",
    "INVALID_EMAIL": "auth/invalid-email",
    "MISSING_EMAIL": "auth/invalid-email",
    "USER_DISABLED": "auth/user-disabled",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "auth/too-many-requests",
    "INVALID_LOGIN_CREDENTIALS": "auth/invalid-credential",
    "OPERATION_NOT_ALLOWED": "auth/operation-not-allowed",
    "PASSWORD_LOGIN_DISABLED": "auth/operation-not-allowed",
    "CREDENTIAL_TOO_OLD_LOGIN_AGAIN": "auth/requires-recent-login",
    "TOKEN_EXPIRED": "auth/requires-recent-login",
}


def get_error_message(error_code):
    return ERROR_MESSAGES.get(error_code, DEFAULT_ERROR_MESSAGE)


def map_rest_error(rest_message):
    """
    Convierte el mensaje de error REST en código del SDK.

    El proveedor puede agregar detalle después de ' : '
    (ej: 'WEAK_PASSWORD : Password should be at least 6 characters').
    """
    key = (rest_message or "").split(" : ")[0].strip()
    return REST_ERROR_CODES.get(key, "auth/unknown")


class AuthError(Exception):
    """Error de autenticación con mensaje ya traducido para el usuario."""

    def __init__(self, message, code=None):
        super().__init__(message)
        self.code = code


@dataclass(frozen=True)
class AuthUser:
    uid: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    photo_url: Optional[str] = None
    email_verified: bool = False

    @classmethod
    def from_provider(cls, payload):
        return cls(
            uid=payload["localId"],
            email=payload.get("email"),
            display_name=payload.get("displayName"),
            photo_url=payload.get("photoUrl"),
            email_verified=bool(payload.get("emailVerified", False)),
        )


@dataclass(frozen=True)
class AuthState:
    user: Optional[AuthUser] = None
    loading: bool = True
    error: Optional[str] = None


@dataclass(frozen=True)
class LoginCredentials:
    email: str
    password: str


@dataclass(frozen=True)
class RegisterCredentials:
    email: str
    password: str
    display_name: Optional[str] = None


AuthListener = Callable[[AuthState], None]


class AuthService:
    """
    Estado de autenticación + operaciones sobre el proveedor de identidad.

    Attributes:
        api_key (str): API key del proyecto en el proveedor
        base_url (str): URL base de la API REST
        session: requests.Session usada para todas las llamadas
    """

    def __init__(self, api_key, base_url=None, session=None, timeout=None):
        self.api_key = api_key
        self.base_url = (base_url or config.AUTH_BASE_URL).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout or config.REQUEST_TIMEOUT
        self._state = AuthState()
        self._listeners: List[AuthListener] = []
        self._id_token = None
        # Sin sesión previa: el proveedor informa "sin usuario"
        self._on_auth_state_changed(None)

    # =========================================================================
    # SUSCRIPCIONES
    # =========================================================================

    def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        """Registra listener y retorna la función para desuscribirlo."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def get_current_state(self) -> AuthState:
        return replace(self._state)

    def _set_state(self, **changes):
        self._state = replace(self._state, **changes)
        self._notify_listeners()

    def _notify_listeners(self):
        state = self.get_current_state()
        # Copia: un listener puede desuscribirse durante la notificación
        for listener in list(self._listeners):
            listener(state)

    def _on_auth_state_changed(self, user):
        self._state = AuthState(user=user, loading=False, error=None)
        self._notify_listeners()

    # =========================================================================
    # OPERACIONES
    # =========================================================================

    def login(self, credentials: LoginCredentials) -> AuthUser:
        self._set_state(loading=True, error=None)
        try:
            payload = self._post(
                "accounts:signInWithPassword",
                {
                    "email": credentials.email,
                    "password": credentials.password,
                    "returnSecureToken": True,
                },
            )
            user = self._lookup_user(payload)
        except Exception as e:
            self._fail(e)
            raise

        self._on_auth_state_changed(user)
        return user

    def register(self, credentials: RegisterCredentials) -> AuthUser:
        self._set_state(loading=True, error=None)
        try:
            payload = self._post(
                "accounts:signUp",
                {
                    "email": credentials.email,
                    "password": credentials.password,
                    "returnSecureToken": True,
                },
            )
            if credentials.display_name:
                payload = {
                    **payload,
                    **self._post(
                        "accounts:update",
                        {
                            "idToken": payload["idToken"],
                            "displayName": credentials.display_name,
                            "returnSecureToken": True,
                        },
                    ),
                }
            user = self._lookup_user(payload)
        except Exception as e:
            self._fail(e)
            raise

        self._on_auth_state_changed(user)
        return user

    def logout(self):
        self._set_state(loading=True, error=None)
        # Cerrar sesión es local: se descarta el token del usuario
        self._id_token = None
        self._on_auth_state_changed(None)

    def get_current_user(self) -> Optional[AuthUser]:
        return self._state.user

    def is_authenticated(self) -> bool:
        return self._state.user is not None

    def is_loading(self) -> bool:
        return self._state.loading

    def get_error(self) -> Optional[str]:
        return self._state.error

    def clear_error(self):
        self._set_state(error=None)

    # =========================================================================
    # MÉTODOS PRIVADOS
    # =========================================================================

    def _fail(self, error: Exception):
        # Solo los AuthError traen mensaje traducido; el resto usa el genérico
        message = str(error) if isinstance(error, AuthError) else DEFAULT_ERROR_MESSAGE
        self._set_state(error=message, loading=False)

    def _lookup_user(self, payload):
        id_token = payload.get("idToken")
        if id_token:
            lookup = self._post("accounts:lookup", {"idToken": id_token})
            users = lookup.get("users") or []
            if users:
                payload = {**payload, **users[0]}

        user = AuthUser.from_provider(payload)
        self._id_token = id_token
        return user

    def _post(self, endpoint, body):
        url = f"{self.base_url}/{endpoint}"
        try:
            response = self.session.post(
                url, params={"key": self.api_key}, json=body, timeout=self.timeout
            )
        except requests.RequestException as e:
            code = "auth/network-request-failed"
            raise AuthError(get_error_message(code), code) from e

        if response.status_code >= 400:
            try:
                rest_message = response.json().get("error", {}).get("message")
            except ValueError:
                rest_message = None
            code = map_rest_error(rest_message)
            raise AuthError(get_error_message(code), code)

        try:
            return response.json()
        except ValueError as e:
            raise AuthError(DEFAULT_ERROR_MESSAGE, "auth/unknown") from e


@lru_cache(maxsize=1)
def get_auth_service() -> AuthService:
    """Instancia compartida configurada desde config.py."""
    return AuthService(config.AUTH_API_KEY)


def require_auth(callback, service=None):
    service = service or get_auth_service()
    if service.is_authenticated():
        return callback()
    print("⚠️  Usuario no autenticado")
    return None


def require_admin(callback, service=None):
    service = service or get_auth_service()
    user = service.get_current_user()
    if user and user.email and "@admin." in user.email:
        return callback()
    print("⚠️  Acceso denegado: el usuario no es admin")
    return None
