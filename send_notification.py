"""
send_notification.py - Envía push notifications de prueba vía FCM

Arma el payload (notification + data + opciones de Android y web push) y
hace un POST al gateway con la server key del proyecto.

Uso:
    python send_notification.py token <FCM_TOKEN>
    python send_notification.py topic <TOPIC_NAME>

Ejemplo:
    python send_notification.py topic promocoes

Requiere FCM_SERVER_KEY en el .env (Firebase Console → Cloud Messaging).
"""

import sys
import time

import requests

import config

ICON = "/icons/icon-192x192.png"
CLICK_ACTION = "FLUTTER_NOTIFICATION_CLICK"
APP_TITLE = "🛒 Mercado Fácil"


def build_token_payload(token, title, body, data=None):
    """Payload para un dispositivo, con las opciones de entrega de Android y web."""
    return {
        "to": token,
        "notification": {
            "title": title,
            "body": body,
            "icon": ICON,
            "badge": ICON,
            "click_action": CLICK_ACTION,
        },
        "data": {**(data or {}), "click_action": CLICK_ACTION},
        "android": {
            "priority": "high",
            "notification": {
                "channel_id": "high_importance_channel",
                "sound": "default",
            },
        },
        "webpush": {
            "headers": {"Urgency": "high"},
            "notification": {
                "icon": ICON,
                "badge": ICON,
                "requireInteraction": True,
            },
        },
    }


def build_topic_payload(topic, title, body, data=None):
    return {
        "to": f"/topics/{topic}",
        "notification": {"title": title, "body": body, "icon": ICON},
        "data": dict(data or {}),
    }


def post_payload(payload, server_key=None, session=None):
    """
    Envía el payload al gateway e imprime status y respuesta.

    Returns:
        requests.Response

    Raises:
        requests.RequestException: Si falla la conexión
    """
    server_key = server_key or config.FCM_SERVER_KEY
    http = session or requests
    try:
        response = http.post(
            config.FCM_URL,
            json=payload,
            headers={
                "Authorization": f"key={server_key}",
                "Content-Type": "application/json",
            },
            timeout=config.REQUEST_TIMEOUT,
        )
    except requests.RequestException as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        raise

    print(f"Status: {response.status_code}")
    print(f"Response: {response.text}")
    return response


def send_notification(token, title, body, data=None, server_key=None, session=None):
    payload = build_token_payload(token, title, body, data)
    return post_payload(payload, server_key=server_key, session=session)


def send_to_topic(topic, title, body, data=None, server_key=None, session=None):
    payload = build_topic_payload(topic, title, body, data)
    return post_payload(payload, server_key=server_key, session=session)


def print_usage():
    print("📖 Cómo usar:")
    print("  python send_notification.py token <FCM_TOKEN>")
    print("  python send_notification.py topic <TOPIC_NAME>")
    print("")
    print("📝 Ejemplos:")
    print("  python send_notification.py token dGhpc19pc19hX3Rva2Vu...")
    print("  python send_notification.py topic promocoes")
    print("  python send_notification.py topic pedidos")


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv

    print("🔥 Script de prueba FCM - Mercado Fácil")
    print("=" * 40)

    if config.FCM_SERVER_KEY == config.FCM_SERVER_KEY_PLACEHOLDER:
        print("❌ ERROR: Configurar FCM_SERVER_KEY en el .env", file=sys.stderr)
        print(
            "1. Abrir: https://console.firebase.google.com/project/"
            f"{config.FCM_PROJECT_ID}/settings/cloudmessaging"
        )
        print('2. Copiar la "Server key"')
        print("3. Guardarla como FCM_SERVER_KEY en el .env")
        sys.exit(1)

    if len(argv) < 2 or argv[0] not in ("token", "topic"):
        print_usage()
        return

    mode, target = argv[0], argv[1]

    try:
        if mode == "token":
            print("📱 Enviando notificación al token indicado...")
            send_notification(
                target,
                APP_TITLE,
                "¡Notificación de prueba FCM!",
                {"type": "test", "timestamp": str(int(time.time() * 1000))},
            )
        else:
            print(f"📢 Enviando notificación al tópico: {target}")
            send_to_topic(
                target,
                APP_TITLE,
                f"Notificación para el tópico {target}",
                {"type": "topic", "topic": target},
            )
    except requests.RequestException:
        sys.exit(1)


if __name__ == "__main__":
    main()
